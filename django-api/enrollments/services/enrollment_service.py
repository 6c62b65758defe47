"""Enrollment service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Every status change and its seat counter update run inside one unit of work.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from enrollments.domain import (
    Email,
    Enrollment,
    EnrollmentDraft,
    EnrollmentFilter,
    EnrollmentId,
    EnrollmentSource,
    EnrollmentStats,
    EnrollmentStatus,
    Page,
    Pagination,
    Training,
    TrainingId,
)
from enrollments.domain import lifecycle
from enrollments.domain.errors import (
    CapacityExceededError,
    CapacityFullError,
    EnrollmentNotFoundError,
    InvalidIdError,
    TrainingNotFoundError,
    ValidationError,
)
from enrollments.domain.lifecycle import LifecycleEvent
from enrollments.services.seat_ledger import SeatLedger
from enrollments.stores.interfaces import EnrollmentStore, TrainingStore, UnitOfWork

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("student_name", "email", "phone", "training_id")

# Fields a generic update may change. Status and its timestamps only move
# through the lifecycle operations.
UPDATABLE_FIELDS = (
    "student_name",
    "email",
    "phone",
    "whatsapp_number",
    "training_id",
    "source",
    "notes",
    "admin_notes",
)


def parse_enrollment_id(value: str) -> EnrollmentId:
    try:
        return EnrollmentId.from_string(value)
    except (TypeError, ValueError):
        raise InvalidIdError() from None


def parse_training_id(value: str) -> TrainingId:
    try:
        return TrainingId.from_string(value)
    except (TypeError, ValueError):
        raise InvalidIdError() from None


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return str(value).strip() if value is not None else ""


def _email(value: str) -> Email:
    try:
        return Email(value)
    except ValueError:
        raise ValidationError("Please provide a valid email") from None


def _enum(enum_cls, value, default):
    if value in (None, ""):
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {enum_cls.__name__} '{value}'") from None


class EnrollmentService:
    """Service for enrollment records and their status lifecycle."""

    def __init__(
        self,
        enrollments: EnrollmentStore,
        trainings: TrainingStore,
        unit_of_work: Callable[[], UnitOfWork],
        ledger: SeatLedger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._enrollments = enrollments
        self._trainings = trainings
        self._unit_of_work = unit_of_work
        self._ledger = ledger or SeatLedger(trainings)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # Queries

    def list_enrollments(
        self, criteria: EnrollmentFilter, pagination: Pagination
    ) -> tuple[Page[Enrollment], EnrollmentStats]:
        """Return a page of matching enrollments and the global status counts."""
        page = self._enrollments.list_enrollments(criteria, pagination)
        return page, self._enrollments.stats()

    def export_enrollments(self, criteria: EnrollmentFilter) -> list[Enrollment]:
        """Return every matching enrollment, newest first."""
        return list(self._enrollments.list_enrollments(criteria).items)

    def get_enrollment(self, enrollment_id: str) -> Enrollment:
        """Return an enrollment by ID.

        Raises:
            InvalidIdError: If the enrollment_id is not a valid UUID.
            EnrollmentNotFoundError: If the enrollment does not exist.
        """
        enrollment = self._enrollments.get_enrollment(parse_enrollment_id(enrollment_id))
        if enrollment is None:
            raise EnrollmentNotFoundError()
        return enrollment

    # Creation

    def _draft(self, data: dict[str, Any], **overrides: Any) -> EnrollmentDraft:
        if not all(_text(data, key) for key in REQUIRED_FIELDS):
            raise ValidationError(
                "Please provide student name, email, phone and training"
            )
        fields = {
            "student_name": _text(data, "student_name"),
            "email": _email(_text(data, "email")),
            "phone": _text(data, "phone"),
            "training_id": parse_training_id(_text(data, "training_id")),
            "whatsapp_number": _text(data, "whatsapp_number"),
            "notes": _text(data, "notes"),
            "admin_notes": _text(data, "admin_notes"),
            **overrides,
        }
        if "status" not in fields:
            fields["status"] = _enum(EnrollmentStatus, data.get("status"), EnrollmentStatus.PENDING)
        if "source" not in fields:
            fields["source"] = _enum(EnrollmentSource, data.get("source"), EnrollmentSource.MANUAL)
        return EnrollmentDraft(**fields)

    def create_enrollment(self, data: dict[str, Any], admin_id: int | None = None) -> Enrollment:
        """Create an enrollment on behalf of a student.

        Status defaults to pending and source to manual, both overridable.
        A record created directly as approved takes a seat like an approval.

        Raises:
            ValidationError: If a required field is missing.
            TrainingNotFoundError: If the training does not exist.
            CapacityExceededError: If the training has no seats left.
        """
        draft = self._draft(data, enrolled_by_id=admin_id)
        if draft.status is EnrollmentStatus.APPROVED:
            draft = replace(draft, approved_at=self._clock())
        elif draft.status is EnrollmentStatus.COMPLETED:
            draft = replace(draft, completed_at=self._clock())
        with self._unit_of_work():
            training = self._trainings.get_training(draft.training_id)
            if training is None:
                raise TrainingNotFoundError()
            if not self._ledger.has_room(training):
                logger.warning("Manual enrollment refused, training %s is full", training.id)
                raise CapacityExceededError()
            enrollment = self._enrollments.create_enrollment(draft)
            if enrollment.status is EnrollmentStatus.APPROVED:
                self._ledger.apply(training.id, 1)
        logger.info(
            "Enrollment %s created manually for training %s", enrollment.id, training.id
        )
        return enrollment

    def submit_enrollment(self, data: dict[str, Any]) -> tuple[Enrollment, Training]:
        """Accept a public enrollment request.

        Status is always pending and source always website.

        Raises:
            ValidationError: If a required field is missing.
            TrainingNotFoundError: If the training does not exist or is not
                active and published.
            CapacityFullError: If the training is fully booked.
        """
        draft = self._draft(
            data,
            status=EnrollmentStatus.PENDING,
            source=EnrollmentSource.WEBSITE,
            admin_notes="",
        )
        if not draft.whatsapp_number:
            draft = replace(draft, whatsapp_number=draft.phone)
        with self._unit_of_work():
            training = self._trainings.get_training(draft.training_id)
            if training is None or not training.is_available:
                raise TrainingNotFoundError("Training program not found or not available")
            if not self._ledger.has_room(training):
                logger.warning("Public enrollment refused, training %s is full", training.id)
                raise CapacityFullError()
            enrollment = self._enrollments.create_enrollment(draft)
        logger.info("Enrollment %s submitted for training %s", enrollment.id, training.id)
        return enrollment, training

    # Mutation

    def update_enrollment(self, enrollment_id: str, data: dict[str, Any]) -> Enrollment:
        """Merge `data` into an enrollment.

        Moving an approved enrollment to another program moves its seat too.

        Raises:
            InvalidIdError: If an ID is not a valid UUID.
            EnrollmentNotFoundError: If the enrollment does not exist.
            TrainingNotFoundError: If the new training does not exist.
            CapacityExceededError: If an approved enrollment moves to a full
                training.
            ValidationError: If a changed field is invalid.
        """
        eid = parse_enrollment_id(enrollment_id)
        changes: dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in data:
                continue
            value = _text(data, key)
            if key in REQUIRED_FIELDS and not value:
                raise ValidationError(f"{key.replace('_', ' ').capitalize()} cannot be empty")
            if key == "email":
                changes[key] = _email(value)
            elif key == "training_id":
                changes[key] = parse_training_id(value)
            elif key == "source":
                changes[key] = _enum(EnrollmentSource, value, EnrollmentSource.MANUAL)
            else:
                changes[key] = value

        with self._unit_of_work():
            current = self._enrollments.get_enrollment_for_update(eid)
            if current is None:
                raise EnrollmentNotFoundError()
            updated = replace(current, **changes)
            moved = updated.training_id != current.training_id
            if moved:
                target = self._trainings.get_training(updated.training_id)
                if target is None:
                    raise TrainingNotFoundError()
                if current.status is EnrollmentStatus.APPROVED and not self._ledger.has_room(target):
                    logger.warning("Move of enrollment %s refused, training %s is full", eid, target.id)
                    raise CapacityExceededError()
            self._enrollments.save_enrollment(updated)
            if moved and current.status is EnrollmentStatus.APPROVED:
                self._ledger.apply(current.training_id, -1)
                self._ledger.apply(updated.training_id, 1)
        logger.info("Enrollment %s updated: %s", eid, ", ".join(sorted(changes)) or "-")
        return self.get_enrollment(enrollment_id)

    def _transition(
        self, event: LifecycleEvent, enrollment_id: str, admin_notes: str | None
    ) -> Enrollment:
        eid = parse_enrollment_id(enrollment_id)
        with self._unit_of_work():
            current = self._enrollments.get_enrollment_for_update(eid)
            if current is None:
                raise EnrollmentNotFoundError()
            transition = lifecycle.TRANSITIONS[event](current, self._clock(), admin_notes)
            self._enrollments.save_enrollment(transition.enrollment)
            self._ledger.apply(current.training_id, transition.seat_delta)
        logger.info(
            "Enrollment %s %s: %s -> %s",
            eid,
            event.value,
            transition.previous.value,
            transition.enrollment.status.value,
        )
        return self.get_enrollment(enrollment_id)

    def approve_enrollment(self, enrollment_id: str, admin_notes: str | None = None) -> Enrollment:
        """Approve an enrollment, taking a seat unless it was completed.

        Raises:
            AlreadyApprovedError: If the enrollment is already approved.
        """
        return self._transition(LifecycleEvent.APPROVE, enrollment_id, admin_notes)

    def reject_enrollment(self, enrollment_id: str, admin_notes: str | None = None) -> Enrollment:
        """Reject an enrollment, releasing its seat if it was approved."""
        return self._transition(LifecycleEvent.REJECT, enrollment_id, admin_notes)

    def complete_enrollment(self, enrollment_id: str, admin_notes: str | None = None) -> Enrollment:
        """Mark an enrollment completed. The seat stays counted."""
        return self._transition(LifecycleEvent.COMPLETE, enrollment_id, admin_notes)

    def delete_enrollment(self, enrollment_id: str) -> None:
        """Delete an enrollment, releasing its seat if it was approved."""
        eid = parse_enrollment_id(enrollment_id)
        with self._unit_of_work():
            current = self._enrollments.get_enrollment_for_update(eid)
            if current is None:
                raise EnrollmentNotFoundError()
            transition = lifecycle.delete(current)
            self._enrollments.delete_enrollment(eid)
            self._ledger.apply(current.training_id, transition.seat_delta)
        logger.info("Enrollment %s deleted (was %s)", eid, transition.previous.value)
