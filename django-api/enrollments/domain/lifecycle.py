"""Enrollment status state machine.

Transitions are pure: they take an enrollment and return its next state
together with the change to apply to the program's seat counter. Callers
persist both inside one unit of work.

    pending / rejected --approve--> approved    seats +1
    completed          --approve--> approved    seats  0
    approved           --approve--> AlreadyApprovedError
    any                --reject---> rejected    seats -1 if it was approved
    any                --complete-> completed   seats  0
    any                --delete---> (removed)   seats -1 if it was approved
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from enrollments.domain.errors import AlreadyApprovedError
from enrollments.domain.models import Enrollment, EnrollmentStatus


class LifecycleEvent(Enum):
    APPROVE = "approve"
    REJECT = "reject"
    COMPLETE = "complete"
    DELETE = "delete"


# Only these statuses consume a seat when approved. A completed enrollment
# was counted when it was approved and never released.
SEAT_TAKING_SOURCES = frozenset({EnrollmentStatus.PENDING, EnrollmentStatus.REJECTED})


@dataclass(frozen=True)
class Transition:
    """Outcome of a lifecycle event."""

    previous: EnrollmentStatus
    enrollment: Enrollment | None
    seat_delta: int


def seat_delta(event: LifecycleEvent, previous: EnrollmentStatus) -> int:
    """Change to the program's seat counter caused by `event` from `previous`.

    Completing never touches the counter, and only a literal prior status of
    approved releases a seat on reject or delete.
    """
    if event is LifecycleEvent.APPROVE:
        return 1 if previous in SEAT_TAKING_SOURCES else 0
    if event in (LifecycleEvent.REJECT, LifecycleEvent.DELETE):
        return -1 if previous is EnrollmentStatus.APPROVED else 0
    return 0


def _notes(enrollment: Enrollment, admin_notes: str | None) -> str:
    return admin_notes if admin_notes else enrollment.admin_notes


def approve(
    enrollment: Enrollment, now: datetime, admin_notes: str | None = None
) -> Transition:
    if enrollment.status is EnrollmentStatus.APPROVED:
        raise AlreadyApprovedError()
    return Transition(
        previous=enrollment.status,
        enrollment=replace(
            enrollment,
            status=EnrollmentStatus.APPROVED,
            approved_at=now,
            admin_notes=_notes(enrollment, admin_notes),
        ),
        seat_delta=seat_delta(LifecycleEvent.APPROVE, enrollment.status),
    )


def reject(
    enrollment: Enrollment, now: datetime, admin_notes: str | None = None
) -> Transition:
    return Transition(
        previous=enrollment.status,
        enrollment=replace(
            enrollment,
            status=EnrollmentStatus.REJECTED,
            admin_notes=_notes(enrollment, admin_notes),
        ),
        seat_delta=seat_delta(LifecycleEvent.REJECT, enrollment.status),
    )


def complete(
    enrollment: Enrollment, now: datetime, admin_notes: str | None = None
) -> Transition:
    return Transition(
        previous=enrollment.status,
        enrollment=replace(
            enrollment,
            status=EnrollmentStatus.COMPLETED,
            completed_at=now,
            admin_notes=_notes(enrollment, admin_notes),
        ),
        seat_delta=seat_delta(LifecycleEvent.COMPLETE, enrollment.status),
    )


def delete(enrollment: Enrollment) -> Transition:
    return Transition(
        previous=enrollment.status,
        enrollment=None,
        seat_delta=seat_delta(LifecycleEvent.DELETE, enrollment.status),
    )


TRANSITIONS = {
    LifecycleEvent.APPROVE: approve,
    LifecycleEvent.REJECT: reject,
    LifecycleEvent.COMPLETE: complete,
}
