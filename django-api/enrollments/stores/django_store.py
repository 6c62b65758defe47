"""Django ORM implementation of the stores."""

import logging
from types import TracebackType
from typing import Any

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F, Q, QuerySet

from enrollments import models
from enrollments.domain import (
    AdminRef,
    Capacity,
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
    TrainingRef,
)
from enrollments.stores.interfaces import EnrollmentStore, TrainingStore, UnitOfWork

logger = logging.getLogger(__name__)

TRAINING_FIELDS = {
    "title",
    "slug",
    "description",
    "level",
    "category",
    "mode",
    "language",
    "duration",
    "price",
    "original_price",
    "max_participants",
    "start_date",
    "end_date",
    "instructor",
    "location",
    "is_active",
    "is_published",
}


def to_training(row: models.Training) -> Training:
    return Training(
        id=TrainingId(row.id),
        title=row.title,
        slug=row.slug,
        description=row.description,
        duration=row.duration,
        price=row.price,
        max_participants=Capacity(row.max_participants or 0),
        current_enrollments=row.current_enrollments,
        is_active=row.is_active,
        is_published=row.is_published,
        created_at=row.created_at,
        updated_at=row.updated_at,
        level=row.level,
        category=row.category,
        mode=row.mode,
        language=row.language,
        original_price=row.original_price,
        start_date=row.start_date,
        end_date=row.end_date,
        instructor=row.instructor,
        location=row.location,
    )


def _admin_ref(user) -> AdminRef | None:
    if user is None:
        return None
    return AdminRef(
        id=user.pk,
        name=user.get_full_name() or user.get_username(),
        email=user.email,
    )


def to_enrollment(row: models.Enrollment, training: TrainingRef | None = None) -> Enrollment:
    return Enrollment(
        id=EnrollmentId(row.id),
        student_name=row.student_name,
        email=Email(row.email),
        phone=row.phone,
        training_id=TrainingId(row.training_id),
        status=EnrollmentStatus(row.status),
        source=EnrollmentSource(row.source),
        created_at=row.created_at,
        updated_at=row.updated_at,
        whatsapp_number=row.whatsapp_number,
        notes=row.notes,
        admin_notes=row.admin_notes,
        enrolled_by=_admin_ref(row.enrolled_by),
        approved_at=row.approved_at,
        completed_at=row.completed_at,
        training=training,
    )


def search_q(term: str, *fields: str) -> Q:
    """OR together case-insensitive substring matches of `term` on `fields`."""
    query = Q()
    for field in fields:
        query |= Q(**{f"{field}__icontains": term})
    return query


def _page(qs: QuerySet, pagination: Pagination | None) -> tuple[QuerySet, int, Pagination]:
    total = qs.count()
    if pagination is None:
        return qs, total, Pagination(page=1, limit=max(total, 1))
    return qs[pagination.offset : pagination.offset + pagination.limit], total, pagination


class DjangoTrainingStore(TrainingStore):
    """Relational training store using Django ORM."""

    def list_trainings(
        self, filters: dict[str, Any], pagination: Pagination | None = None
    ) -> Page[Training]:
        filters = dict(filters)
        search = filters.pop("search", "")
        qs = models.Training.objects.filter(**filters).order_by("-created_at")
        if search:
            qs = qs.filter(search_q(search, "title", "description"))
        rows, total, pagination = _page(qs, pagination)
        return Page(
            items=tuple(to_training(row) for row in rows),
            total=total,
            pagination=pagination,
        )

    def list_available(self, filters: dict[str, Any]) -> list[Training]:
        qs = models.Training.objects.filter(
            is_active=True, is_published=True, **filters
        ).order_by("price")
        return [to_training(row) for row in qs]

    def get_training(self, training_id: TrainingId) -> Training | None:
        row = models.Training.objects.filter(pk=training_id.value).first()
        return to_training(row) if row else None

    def get_by_slug(self, slug: str) -> Training | None:
        row = models.Training.objects.filter(slug=slug).first()
        return to_training(row) if row else None

    def slug_exists(self, slug: str, exclude: TrainingId | None = None) -> bool:
        qs = models.Training.objects.filter(slug=slug)
        if exclude is not None:
            qs = qs.exclude(pk=exclude.value)
        return qs.exists()

    def create_training(self, fields: dict[str, Any]) -> Training:
        row = models.Training.objects.create(
            **{k: v for k, v in fields.items() if k in TRAINING_FIELDS}
        )
        return to_training(row)

    def update_training(self, training_id: TrainingId, fields: dict[str, Any]) -> Training:
        row = models.Training.objects.get(pk=training_id.value)
        for key, value in fields.items():
            if key in TRAINING_FIELDS:
                setattr(row, key, value)
        row.save()
        return to_training(row)

    def delete_training(self, training_id: TrainingId) -> None:
        models.Training.objects.filter(pk=training_id.value).delete()

    def adjust_enrollments(self, training_id: TrainingId, delta: int) -> None:
        qs = models.Training.objects.filter(pk=training_id.value)
        if delta < 0:
            qs = qs.filter(current_enrollments__gte=-delta)
        updated = qs.update(current_enrollments=F("current_enrollments") + delta)
        if not updated:
            logger.warning(
                "Seat counter of training %s not adjusted by %+d", training_id, delta
            )

    def count_trainings(self, active_only: bool = False) -> int:
        qs = models.Training.objects.all()
        if active_only:
            qs = qs.filter(is_active=True)
        return qs.count()

    def resolve_refs(self, training_ids: set[TrainingId]) -> dict[TrainingId, TrainingRef]:
        rows = models.Training.objects.filter(
            pk__in=[t.value for t in training_ids]
        ).values("id", "title", "slug", "price", "duration")
        return {
            TrainingId(row["id"]): TrainingRef(
                id=TrainingId(row["id"]),
                title=row["title"],
                slug=row["slug"],
                price=row["price"],
                duration=row["duration"],
            )
            for row in rows
        }


class DjangoEnrollmentStore(EnrollmentStore):
    """Relational enrollment store using Django ORM."""

    def __init__(self, trainings: TrainingStore | None = None) -> None:
        self._trainings = trainings or DjangoTrainingStore()

    def _base(self) -> QuerySet:
        return models.Enrollment.objects.select_related("enrolled_by")

    def _resolve(self, rows) -> list[Enrollment]:
        rows = list(rows)
        refs = self._trainings.resolve_refs({TrainingId(r.training_id) for r in rows})
        return [to_enrollment(r, refs.get(TrainingId(r.training_id))) for r in rows]

    def list_enrollments(
        self, criteria: EnrollmentFilter, pagination: Pagination | None = None
    ) -> Page[Enrollment]:
        qs = self._base().order_by("-created_at", "-id")
        if criteria.status is not None:
            qs = qs.filter(status=criteria.status.value)
        if criteria.training_id is not None:
            qs = qs.filter(training_id=criteria.training_id.value)
        if criteria.source is not None:
            qs = qs.filter(source=criteria.source.value)
        if criteria.search:
            qs = qs.filter(search_q(criteria.search, "student_name", "email", "phone"))
        rows, total, pagination = _page(qs, pagination)
        return Page(items=tuple(self._resolve(rows)), total=total, pagination=pagination)

    def get_enrollment(self, enrollment_id: EnrollmentId) -> Enrollment | None:
        row = self._base().filter(pk=enrollment_id.value).first()
        return self._resolve([row])[0] if row else None

    def get_enrollment_for_update(self, enrollment_id: EnrollmentId) -> Enrollment | None:
        row = (
            models.Enrollment.objects.select_for_update()
            .filter(pk=enrollment_id.value)
            .first()
        )
        return to_enrollment(row) if row else None

    def create_enrollment(self, draft: EnrollmentDraft) -> Enrollment:
        enrolled_by = None
        if draft.enrolled_by_id is not None:
            enrolled_by = get_user_model().objects.filter(pk=draft.enrolled_by_id).first()
        row = models.Enrollment.objects.create(
            student_name=draft.student_name,
            email=draft.email.value,
            phone=draft.phone,
            whatsapp_number=draft.whatsapp_number,
            training_id=draft.training_id.value,
            status=draft.status.value,
            source=draft.source.value,
            notes=draft.notes,
            admin_notes=draft.admin_notes,
            enrolled_by=enrolled_by,
            approved_at=draft.approved_at,
            completed_at=draft.completed_at,
        )
        return self._resolve([row])[0]

    def save_enrollment(self, enrollment: Enrollment) -> Enrollment:
        row = models.Enrollment.objects.get(pk=enrollment.id.value)
        row.student_name = enrollment.student_name
        row.email = enrollment.email.value
        row.phone = enrollment.phone
        row.whatsapp_number = enrollment.whatsapp_number
        row.training_id = enrollment.training_id.value
        row.status = enrollment.status.value
        row.source = enrollment.source.value
        row.notes = enrollment.notes
        row.admin_notes = enrollment.admin_notes
        row.approved_at = enrollment.approved_at
        row.completed_at = enrollment.completed_at
        row.save()
        return self._resolve([row])[0]

    def delete_enrollment(self, enrollment_id: EnrollmentId) -> None:
        models.Enrollment.objects.filter(pk=enrollment_id.value).delete()

    def stats(self) -> EnrollmentStats:
        qs = models.Enrollment.objects.all()
        return EnrollmentStats(
            total=qs.count(),
            pending=qs.filter(status=EnrollmentStatus.PENDING.value).count(),
            approved=qs.filter(status=EnrollmentStatus.APPROVED.value).count(),
            completed=qs.filter(status=EnrollmentStatus.COMPLETED.value).count(),
        )


class DjangoUnitOfWork(UnitOfWork):
    """Wrap a block of store calls in one database transaction."""

    def __init__(self) -> None:
        self._atomic = None

    def __enter__(self) -> "DjangoUnitOfWork":
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        atomic, self._atomic = self._atomic, None
        atomic.__exit__(exc_type, exc, tb)
