"""Training catalog service."""

import logging
from typing import Any

from django.utils.text import slugify

from enrollments.domain import Page, Pagination, Training, TrainingStats
from enrollments.domain.errors import TrainingNotFoundError, ValidationError
from enrollments.services.enrollment_service import parse_training_id
from enrollments.stores.interfaces import EnrollmentStore, TrainingStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "duration", "price")

# Owned by the seat ledger, never set through catalog edits.
PROTECTED_FIELDS = ("current_enrollments", "slug")


class TrainingService:
    """Service for training catalog operations."""

    def __init__(self, store: TrainingStore, enrollments: EnrollmentStore) -> None:
        self._store = store
        self._enrollments = enrollments

    def _unique_slug(self, title: str, exclude=None) -> str:
        base = slugify(title) or "training"
        slug, n = base, 2
        while self._store.slug_exists(slug, exclude=exclude):
            slug = f"{base}-{n}"
            n += 1
        return slug

    @staticmethod
    def _editable(fields: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}

    # Admin

    def list_trainings(self, filters: dict[str, Any], pagination: Pagination) -> Page[Training]:
        return self._store.list_trainings(filters, pagination)

    def get_training(self, training_id: str) -> Training:
        """Return a training by ID, whatever its visibility.

        Raises:
            InvalidIdError: If the training_id is not a valid UUID.
            TrainingNotFoundError: If the training does not exist.
        """
        training = self._store.get_training(parse_training_id(training_id))
        if training is None:
            raise TrainingNotFoundError()
        return training

    def create_training(self, fields: dict[str, Any]) -> Training:
        missing = [key for key in REQUIRED_FIELDS if fields.get(key) in (None, "")]
        if missing:
            raise ValidationError(f"Please add {', '.join(missing)}")
        fields = self._editable(fields)
        fields["slug"] = self._unique_slug(fields["title"])
        training = self._store.create_training(fields)
        logger.info("Training %s created (%s)", training.id, training.slug)
        return training

    def update_training(self, training_id: str, fields: dict[str, Any]) -> Training:
        current = self.get_training(training_id)
        fields = self._editable(fields)
        for key in REQUIRED_FIELDS:
            if key in fields and fields[key] in (None, ""):
                raise ValidationError(f"Please add {key}")
        if "title" in fields and fields["title"] != current.title:
            fields["slug"] = self._unique_slug(fields["title"], exclude=current.id)
        training = self._store.update_training(current.id, fields)
        logger.info("Training %s updated", training.id)
        return training

    def delete_training(self, training_id: str) -> None:
        current = self.get_training(training_id)
        self._store.delete_training(current.id)
        logger.info("Training %s deleted", current.id)

    def stats(self) -> TrainingStats:
        enrollment_stats = self._enrollments.stats()
        return TrainingStats(
            total_trainings=self._store.count_trainings(),
            active_trainings=self._store.count_trainings(active_only=True),
            total_enrollments=enrollment_stats.total,
            pending_enrollments=enrollment_stats.pending,
        )

    # Public

    def list_available(self, filters: dict[str, Any]) -> list[Training]:
        return self._store.list_available(filters)

    def get_available(self, training_id: str) -> Training:
        training = self._store.get_training(parse_training_id(training_id))
        if training is None or not training.is_available:
            raise TrainingNotFoundError()
        return training

    def get_available_by_slug(self, slug: str) -> Training:
        training = self._store.get_by_slug(slug)
        if training is None or not training.is_available:
            raise TrainingNotFoundError()
        return training
