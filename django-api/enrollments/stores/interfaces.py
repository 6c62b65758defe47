"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

from enrollments.domain import (
    Enrollment,
    EnrollmentDraft,
    EnrollmentFilter,
    EnrollmentId,
    EnrollmentStats,
    Page,
    Pagination,
    Training,
    TrainingId,
    TrainingRef,
)


class TrainingStore(ABC):
    """Interface for training program persistence operations."""

    @abstractmethod
    def list_trainings(
        self, filters: dict[str, Any], pagination: Pagination | None = None
    ) -> Page[Training]:
        """Return trainings matching exact-match `filters`, newest first.

        The optional `search` key matches title or description case-insensitively.
        """
        ...

    @abstractmethod
    def list_available(self, filters: dict[str, Any]) -> list[Training]:
        """Return active and published trainings ordered by price ascending."""
        ...

    @abstractmethod
    def get_training(self, training_id: TrainingId) -> Training | None:
        """Return a training by ID, or None if not found."""
        ...

    @abstractmethod
    def get_by_slug(self, slug: str) -> Training | None:
        """Return a training by slug, or None if not found."""
        ...

    @abstractmethod
    def slug_exists(self, slug: str, exclude: TrainingId | None = None) -> bool:
        ...

    @abstractmethod
    def create_training(self, fields: dict[str, Any]) -> Training:
        ...

    @abstractmethod
    def update_training(self, training_id: TrainingId, fields: dict[str, Any]) -> Training:
        ...

    @abstractmethod
    def delete_training(self, training_id: TrainingId) -> None:
        ...

    @abstractmethod
    def adjust_enrollments(self, training_id: TrainingId, delta: int) -> None:
        """Atomically add `delta` to current_enrollments, never going below zero."""
        ...

    @abstractmethod
    def count_trainings(self, active_only: bool = False) -> int:
        ...

    @abstractmethod
    def resolve_refs(self, training_ids: set[TrainingId]) -> dict[TrainingId, TrainingRef]:
        """Return lightweight projections for the IDs that still exist."""
        ...


class EnrollmentStore(ABC):
    """Interface for enrollment persistence operations."""

    @abstractmethod
    def list_enrollments(
        self, criteria: EnrollmentFilter, pagination: Pagination | None = None
    ) -> Page[Enrollment]:
        """Return enrollments matching `criteria` ordered by created_at descending.

        Without pagination every match is returned in a single page.
        """
        ...

    @abstractmethod
    def get_enrollment(self, enrollment_id: EnrollmentId) -> Enrollment | None:
        """Return an enrollment by ID, or None if not found."""
        ...

    @abstractmethod
    def get_enrollment_for_update(self, enrollment_id: EnrollmentId) -> Enrollment | None:
        """Like get_enrollment, but lock the row until the unit of work ends."""
        ...

    @abstractmethod
    def create_enrollment(self, draft: EnrollmentDraft) -> Enrollment:
        ...

    @abstractmethod
    def save_enrollment(self, enrollment: Enrollment) -> Enrollment:
        """Persist the mutable fields of an existing enrollment."""
        ...

    @abstractmethod
    def delete_enrollment(self, enrollment_id: EnrollmentId) -> None:
        ...

    @abstractmethod
    def stats(self) -> EnrollmentStats:
        """Return global status counts."""
        ...


class UnitOfWork(ABC):
    """Transaction boundary spanning enrollment and training writes."""

    @abstractmethod
    def __enter__(self) -> "UnitOfWork":
        ...

    @abstractmethod
    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        ...
