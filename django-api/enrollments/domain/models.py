"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in enrollments/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from enrollments.domain.value_objects import (
    Capacity,
    Email,
    EnrollmentId,
    Pagination,
    TrainingId,
)

T = TypeVar("T")


class EnrollmentStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class EnrollmentSource(Enum):
    WHATSAPP = "whatsapp"
    SOCIAL_MEDIA = "social_media"
    WEBSITE = "website"
    MANUAL = "manual"
    PHONE = "phone"
    REFERRAL = "referral"


@dataclass(frozen=True)
class Training:
    """Domain representation of a Training program."""

    id: TrainingId
    title: str
    slug: str
    description: str
    duration: str
    price: Decimal
    max_participants: Capacity
    current_enrollments: int
    is_active: bool
    is_published: bool
    created_at: datetime
    updated_at: datetime
    level: str = "Beginner"
    category: str = "Saffron Cultivation"
    mode: str = "Offline"
    language: str = "Hindi & English"
    original_price: Decimal | None = None
    start_date: str = ""
    end_date: str = ""
    instructor: str = ""
    location: str = ""

    @property
    def is_available(self) -> bool:
        """Open for public submissions."""
        return self.is_active and self.is_published

    @property
    def seats_left(self) -> int | None:
        if not self.max_participants.is_limited:
            return None
        return max(self.max_participants.value - self.current_enrollments, 0)


@dataclass(frozen=True)
class TrainingRef:
    """Lightweight projection of a Training used when resolving references."""

    id: TrainingId
    title: str
    slug: str
    price: Decimal | None = None
    duration: str = ""


@dataclass(frozen=True)
class AdminRef:
    """The admin user who created an enrollment manually."""

    id: int
    name: str
    email: str


@dataclass(frozen=True)
class Enrollment:
    """Domain representation of an Enrollment."""

    id: EnrollmentId
    student_name: str
    email: Email
    phone: str
    training_id: TrainingId
    status: EnrollmentStatus
    source: EnrollmentSource
    created_at: datetime
    updated_at: datetime
    whatsapp_number: str = ""
    notes: str = ""
    admin_notes: str = ""
    enrolled_by: AdminRef | None = None
    approved_at: datetime | None = None
    completed_at: datetime | None = None
    # Resolved reference, None when the program has been deleted.
    training: TrainingRef | None = None


@dataclass(frozen=True)
class EnrollmentDraft:
    """Validated input for a new enrollment."""

    student_name: str
    email: Email
    phone: str
    training_id: TrainingId
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    source: EnrollmentSource = EnrollmentSource.MANUAL
    whatsapp_number: str = ""
    notes: str = ""
    admin_notes: str = ""
    enrolled_by_id: int | None = None
    approved_at: datetime | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True)
class EnrollmentFilter:
    """Criteria for listing enrollments. Empty fields do not restrict."""

    status: EnrollmentStatus | None = None
    training_id: TrainingId | None = None
    source: EnrollmentSource | None = None
    search: str = ""


@dataclass(frozen=True)
class EnrollmentStats:
    """Global status buckets, independent of any list filter."""

    total: int
    pending: int
    approved: int
    completed: int


@dataclass(frozen=True)
class EnrollmentSummary:
    """One enrollment inside a StudentView."""

    id: EnrollmentId
    training_id: TrainingId
    status: EnrollmentStatus
    source: EnrollmentSource
    created_at: datetime
    training: TrainingRef | None = None


@dataclass(frozen=True)
class StudentView:
    """Derived student, grouped from enrollments sharing one email."""

    email: Email
    student_name: str
    phone: str
    whatsapp_number: str
    total_enrollments: int
    approved: int
    completed: int
    last_enrolled: datetime
    enrollments: tuple[EnrollmentSummary, ...] = ()


@dataclass(frozen=True)
class TrainingStats:
    total_trainings: int
    active_trainings: int
    total_enrollments: int
    pending_enrollments: int


@dataclass(frozen=True)
class Page(Generic[T]):
    """A window of results with the total size of the unpaged set."""

    items: tuple[T, ...]
    total: int
    pagination: Pagination

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages(self.total)
