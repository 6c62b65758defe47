from enrollments.domain.models import (
    AdminRef,
    Enrollment,
    EnrollmentDraft,
    EnrollmentFilter,
    EnrollmentSource,
    EnrollmentStats,
    EnrollmentStatus,
    EnrollmentSummary,
    Page,
    StudentView,
    Training,
    TrainingRef,
    TrainingStats,
)
from enrollments.domain.value_objects import (
    Capacity,
    Email,
    EnrollmentId,
    Pagination,
    TrainingId,
)

__all__ = [
    "AdminRef",
    "Enrollment",
    "EnrollmentDraft",
    "EnrollmentFilter",
    "EnrollmentSource",
    "EnrollmentStats",
    "EnrollmentStatus",
    "EnrollmentSummary",
    "Page",
    "StudentView",
    "Training",
    "TrainingRef",
    "TrainingStats",
    "Capacity",
    "Email",
    "EnrollmentId",
    "Pagination",
    "TrainingId",
]
