from enrollments.handlers.views import (
    EnrollmentDetailView,
    EnrollmentDownloadView,
    EnrollmentListView,
    EnrollmentSubmitView,
    EnrollmentTransitionView,
    StudentListView,
    TrainingAdminDetailView,
    TrainingAdminListView,
    TrainingDetailView,
    TrainingListView,
    TrainingSlugView,
    TrainingStatsView,
)

__all__ = [
    "EnrollmentDetailView",
    "EnrollmentDownloadView",
    "EnrollmentListView",
    "EnrollmentSubmitView",
    "EnrollmentTransitionView",
    "StudentListView",
    "TrainingAdminDetailView",
    "TrainingAdminListView",
    "TrainingDetailView",
    "TrainingListView",
    "TrainingSlugView",
    "TrainingStatsView",
]
