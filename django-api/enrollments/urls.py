from django.urls import path

from enrollments.domain.lifecycle import LifecycleEvent
from enrollments.handlers import (
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

admin_urlpatterns = [
    path("enrollments", EnrollmentListView.as_view(), name="admin-enrollment-list"),
    path(
        "enrollments/download",
        EnrollmentDownloadView.as_view(),
        name="admin-enrollment-download",
    ),
    path("enrollments/students", StudentListView.as_view(), name="admin-student-list"),
    path(
        "enrollments/<str:enrollment_id>",
        EnrollmentDetailView.as_view(),
        name="admin-enrollment-detail",
    ),
    *[
        path(
            f"enrollments/<str:enrollment_id>/{event.value}",
            EnrollmentTransitionView.as_view(event=event),
            name=f"admin-enrollment-{event.value}",
        )
        for event in (LifecycleEvent.APPROVE, LifecycleEvent.REJECT, LifecycleEvent.COMPLETE)
    ],
    path("trainings", TrainingAdminListView.as_view(), name="admin-training-list"),
    path("trainings/stats", TrainingStatsView.as_view(), name="admin-training-stats"),
    path(
        "trainings/<str:training_id>",
        TrainingAdminDetailView.as_view(),
        name="admin-training-detail",
    ),
]

public_urlpatterns = [
    path("enrollments", EnrollmentSubmitView.as_view(), name="enrollment-submit"),
    path("trainings", TrainingListView.as_view(), name="training-list"),
    path("trainings/id/<str:training_id>", TrainingDetailView.as_view(), name="training-detail"),
    path("trainings/<slug:slug>", TrainingSlugView.as_view(), name="training-slug"),
]
