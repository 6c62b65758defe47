"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses (see handlers.responses)
- Never contain business logic
- Never expose internal error details
"""

import time

from django.conf import settings
from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from enrollments import cache
from enrollments.domain import (
    EnrollmentFilter,
    EnrollmentSource,
    EnrollmentStatus,
    Pagination,
)
from enrollments.domain.errors import ValidationError
from enrollments.domain.lifecycle import LifecycleEvent
from enrollments.handlers import dependencies
from enrollments.handlers.responses import paged, success
from enrollments.handlers.serializers import (
    EnrollmentInputSerializer,
    EnrollmentSerializer,
    EnrollmentStatsSerializer,
    StudentSerializer,
    TrainingInputSerializer,
    TrainingSerializer,
    TrainingStatsSerializer,
    TransitionInputSerializer,
)
from enrollments.services.enrollment_service import parse_training_id
from enrollments.services.export import write_enrollments_csv

TRAINING_FILTERS = ("category", "mode", "level")


def _int_param(request: Request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer") from None


def _pagination(request: Request, default_limit: int) -> Pagination:
    try:
        return Pagination(
            page=_int_param(request, "page", 1),
            limit=_int_param(request, "limit", default_limit),
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from None


def _choice(enum_cls, raw: str | None):
    if not raw:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValidationError(f"Unknown {enum_cls.__name__} '{raw}'") from None


def _enrollment_filter(request: Request) -> EnrollmentFilter:
    params = request.query_params
    training_id = params.get("trainingId")
    return EnrollmentFilter(
        status=_choice(EnrollmentStatus, params.get("status")),
        training_id=parse_training_id(training_id) if training_id else None,
        source=_choice(EnrollmentSource, params.get("source")),
        search=params.get("search", "").strip(),
    )


def _parse(serializer_cls, request: Request) -> dict:
    serializer = serializer_cls(data=request.data)
    serializer.is_valid(raise_exception=True)
    return dict(serializer.validated_data)


class AdminAPIView(APIView):
    permission_classes = [IsAdminUser]


class PublicAPIView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]


# Enrollments (admin)


class EnrollmentListView(AdminAPIView):
    """Handler for GET/POST /api/admin/enrollments"""

    def get(self, request: Request) -> Response:
        page, stats = dependencies.enrollment_service().list_enrollments(
            _enrollment_filter(request),
            _pagination(request, settings.ENROLLMENTS_PAGE_SIZE),
        )
        return paged(
            page,
            EnrollmentSerializer(page.items, many=True).data,
            stats=EnrollmentStatsSerializer(stats).data,
        )

    def post(self, request: Request) -> Response:
        enrollment = dependencies.enrollment_service().create_enrollment(
            _parse(EnrollmentInputSerializer, request), admin_id=request.user.pk
        )
        return success(EnrollmentSerializer(enrollment).data, status.HTTP_201_CREATED)


class EnrollmentDetailView(AdminAPIView):
    """Handler for GET/PUT/DELETE /api/admin/enrollments/{enrollment_id}"""

    def get(self, request: Request, enrollment_id: str) -> Response:
        enrollment = dependencies.enrollment_service().get_enrollment(enrollment_id)
        return success(EnrollmentSerializer(enrollment).data)

    def put(self, request: Request, enrollment_id: str) -> Response:
        enrollment = dependencies.enrollment_service().update_enrollment(
            enrollment_id, _parse(EnrollmentInputSerializer, request)
        )
        return success(EnrollmentSerializer(enrollment).data)

    def delete(self, request: Request, enrollment_id: str) -> Response:
        dependencies.enrollment_service().delete_enrollment(enrollment_id)
        return success({})


class EnrollmentTransitionView(AdminAPIView):
    """Handler for PUT /api/admin/enrollments/{enrollment_id}/{approve,reject,complete}"""

    event: LifecycleEvent | None = None

    def put(self, request: Request, enrollment_id: str) -> Response:
        service = dependencies.enrollment_service()
        operation = {
            LifecycleEvent.APPROVE: service.approve_enrollment,
            LifecycleEvent.REJECT: service.reject_enrollment,
            LifecycleEvent.COMPLETE: service.complete_enrollment,
        }[self.event]
        admin_notes = _parse(TransitionInputSerializer, request).get("admin_notes")
        return success(EnrollmentSerializer(operation(enrollment_id, admin_notes)).data)


class EnrollmentDownloadView(AdminAPIView):
    """Handler for GET /api/admin/enrollments/download"""

    def get(self, request: Request) -> HttpResponse:
        enrollments = dependencies.enrollment_service().export_enrollments(
            _enrollment_filter(request)
        )
        response = HttpResponse(write_enrollments_csv(enrollments), content_type="text/csv")
        response["Content-Disposition"] = (
            f"attachment; filename=enrollments-{int(time.time() * 1000)}.csv"
        )
        return response


class StudentListView(AdminAPIView):
    """Handler for GET /api/admin/enrollments/students"""

    def get(self, request: Request) -> Response:
        page = dependencies.student_service().list_students(
            request.query_params.get("search", ""),
            _pagination(request, settings.ENROLLMENTS_PAGE_SIZE),
        )
        return paged(page, StudentSerializer(page.items, many=True).data)


# Enrollments (public)


class EnrollmentSubmitView(PublicAPIView):
    """Handler for POST /api/enrollments"""

    def post(self, request: Request) -> Response:
        data = _parse(EnrollmentInputSerializer, request)
        enrollment, training = dependencies.enrollment_service().submit_enrollment(data)
        return success(
            {
                "id": str(enrollment.id),
                "studentName": enrollment.student_name,
                "trainingTitle": training.title,
                "status": enrollment.status.value,
            },
            status.HTTP_201_CREATED,
            message="Enrollment request submitted successfully. We will contact you soon.",
        )


# Trainings (admin)


class TrainingAdminListView(AdminAPIView):
    """Handler for GET/POST /api/admin/trainings"""

    def get(self, request: Request) -> Response:
        params = request.query_params
        filters = {key: params[key] for key in TRAINING_FILTERS if params.get(key)}
        if params.get("isPublished") is not None:
            filters["is_published"] = params["isPublished"] == "true"
        if params.get("search"):
            filters["search"] = params["search"].strip()
        page = dependencies.training_service().list_trainings(
            filters, _pagination(request, settings.TRAININGS_PAGE_SIZE)
        )
        return paged(page, TrainingSerializer(page.items, many=True).data)

    def post(self, request: Request) -> Response:
        training = dependencies.training_service().create_training(
            _parse(TrainingInputSerializer, request)
        )
        return success(TrainingSerializer(training).data, status.HTTP_201_CREATED)


class TrainingAdminDetailView(AdminAPIView):
    """Handler for GET/PUT/DELETE /api/admin/trainings/{training_id}"""

    def get(self, request: Request, training_id: str) -> Response:
        training = dependencies.training_service().get_training(training_id)
        return success(TrainingSerializer(training).data)

    def put(self, request: Request, training_id: str) -> Response:
        training = dependencies.training_service().update_training(
            training_id, _parse(TrainingInputSerializer, request)
        )
        return success(TrainingSerializer(training).data)

    def delete(self, request: Request, training_id: str) -> Response:
        dependencies.training_service().delete_training(training_id)
        return success({})


class TrainingStatsView(AdminAPIView):
    """Handler for GET /api/admin/trainings/stats"""

    def get(self, request: Request) -> Response:
        stats = dependencies.training_service().stats()
        return success(TrainingStatsSerializer(stats).data)


# Trainings (public, cached)


class TrainingListView(PublicAPIView):
    """Handler for GET /api/trainings"""

    def get(self, request: Request) -> Response:
        params = request.query_params
        filters = {key: params[key] for key in TRAINING_FILTERS if params.get(key)}
        key = cache.trainings_list_key(filters)
        data = cache.get_or_set(
            key,
            lambda: TrainingSerializer(
                dependencies.training_service().list_available(filters), many=True
            ).data,
        )
        cache.remember_list_key(key)
        return success(data, count=len(data))


class TrainingDetailView(PublicAPIView):
    """Handler for GET /api/trainings/id/{training_id}"""

    def get(self, request: Request, training_id: str) -> Response:
        data = cache.get_or_set(
            cache.training_id_key(training_id),
            lambda: TrainingSerializer(
                dependencies.training_service().get_available(training_id)
            ).data,
        )
        return success(data)


class TrainingSlugView(PublicAPIView):
    """Handler for GET /api/trainings/{slug}"""

    def get(self, request: Request, slug: str) -> Response:
        data = cache.get_or_set(
            cache.training_slug_key(slug),
            lambda: TrainingSerializer(
                dependencies.training_service().get_available_by_slug(slug)
            ).data,
        )
        return success(data)
