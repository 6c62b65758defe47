"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from tests.fakes import Clock, InMemoryEnrollmentStore, InMemoryTrainingStore, RecordingUnitOfWork


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def admin_user(django_user_model):
    return django_user_model.objects.create_user(
        username="admin",
        email="admin@example.com",
        password="secret-pass",
        first_name="Asha",
        last_name="Rao",
        is_staff=True,
    )


@pytest.fixture
def admin_client(admin_user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def make_training(db):
    from enrollments.models import Training

    counter = iter(range(1, 10_000))

    def _make(**fields) -> Training:
        n = next(counter)
        fields.setdefault("title", f"Saffron Program {n}")
        fields.setdefault("slug", f"saffron-program-{n}")
        fields.setdefault("description", "Hands-on saffron cultivation")
        fields.setdefault("duration", "5 days")
        fields.setdefault("price", Decimal("4999.00"))
        fields.setdefault("is_published", True)
        return Training.objects.create(**fields)

    return _make


@pytest.fixture
def make_enrollment(db):
    from enrollments.models import Enrollment

    def _make(training, **fields) -> Enrollment:
        fields.setdefault("student_name", "Ravi Kumar")
        fields.setdefault("email", "ravi@example.com")
        fields.setdefault("phone", "9876543210")
        created_at = fields.pop("created_at", None)
        enrollment = Enrollment.objects.create(training=training, **fields)
        if created_at is not None:
            Enrollment.objects.filter(pk=enrollment.pk).update(created_at=created_at)
            enrollment.refresh_from_db()
        return enrollment

    return _make


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def training_store(clock) -> InMemoryTrainingStore:
    return InMemoryTrainingStore(clock)


@pytest.fixture
def enrollment_store(training_store) -> InMemoryEnrollmentStore:
    return InMemoryEnrollmentStore(training_store)


@pytest.fixture
def unit_of_work() -> RecordingUnitOfWork:
    return RecordingUnitOfWork()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()
