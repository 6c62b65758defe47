"""Integration tests for the enrollment endpoints.

Run with: pytest tests/test_enrollment_api.py -v
"""

import uuid
from datetime import datetime, timezone

import pytest
from rest_framework.test import APIClient

from enrollments.handlers import dependencies
from enrollments.models import Enrollment, Training
from enrollments.stores.django_store import DjangoTrainingStore

ADMIN = "/api/admin/enrollments"


def seats(training: Training) -> int:
    training.refresh_from_db()
    return training.current_enrollments


@pytest.mark.django_db
class TestAdminAccess:
    def test_anonymous_is_unauthorized(self, api_client: APIClient):
        response = api_client.get(ADMIN)

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["error"]

    def test_non_staff_is_forbidden(self, api_client: APIClient, django_user_model):
        user = django_user_model.objects.create_user(username="student", password="x")
        api_client.force_authenticate(user=user)

        assert api_client.get(ADMIN).status_code == 403


@pytest.mark.django_db
class TestEnrollmentList:
    """Tests for GET /api/admin/enrollments"""

    def test_list_with_filters_and_global_stats(self, admin_client, make_training, make_enrollment):
        training = make_training()
        make_enrollment(training, student_name="Anita", email="anita@x.com", status="approved")
        make_enrollment(training, student_name="Bala", email="bala@x.com", status="pending")
        make_enrollment(training, student_name="Chitra", email="chitra@x.com", status="completed")

        body = admin_client.get(ADMIN, {"status": "pending"}).json()

        assert body["success"] is True
        assert body["total"] == 1
        assert body["totalPages"] == 1
        assert body["currentPage"] == 1
        assert [e["studentName"] for e in body["data"]] == ["Bala"]
        assert body["data"][0]["trainingId"]["title"] == training.title
        assert body["stats"] == {"total": 3, "pending": 1, "approved": 1, "completed": 1}

    def test_search_matches_name_email_or_phone(self, admin_client, make_training, make_enrollment):
        training = make_training()
        make_enrollment(training, student_name="Anita", email="anita@x.com", phone="111")
        make_enrollment(training, student_name="Bala", email="bala@x.com", phone="222999")

        assert admin_client.get(ADMIN, {"search": "ANITA"}).json()["total"] == 1
        assert admin_client.get(ADMIN, {"search": "2299"}).json()["data"][0]["studentName"] == "Bala"
        assert admin_client.get(ADMIN, {"search": "x.com"}).json()["total"] == 2

    def test_newest_first_with_pagination(self, admin_client, make_training, make_enrollment):
        training = make_training()
        for i in range(3):
            make_enrollment(
                training,
                student_name=f"S{i}",
                email=f"s{i}@x.com",
                created_at=datetime(2025, 1, 1 + i, tzinfo=timezone.utc),
            )

        body = admin_client.get(ADMIN, {"page": 2, "limit": 2}).json()

        assert body["total"] == 3
        assert body["totalPages"] == 2
        assert body["count"] == 1
        assert body["data"][0]["studentName"] == "S0"

    def test_unknown_status_filter_is_rejected(self, admin_client):
        response = admin_client.get(ADMIN, {"status": "archived"})
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.django_db
class TestEnrollmentDetail:
    def test_get_not_found(self, admin_client):
        response = admin_client.get(f"{ADMIN}/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Enrollment not found",
            "code": "ENROLLMENT_NOT_FOUND",
        }

    def test_get_invalid_id(self, admin_client):
        assert admin_client.get(f"{ADMIN}/nope").status_code == 400

    def test_get_resolves_admin(self, admin_client, admin_user, make_training, make_enrollment):
        enrollment = make_enrollment(make_training(), enrolled_by=admin_user)

        data = admin_client.get(f"{ADMIN}/{enrollment.id}").json()["data"]

        assert data["enrolledBy"] == {"id": admin_user.pk, "name": "Asha Rao", "email": "admin@example.com"}

    def test_deleted_training_resolves_to_null(self, admin_client, make_training, make_enrollment):
        training = make_training()
        enrollment = make_enrollment(training)
        training.delete()

        data = admin_client.get(f"{ADMIN}/{enrollment.id}").json()["data"]
        assert data["trainingId"] is None


@pytest.mark.django_db
class TestAdminCreate:
    """Tests for POST /api/admin/enrollments"""

    def test_create_records_admin(self, admin_client, admin_user, make_training):
        training = make_training()

        response = admin_client.post(
            ADMIN,
            {
                "studentName": "Ravi",
                "email": "RAVI@X.COM",
                "phone": "98765",
                "trainingId": str(training.id),
                "source": "phone",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "pending"
        assert data["source"] == "phone"
        assert data["email"] == "ravi@x.com"
        assert data["enrolledBy"]["id"] == admin_user.pk

    def test_create_on_full_training(self, admin_client, make_training):
        training = make_training(max_participants=1, current_enrollments=1)

        response = admin_client.post(
            ADMIN,
            {"studentName": "R", "email": "r@x.com", "phone": "1", "trainingId": str(training.id)},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CAPACITY_EXCEEDED"
        assert not Enrollment.objects.exists()

    def test_create_as_approved_stamps_approved_at(self, admin_client, make_training):
        training = make_training(max_participants=5)

        data = admin_client.post(
            ADMIN,
            {"studentName": "R", "email": "r@x.com", "phone": "1", "trainingId": str(training.id), "status": "approved"},
            format="json",
        ).json()["data"]

        assert data["status"] == "approved"
        assert data["approvedAt"] is not None
        assert seats(training) == 1

    def test_create_missing_fields(self, admin_client):

        response = admin_client.post(ADMIN, {"studentName": "R"}, format="json")
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.django_db
class TestTransitions:
    """Tests for PUT /api/admin/enrollments/{id}/{approve,reject,complete}"""

    def test_approve_twice(self, admin_client, make_training, make_enrollment):
        training = make_training(max_participants=5)
        enrollment = make_enrollment(training)

        first = admin_client.put(f"{ADMIN}/{enrollment.id}/approve", {"adminNotes": "paid"}, format="json")
        second = admin_client.put(f"{ADMIN}/{enrollment.id}/approve", format="json")

        assert first.status_code == 200
        assert first.json()["data"]["status"] == "approved"
        assert first.json()["data"]["adminNotes"] == "paid"
        assert first.json()["data"]["approvedAt"] is not None
        assert second.status_code == 400
        assert second.json()["code"] == "ALREADY_APPROVED"
        assert seats(training) == 1

    def test_approve_reject_approve_cycle(self, admin_client, make_training, make_enrollment):
        training = make_training()
        enrollment = make_enrollment(training)

        for action in ("approve", "reject", "approve"):
            assert admin_client.put(f"{ADMIN}/{enrollment.id}/{action}").status_code == 200

        assert seats(training) == 1

    def test_complete_keeps_seat(self, admin_client, make_training, make_enrollment):
        training = make_training()
        enrollment = make_enrollment(training)
        admin_client.put(f"{ADMIN}/{enrollment.id}/approve")

        data = admin_client.put(f"{ADMIN}/{enrollment.id}/complete").json()["data"]

        assert data["status"] == "completed"
        assert data["completedAt"] is not None
        assert seats(training) == 1

    def test_update_cannot_change_status(self, admin_client, make_training, make_enrollment):
        enrollment = make_enrollment(make_training())

        data = admin_client.put(
            f"{ADMIN}/{enrollment.id}", {"status": "approved", "notes": "evening batch"}, format="json"
        ).json()["data"]

        assert data["status"] == "pending"
        assert data["notes"] == "evening batch"

    def test_move_approved_to_full_training(self, admin_client, make_training, make_enrollment):
        first = make_training()
        full = make_training(max_participants=1, current_enrollments=1)
        enrollment = make_enrollment(first)
        admin_client.put(f"{ADMIN}/{enrollment.id}/approve")

        response = admin_client.put(f"{ADMIN}/{enrollment.id}", {"trainingId": str(full.id)}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "CAPACITY_EXCEEDED"
        enrollment.refresh_from_db()
        assert enrollment.training_id == first.id
        assert (seats(first), seats(full)) == (1, 1)

    @pytest.mark.parametrize("status,expected", [("approved", 2), ("completed", 3), ("rejected", 3), ("pending", 3)])

    def test_delete_releases_only_approved(self, admin_client, make_training, make_enrollment, status, expected):
        training = make_training(current_enrollments=3)
        enrollment = make_enrollment(training, status=status)

        response = admin_client.delete(f"{ADMIN}/{enrollment.id}")

        assert response.json() == {"success": True, "data": {}}
        assert seats(training) == expected
        assert not Enrollment.objects.exists()

    def test_failed_seat_update_rolls_back_status(self, make_training, make_enrollment, monkeypatch):
        training = make_training()
        enrollment = make_enrollment(training)

        def boom(self, training_id, delta):
            raise RuntimeError("counter unavailable")

        monkeypatch.setattr(DjangoTrainingStore, "adjust_enrollments", boom)
        with pytest.raises(RuntimeError):
            dependencies.enrollment_service().approve_enrollment(str(enrollment.id))

        enrollment.refresh_from_db()
        assert enrollment.status == "pending"
        assert enrollment.approved_at is None


@pytest.mark.django_db
class TestStudents:
    """Tests for GET /api/admin/enrollments/students"""

    def test_students_grouped_by_email(self, admin_client, make_training, make_enrollment):
        training = make_training()
        for status in ("approved", "approved", "pending"):
            make_enrollment(training, email="a@x.com", student_name="Anita", status=status)
        make_enrollment(training, email="b@y.com", student_name="Bala", status="completed")

        body = admin_client.get(f"{ADMIN}/students").json()
        by_email = {s["email"]: s for s in body["data"]}

        assert body["total"] == 2
        assert by_email["a@x.com"]["totalEnrollments"] == 3
        assert by_email["a@x.com"]["approved"] == 2
        assert by_email["a@x.com"]["completed"] == 0
        assert by_email["b@y.com"]["completed"] == 1
        assert by_email["b@y.com"]["enrollments"][0]["trainingId"]["slug"] == training.slug

    def test_students_search(self, admin_client, make_training, make_enrollment):
        training = make_training()
        make_enrollment(training, email="a@x.com")
        make_enrollment(training, email="b@y.com")

        body = admin_client.get(f"{ADMIN}/students", {"search": "a@x"}).json()

        assert [s["email"] for s in body["data"]] == ["a@x.com"]


@pytest.mark.django_db
class TestDownload:
    def test_csv_export(self, admin_client, make_training, make_enrollment):
        training = make_training(title="Saffron, Advanced")
        make_enrollment(training, student_name='Ravi "RK" Kumar', notes="line one\nline two")

        response = admin_client.get(f"{ADMIN}/download")

        assert response.status_code == 200
        assert response["Content-Type"] == "text/csv"
        assert response["Content-Disposition"].startswith("attachment; filename=enrollments-")
        content = response.content.decode()
        assert content.startswith("Student Name,Email,Phone,WhatsApp,Training,Status,")
        assert '"Ravi ""RK"" Kumar"' in content
        assert '"Saffron, Advanced"' in content


@pytest.mark.django_db
class TestPublicSubmit:
    """Tests for POST /api/enrollments"""

    def submit(self, client, training, **fields):
        body = {"studentName": "Ravi", "email": "ravi@x.com", "phone": "98765", "trainingId": str(training.id)}
        body.update(fields)
        return client.post("/api/enrollments", body, format="json")

    def test_submit_creates_pending_website_enrollment(self, api_client, make_training):
        training = make_training()

        response = self.submit(api_client, training, status="approved", source="manual")

        assert response.status_code == 201
        body = response.json()
        assert body["message"].startswith("Enrollment request submitted")
        assert body["data"]["trainingTitle"] == training.title
        assert body["data"]["status"] == "pending"
        stored = Enrollment.objects.get()
        assert stored.source == "website"
        assert stored.whatsapp_number == "98765"

    def test_submit_to_full_training(self, api_client, make_training):
        training = make_training(max_participants=2, current_enrollments=2)

        response = self.submit(api_client, training)

        assert response.status_code == 400
        assert response.json()["error"] == "This training program is fully booked"
        assert not Enrollment.objects.exists()

    def test_submit_to_unpublished_training(self, api_client, make_training):
        training = make_training(is_published=False, max_participants=100)

        response = self.submit(api_client, training)

        assert response.status_code == 404
        assert response.json()["code"] == "TRAINING_NOT_FOUND"

    def test_submit_missing_fields(self, api_client):
        response = api_client.post("/api/enrollments", {"email": "x@y.com"}, format="json")
        assert response.status_code == 400
