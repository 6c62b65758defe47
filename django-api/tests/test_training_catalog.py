"""Integration tests for the training catalog.

Run with: pytest tests/test_training_catalog.py -v
"""

import uuid
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from enrollments.models import Training


@pytest.mark.django_db
class TestPublicCatalog:
    """Tests for GET /api/trainings"""

    def test_lists_only_active_published_by_price(self, api_client: APIClient, make_training):
        make_training(title="Premium", price=Decimal("9000"))
        make_training(title="Starter", price=Decimal("1000"))
        make_training(title="Draft", is_published=False)
        make_training(title="Retired", is_active=False)

        body = api_client.get("/api/trainings").json()

        assert body["success"] is True
        assert body["count"] == 2
        assert [t["title"] for t in body["data"]] == ["Starter", "Premium"]

    def test_filters_by_mode(self, api_client: APIClient, make_training):
        make_training(title="Online One", mode="Online")
        make_training(title="Offline One", mode="Offline")

        body = api_client.get("/api/trainings", {"mode": "Online"}).json()

        assert [t["title"] for t in body["data"]] == ["Online One"]

    def test_get_by_slug_and_id(self, api_client: APIClient, make_training):
        training = make_training(slug="saffron-basics", max_participants=10, current_enrollments=4)

        by_slug = api_client.get("/api/trainings/saffron-basics").json()["data"]
        by_id = api_client.get(f"/api/trainings/id/{training.id}").json()["data"]

        assert by_slug["id"] == by_id["id"] == str(training.id)
        assert by_slug["seatsLeft"] == 6
        assert by_slug["maxParticipants"] == 10

    def test_unpublished_is_not_found(self, api_client: APIClient, make_training):
        training = make_training(slug="hidden", is_published=False)

        assert api_client.get("/api/trainings/hidden").status_code == 404
        assert api_client.get(f"/api/trainings/id/{training.id}").status_code == 404

    def test_unknown_id(self, api_client: APIClient):
        assert api_client.get(f"/api/trainings/id/{uuid.uuid4()}").status_code == 404
        assert api_client.get("/api/trainings/id/not-a-uuid").status_code == 400


@pytest.mark.django_db
class TestAdminCatalog:
    """Tests for /api/admin/trainings"""

    def test_create_derives_slug_and_ignores_counter(self, admin_client):
        response = admin_client.post(
            "/api/admin/trainings",
            {
                "title": "Saffron Cultivation Masterclass",
                "description": "Indoor aeroponics",
                "duration": "7 days",
                "price": "12000.00",
                "maxParticipants": 20,
                "currentEnrollments": 15,
                "isPublished": True,
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "saffron-cultivation-masterclass"
        assert data["currentEnrollments"] == 0
        assert Training.objects.get().max_participants == 20

    def test_create_requires_fields(self, admin_client):
        response = admin_client.post("/api/admin/trainings", {"title": "Only a title"}, format="json")
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_update_and_delete(self, admin_client, make_training):
        training = make_training(title="Old Title", current_enrollments=3)

        updated = admin_client.put(
            f"/api/admin/trainings/{training.id}",
            {"title": "New Title", "currentEnrollments": 0},
            format="json",
        ).json()["data"]
        deleted = admin_client.delete(f"/api/admin/trainings/{training.id}")

        assert updated["slug"] == "new-title"
        assert updated["currentEnrollments"] == 3
        assert deleted.json() == {"success": True, "data": {}}
        assert not Training.objects.exists()

    def test_admin_list_includes_unpublished(self, admin_client, make_training):
        make_training(title="Draft", is_published=False)
        make_training(title="Live")

        all_items = admin_client.get("/api/admin/trainings").json()
        drafts = admin_client.get("/api/admin/trainings", {"isPublished": "false"}).json()
        searched = admin_client.get("/api/admin/trainings", {"search": "liv"}).json()

        assert all_items["total"] == 2
        assert [t["title"] for t in drafts["data"]] == ["Draft"]
        assert [t["title"] for t in searched["data"]] == ["Live"]

    def test_stats(self, admin_client, make_training, make_enrollment):
        training = make_training()
        make_training(is_active=False)
        make_enrollment(training)
        make_enrollment(training, status="approved")

        data = admin_client.get("/api/admin/trainings/stats").json()["data"]

        assert data == {
            "totalTrainings": 2,
            "activeTrainings": 1,
            "totalEnrollments": 2,
            "pendingEnrollments": 1,
        }
