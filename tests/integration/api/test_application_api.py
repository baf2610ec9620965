"""
Integration tests for Application API endpoints.
"""

import uuid

import pytest
from django.urls import reverse

from applications.infrastructure.models import Application as ApplicationModel


def detail_url(application_id):
    return reverse("applications:application-detail", args=[application_id])


@pytest.mark.django_db
@pytest.mark.integration
class TestApplicationAPI:
    """Integration tests for Application API."""

    def test_list(self, api_client, db_application, db_other_application):
        """Test applications are listed newest first."""
        response = api_client.get(reverse("applications:application-list"))

        assert response.status_code == 200
        data = response.json()
        assert [item["name"] for item in data] == ["Slack", "Figma"]
        assert set(data[0]) == {
            "id",
            "name",
            "link",
            "licenseAssociations",
            "createdAt",
            "updatedAt",
        }

    def test_create(self, api_client):
        """Test creating an application ignores a client supplied id."""
        client_id = str(uuid.uuid4())
        response = api_client.post(
            reverse("applications:application-list"),
            {"id": client_id, "name": "Notion", "link": "https://notion.so"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Notion"
        assert data["licenseAssociations"] == 0
        assert data["id"] != client_id
        assert ApplicationModel.objects.filter(id=data["id"]).exists()

    def test_create_blank_name(self, api_client):
        response = api_client.post(
            reverse("applications:application-list"), {"name": "   "}, format="json"
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == 400
        assert body["type"] == "ValidationError"
        assert "name" in body["details"]

    def test_update(self, api_client, db_application):
        """Test updating with the last read updatedAt."""
        current = api_client.get(reverse("applications:application-list")).json()[0]

        response = api_client.put(
            detail_url(db_application.id),
            {"name": "Figma Pro", "link": "", "updatedAt": current["updatedAt"]},
            format="json",
        )

        assert response.status_code == 204
        db_application.refresh_from_db()
        assert db_application.name == "Figma Pro"

    def test_update_conflict(self, api_client, db_application):
        """Test a stale updatedAt is rejected with 409."""
        current = api_client.get(reverse("applications:application-list")).json()[0]
        api_client.put(
            detail_url(db_application.id),
            {"name": "First", "updatedAt": current["updatedAt"]},
            format="json",
        )

        response = api_client.put(
            detail_url(db_application.id),
            {"name": "Second", "updatedAt": current["updatedAt"]},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["type"] == "UpdateConflict"
        db_application.refresh_from_db()
        assert db_application.name == "First"

    def test_update_missing(self, api_client):
        response = api_client.put(
            detail_url(uuid.uuid4()),
            {"name": "Ghost", "updatedAt": "2024-01-01T10:00:00Z"},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Application could not be found."

    def test_delete(self, api_client, db_application):
        response = api_client.delete(detail_url(db_application.id))

        assert response.status_code == 204
        assert not ApplicationModel.objects.filter(id=db_application.id).exists()

    def test_delete_referenced(self, api_client, db_license):
        """Test an application with licenses cannot be deleted."""
        response = api_client.delete(detail_url(db_license.application_id))

        assert response.status_code == 409
        body = response.json()
        assert body["type"] == "DataDeletionError"
        assert "delete the licenses first" in body["details"]

    def test_invalid_uuid_is_not_routed(self, api_client):
        response = api_client.delete("/api/applications/not-a-uuid")
        assert response.status_code == 404
