"""
Integration tests for User API endpoints.
"""

import uuid

import pytest
from django.urls import reverse

from licenses.infrastructure.models import LicenseUser
from users.infrastructure.models import User as UserModel


@pytest.mark.django_db
@pytest.mark.integration
class TestUserAPI:
    """Integration tests for User API."""

    def test_list(self, api_client, db_users):
        response = api_client.get(reverse("users:user-list"))

        assert response.status_code == 200
        assert [user["name"] for user in response.json()] == ["Alice Johnson", "Bob Smith"]

    def test_find_or_create_new(self, api_client):
        response = api_client.post(
            reverse("users:user-find-or-create"), {"name": " Carol White "}, format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["created"] is True
        assert data["user"]["name"] == "Carol White"

    def test_find_or_create_existing(self, api_client, db_users):
        """Test an existing name resolves to the stored user."""
        response = api_client.post(
            reverse("users:user-find-or-create"), {"name": "Alice Johnson"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["created"] is False
        assert data["user"]["id"] == str(db_users[0].id)
        assert UserModel.objects.count() == 2

    def test_find_or_create_blank(self, api_client):
        response = api_client.post(
            reverse("users:user-find-or-create"), {"name": ""}, format="json"
        )
        assert response.status_code == 400

    def test_delete(self, api_client, db_license, db_users):
        """Test deleting a user removes its assignments."""
        response = api_client.delete(reverse("users:user-delete", args=[db_users[0].id]))

        assert response.status_code == 204
        assert not UserModel.objects.filter(id=db_users[0].id).exists()
        assert not LicenseUser.objects.filter(license_id=db_license.id).exists()

    def test_delete_refreshes_counts(self, api_client, db_license, db_users):
        """Test cached counts are dropped when a user delete unassigns a license."""
        counts_url = reverse("licenses:license-counts")
        assert api_client.get(counts_url).json()["assigned"] == 1

        api_client.delete(reverse("users:user-delete", args=[db_users[0].id]))

        counts = api_client.get(counts_url).json()
        assert counts["assigned"] == 0
        assert counts["unassigned"] == 1

    def test_delete_missing(self, api_client):
        response = api_client.delete(reverse("users:user-delete", args=[uuid.uuid4()]))

        assert response.status_code == 404
        assert response.json()["type"] == "NotFound"
