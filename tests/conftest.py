"""
Pytest configuration and shared fixtures.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.core.cache import cache
from django.utils import timezone

from applications.infrastructure.models import Application as ApplicationModel
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from licenses.domain.license import License, LicenseAttributes
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from users.infrastructure.models import User as UserModel
from users.infrastructure.repositories.django_user_repository import DjangoUserRepository


@pytest.fixture(autouse=True)
def clear_cache():
    """Cached license counts must not leak between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def application_repository():
    """Fixture for ApplicationRepository."""
    return DjangoApplicationRepository()


@pytest.fixture
def user_repository():
    """Fixture for UserRepository."""
    return DjangoUserRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def sample_attributes():
    """Factory for LicenseAttributes pointing at a given application."""

    def build(application_id, **overrides):
        values = {
            "application_id": application_id,
            "renewal_date": timezone.localdate() + timedelta(days=365),
            "auto_renewal": True,
            "cost": Decimal("120.00"),
            "renewal_interval": "yearly",
            "category": "Design",
            "status": "Active",
            "contact_person": "Jane Doe",
        }
        values.update(overrides)
        return LicenseAttributes(**values)

    return build


@pytest.fixture
def db_application(db):
    """Fixture for an Application saved in database."""
    return ApplicationModel.objects.create(name="Figma", link="https://figma.com")


@pytest.fixture
def db_other_application(db):
    """Fixture for a second Application saved in database."""
    return ApplicationModel.objects.create(name="Slack", link="https://slack.com")


@pytest.fixture
def db_users(db):
    """Fixture for two Users saved in database."""
    return [
        UserModel.objects.create(name="Alice Johnson"),
        UserModel.objects.create(name="Bob Smith"),
    ]


@pytest.fixture
def db_license(db, db_application, db_users, license_repository, sample_attributes):
    """Fixture for a License created through the repository with one user."""
    license = License.create(sample_attributes(db_application.id))
    return async_to_sync(license_repository.create)(license, [db_users[0].id])


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
