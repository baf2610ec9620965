"""
Django implementation of ApplicationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import transaction
from django.db.models import ProtectedError
from django.utils import timezone

from applications.domain.application import Application
from applications.infrastructure.models import Application as ApplicationModel
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import (
    ApplicationNotFoundError,
    DataDeletionError,
    UpdateConflictError,
)


def application_in_use_error() -> DataDeletionError:
    """Error raised when licenses still reference an application."""
    return DataDeletionError(
        "Cannot delete application.",
        (
            "There are licenses associated with this application. Please delete the "
            "licenses first before trying to delete the application."
        ),
    )


class DjangoApplicationRepository(ApplicationRepository):
    """
    Django ORM implementation of ApplicationRepository.

    license_associations is never written here; the association
    reconciler owns it.
    """

    @staticmethod
    def to_domain(model: ApplicationModel) -> Application:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Application model

        Returns:
            Application domain entity
        """
        return Application(
            id=model.id,
            name=model.name,
            link=model.link,
            license_associations=model.license_associations,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def add(self, application: Application) -> Application:
        # pylint: disable=no-member
        model = ApplicationModel.objects.create(
            id=application.id,
            name=application.name,
            link=application.link,
        )
        return self.to_domain(model)

    @sync_to_async
    def find_by_id(self, application_id: uuid.UUID) -> Optional[Application]:
        try:
            # pylint: disable=no-member
            return self.to_domain(ApplicationModel.objects.get(id=application_id))
        except ApplicationModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def list_all(self) -> List[Application]:
        # pylint: disable=no-member
        return [self.to_domain(model) for model in ApplicationModel.objects.all()]

    @sync_to_async
    def update(self, application: Application, expected_updated_at: datetime) -> Application:
        with transaction.atomic():
            # pylint: disable=no-member
            affected = ApplicationModel.objects.filter(
                id=application.id,
                updated_at=expected_updated_at,
            ).update(
                name=application.name,
                link=application.link,
                updated_at=timezone.now(),
            )
            if affected == 0:
                if not ApplicationModel.objects.filter(id=application.id).exists():
                    raise ApplicationNotFoundError()
                raise UpdateConflictError("application")
            return self.to_domain(ApplicationModel.objects.get(id=application.id))

    @sync_to_async
    def delete(self, application_id: uuid.UUID) -> None:
        with transaction.atomic():
            # pylint: disable=no-member
            model = (
                ApplicationModel.objects.select_for_update().filter(id=application_id).first()
            )
            if model is None:
                raise ApplicationNotFoundError()
            if model.license_associations > 0 or model.licenses.exists():
                raise application_in_use_error()
            try:
                model.delete()
            except ProtectedError as e:
                raise application_in_use_error() from e
