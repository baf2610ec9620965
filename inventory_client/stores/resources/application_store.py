"""
Application store.
"""

import logging
import uuid
from typing import List

from inventory_client.models import ApplicationRecord
from inventory_client.stores.request_state import RequestKey
from inventory_client.stores.resources.base import FETCH_MIN_DURATION_MS, EditableResourceStore

logger = logging.getLogger(__name__)


class ApplicationStore(EditableResourceStore[ApplicationRecord]):
    """Applications plus the application being added or edited."""

    entity = "application"
    record_type = ApplicationRecord

    async def fetch_all(self) -> bool:
        response = await self._send(
            RequestKey.APPLICATION_FETCH,
            "GET",
            "/api/applications",
            action="fetch",
            min_duration_ms=FETCH_MIN_DURATION_MS,
        )
        if response is None:
            return False
        applications = self._decode(
            RequestKey.APPLICATION_FETCH, "fetch", response, _parse_applications
        )
        if applications is None:
            return False
        self.set(applications)
        return True

    async def add(self, application: ApplicationRecord) -> bool:
        response = await self._mutate(
            RequestKey.APPLICATION_POST,
            "POST",
            "/api/applications",
            action="add",
            json=application.to_payload("name", "link"),
        )
        if response is None:
            return False
        created = self._decode(
            RequestKey.APPLICATION_POST, "add", response, ApplicationRecord.model_validate
        )
        if created is None:
            return False
        self.items.update(lambda applications: [created, *applications])
        self.notifications.add("Application added successfully", type="success")
        return True

    async def update(self, application: ApplicationRecord) -> bool:
        """
        Save an edited application.

        The collection is refreshed afterwards so every record carries the
        server's latest updatedAt.
        """
        response = await self._mutate(
            RequestKey.APPLICATION_POST,
            "PUT",
            f"/api/applications/{application.id}",
            action="update",
            json=application.to_payload("name", "link", "updated_at"),
        )
        if response is None:
            return False
        self.notifications.add("Application was updated successfully", type="success")
        await self.fetch_all()
        return True

    async def delete(self, application_id: uuid.UUID) -> bool:
        application_id = uuid.UUID(str(application_id))
        response = await self._mutate(
            RequestKey.APPLICATION_DELETE,
            "DELETE",
            f"/api/applications/{application_id}",
            action="delete",
        )
        if response is None:
            return False
        self.items.update(
            lambda applications: [item for item in applications if item.id != application_id]
        )
        self.notifications.add("Application deleted successfully", type="success")
        return True


def _parse_applications(data) -> List[ApplicationRecord]:
    return [ApplicationRecord.model_validate(item) for item in data]
