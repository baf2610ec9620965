"""
User store.
"""

import logging
import uuid
from typing import Optional, Tuple

from inventory_client.models import UserRecord
from inventory_client.stores.request_state import RequestKey
from inventory_client.stores.resources.base import ResourceStore

logger = logging.getLogger(__name__)


class UserStore(ResourceStore[UserRecord]):
    """Users licenses can be assigned to."""

    entity = "user"

    async def fetch_all(self) -> bool:
        response = await self._send(RequestKey.USER_FETCH, "GET", "/api/user", action="fetch")
        if response is None:
            return False
        users = self._decode(
            RequestKey.USER_FETCH,
            "fetch",
            response,
            lambda data: [UserRecord.model_validate(item) for item in data],
        )
        if users is None:
            return False
        self.set(users)
        return True

    async def find_or_create(self, name: str) -> Optional[UserRecord]:
        """
        Resolve a user by name.

        Returns:
            The user, or None when the request failed; newly created users
            are prepended to the collection
        """
        response = await self._send(
            RequestKey.USER_POST,
            "POST",
            "/api/user/find-or-create",
            action="add",
            json={"name": name},
        )
        if response is None:
            return None
        parsed = self._decode(RequestKey.USER_POST, "add", response, _parse_find_or_create)
        if parsed is None:
            return None
        user, created = parsed
        if created:
            self.items.update(lambda users: [user, *users])
        return user

    async def delete(self, user_id) -> bool:
        user_id = uuid.UUID(str(user_id))
        response = await self._mutate(
            RequestKey.USER_DELETE, "DELETE", f"/api/user/delete/{user_id}", action="delete"
        )
        if response is None:
            return False
        self.items.update(lambda users: [user for user in users if user.id != user_id])
        return True


def _parse_find_or_create(data) -> Tuple[UserRecord, bool]:
    return UserRecord.model_validate(data["user"]), bool(data.get("created"))
