"""
Shared request handling for resource stores.
"""

import logging
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from inventory_client.errors import internal_error, parse_error
from inventory_client.http import InventoryApiClient, json_or_none
from inventory_client.stores.base import Writable
from inventory_client.stores.close import CloseTransition
from inventory_client.stores.notifications import NotificationStore
from inventory_client.stores.request_state import RequestStateTracker

logger = logging.getLogger(__name__)

R = TypeVar("R")
T = TypeVar("T")

# Loading indicators stay visible at least this long
FETCH_MIN_DURATION_MS = 1000
MUTATION_MIN_DURATION_MS = 1000


class ResourceStore(Generic[R]):
    """
    A collection mirroring one server resource.

    Failures never propagate to callers: they are logged, recorded in the
    request-state tracker and notified, and the collection is left as is.
    """

    entity = "record"

    def __init__(
        self,
        api: InventoryApiClient,
        requests: RequestStateTracker,
        notifications: NotificationStore,
    ):
        self.items: Writable[List[R]] = Writable([])
        self.api = api
        self.requests = requests
        self.notifications = notifications

    def get(self) -> List[R]:
        return self.items.get()

    def set(self, records: List[R]) -> None:
        self.items.set(records)

    def subscribe(self, callback: Callable[[List[R]], None]) -> Callable[[], None]:
        return self.items.subscribe(callback)

    async def _send(
        self,
        key: str,
        method: str,
        path: str,
        *,
        action: str,
        json: Any = None,
        min_duration_ms: Optional[int] = None,
    ) -> Optional[httpx.Response]:
        """
        Send a request tracked under key.

        Args:
            key: Request-state key
            method: HTTP method
            path: Path relative to the API base URL
            action: Verb used in messages, e.g. "add"
            json: Optional JSON body
            min_duration_ms: Minimum time the loading status is held

        Returns:
            The response when it was successful, otherwise None
        """
        self.requests.set_error(key, None)
        await self.requests.start_loading(key)
        try:
            response = await self.api.request(method, path, json=json)
        except httpx.HTTPError as e:
            await self.requests.end_loading(key)
            logger.error("Failed to %s %s: %s", action, self.entity, e)
            self.requests.set_error(
                key, internal_error(f"Failed to {action} {self.entity} due to a server error.")
            )
            self.notifications.add(
                f"A server error has occurred and the {self.entity} could not be handled "
                f"({action}). Please try refreshing the page.",
                type="alert",
                timeout_ms=None,
            )
            return None

        await self.requests.end_loading(key, min_duration_ms)
        if response.is_success:
            return response

        error = parse_error(
            json_or_none(response),
            response.status_code,
            f"Failed to {action} {self.entity}.",
        )
        logger.error("Failed to %s %s: %s %s", action, self.entity, error.type, error.message)
        self.requests.set_error(key, error)
        self.notifications.add(error.message, type="alert")
        return None

    async def _mutate(self, key: str, method: str, path: str, **kwargs) -> Optional[httpx.Response]:
        async with self.requests.mutation():
            return await self._send(
                key, method, path, min_duration_ms=MUTATION_MIN_DURATION_MS, **kwargs
            )

    def _decode(
        self, key: str, action: str, response: httpx.Response, parse: Callable[[Any], T]
    ) -> Optional[T]:
        """
        Parse a successful response body.

        A body that is not JSON or does not match the expected shape is
        recorded as an internal error and notified; None is returned and
        the caller leaves its state unchanged.
        """
        try:
            return parse(response.json())
        except (ValueError, TypeError, KeyError, ValidationError) as e:
            logger.error("Unreadable %s response for %s: %s", action, self.entity, e)
            self.requests.set_error(
                key, internal_error(f"Failed to {action} {self.entity}: unexpected server response.")
            )
            self.notifications.add(
                f"The server sent an unexpected response and the {self.entity} could not be "
                f"handled ({action}). Please try refreshing the page.",
                type="alert",
                timeout_ms=None,
            )
            return None


class EditableResourceStore(ResourceStore[R]):
    """
    A resource store with a record being added or edited in current.

    At most one close transition is pending; opening another record or
    closing again cancels it so a late reset never blanks the new record.
    """

    record_type: Type[R]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.current: Writable[R] = Writable(self.record_type())
        self._closing: Optional[CloseTransition] = None

    def _cancel_close(self) -> None:
        if self._closing is not None:
            self._closing.cancel()
            self._closing = None

    def edit(self, record: R) -> None:
        """Make a deep copy of record the current one."""
        self._cancel_close()
        self.current.set(record.model_copy(deep=True))

    def reset_fields(self) -> None:
        self._cancel_close()
        self._reset_current()

    def _reset_current(self) -> None:
        self.current.set(self.record_type())

    def begin_close(self) -> CloseTransition:
        self._cancel_close()
        self._closing = CloseTransition(self._reset_current)
        return self._closing
