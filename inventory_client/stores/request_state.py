"""
Request lifecycle tracking.

Each declared request key has a status (idle, loading, success, error)
and the latest error payload. Loading indicators can be held for a
minimum duration so fast responses don't flicker.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, Optional

from inventory_client.errors import ErrorPayloadBase
from inventory_client.stores.base import Writable

logger = logging.getLogger(__name__)


class RequestKey(str, Enum):
    """Named operations whose lifecycle is tracked."""

    APPLICATION_FETCH = "applicationFetchRequest"
    APPLICATION_POST = "applicationPostRequest"
    APPLICATION_DELETE = "applicationDeleteRequest"
    LICENSE_FETCH = "licenseFetchRequest"
    LICENSE_POST = "licensePostRequest"
    LICENSE_DELETE = "licenseDeleteRequest"
    TABLE_FETCH = "tableFetchRequest"
    USER_FETCH = "userFetchRequest"
    USER_POST = "userPostRequest"
    USER_DELETE = "userDeleteRequest"


def _normalize(key) -> str:
    return key.value if isinstance(key, Enum) else key


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class RequestState:
    status: RequestStatus = RequestStatus.IDLE
    error: Optional[ErrorPayloadBase] = None

    @property
    def loading(self) -> bool:
        return self.status == RequestStatus.LOADING


class RequestStateTracker:
    """
    Per-key request state.

    clock and sleep are injectable so minimum durations can be tested
    without waiting.
    """

    def __init__(
        self,
        keys: Iterable[str] = tuple(RequestKey),
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._states: Dict[str, Writable[RequestState]] = {
            _normalize(key): Writable(RequestState()) for key in keys
        }
        self._started_at: Dict[str, float] = {}
        self._min_duration_ms: Dict[str, int] = {}
        self._clock = clock
        self._sleep = sleep
        self.buttons_disabled = Writable(False)

    def state(self, key: str) -> Writable[RequestState]:
        """
        Observable state for a key.

        Raises:
            KeyError: If the key was not declared
        """
        return self._states[_normalize(key)]

    def get(self, key: str) -> RequestState:
        return self.state(key).get()

    async def start_loading(self, key: str, min_duration_ms: Optional[int] = None) -> None:
        """Mark a request as in flight."""
        store = self.state(key)
        key = _normalize(key)
        self._started_at[key] = self._clock()
        if min_duration_ms is not None:
            self._min_duration_ms[key] = min_duration_ms
        else:
            self._min_duration_ms.pop(key, None)
        store.update(lambda state: replace(state, status=RequestStatus.LOADING))

    async def end_loading(self, key: str, min_duration_ms: Optional[int] = None) -> None:
        """
        Mark a request as finished.

        When a minimum duration was given here or to start_loading, the
        loading status is held until that long after start_loading.
        """
        store = self.state(key)
        key = _normalize(key)
        minimum = max(min_duration_ms or 0, self._min_duration_ms.pop(key, 0) or 0)
        started_at = self._started_at.pop(key, None)
        if minimum and started_at is not None:
            remaining = minimum / 1000 - (self._clock() - started_at)
            if remaining > 0:
                await self._sleep(remaining)

        def finish(state: RequestState) -> RequestState:
            status = RequestStatus.ERROR if state.error is not None else RequestStatus.SUCCESS
            return replace(state, status=status)

        store.update(finish)

    def set_error(self, key: str, error: Optional[ErrorPayloadBase]) -> None:
        """Record the latest failure for a key, or clear it with None."""
        store = self.state(key)
        if error is None:
            store.update(
                lambda state: replace(
                    state,
                    error=None,
                    status=RequestStatus.IDLE if state.status == RequestStatus.ERROR else state.status,
                )
            )
            return
        logger.debug("Request %s failed: %s", key, error.message)
        store.set(RequestState(status=RequestStatus.ERROR, error=error))

    @asynccontextmanager
    async def mutation(self):
        """Disable buttons while a write is in flight."""
        self.buttons_disabled.set(True)
        try:
            yield
        finally:
            self.buttons_disabled.set(False)
