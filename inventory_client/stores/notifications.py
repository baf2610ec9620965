"""
User-visible notifications.

Only the queue is kept here; rendering belongs to the front end.
"""

import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import List, Optional

from inventory_client.stores.base import Writable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 3000


@dataclass(frozen=True)
class Notification:
    id: int
    message: str
    type: str = "info"
    timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS


class NotificationStore(Writable[List[Notification]]):
    """Queue of notifications shown to the user."""

    def __init__(self):
        super().__init__([])
        self._ids = itertools.count(1)

    def add(
        self, message: str, type: str = "info", timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS
    ) -> Notification:
        """
        Queue a notification.

        A notification with a timeout is dismissed automatically when an
        event loop is running; timeout_ms=None keeps it until dismissed.
        """
        notification = Notification(next(self._ids), message, type, timeout_ms)
        self.update(lambda items: [*items, notification])
        if timeout_ms is not None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
            if loop is not None:
                loop.call_later(timeout_ms / 1000, self.dismiss, notification.id)
        return notification

    def dismiss(self, notification_id: int) -> None:
        self.update(lambda items: [item for item in items if item.id != notification_id])
