"""
Observable value containers.
"""

import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_IMMUTABLE = (str, int, float, bool, bytes, type(None))


def _safe_not_equal(old, new) -> bool:
    """Immutable values only notify on change; anything else always notifies."""
    if isinstance(old, _IMMUTABLE) and isinstance(new, _IMMUTABLE):
        return old != new
    return True


class Writable(Generic[T]):
    """
    A value with subscribers.

    subscribe() calls the callback immediately with the current value and
    again after every change; it returns a callable that unsubscribes.
    """

    def __init__(self, value: T):
        self._value = value
        self._subscribers: List[Callable[[T], None]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if not _safe_not_equal(self._value, value):
            return
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def update(self, updater: Callable[[T], T]) -> None:
        self.set(updater(self._value))

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
