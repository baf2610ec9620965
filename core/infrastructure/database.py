"""
Database utilities and transaction management.
"""

from typing import Any, Callable, TypeVar

from asgiref.sync import sync_to_async
from django.db import transaction

T = TypeVar("T")


def run_atomic(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run a callable inside a single database transaction.

    Any exception raised by the callable rolls back every write it made.

    Usage:
        run_atomic(reconciler.release, license_model)
    """
    with transaction.atomic():
        return func(*args, **kwargs)


async def run_atomic_async(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run a synchronous ORM callable atomically from async code.

    The whole transaction runs in one thread-sensitive call so that
    every query shares the same connection.

    Usage:
        await run_atomic_async(self._delete, license_id)
    """
    return await sync_to_async(run_atomic)(func, *args, **kwargs)
