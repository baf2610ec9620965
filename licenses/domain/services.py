"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import uuid
from datetime import date, timedelta
from typing import Iterable, Optional, Set, Tuple


class AssociationPlanner:
    """Domain service deciding which associations a license write touches."""

    @staticmethod
    def diff_users(
        current: Iterable[uuid.UUID], submitted: Iterable[uuid.UUID]
    ) -> Tuple[Set[uuid.UUID], Set[uuid.UUID]]:
        """
        Compute the symmetric difference between assigned and submitted users.

        Users present in both sets are left untouched so their
        assignment rows keep their original creation time.

        Args:
            current: User IDs currently assigned
            submitted: User IDs the license should end up with

        Returns:
            Tuple of (to_add, to_remove)
        """
        current_ids = set(current)
        submitted_ids = set(submitted)
        return submitted_ids - current_ids, current_ids - submitted_ids

    @staticmethod
    def application_changes(
        previous_id: Optional[uuid.UUID], new_id: Optional[uuid.UUID]
    ) -> Tuple[Optional[uuid.UUID], Optional[uuid.UUID]]:
        """
        Decide which application counters move.

        Returns:
            Tuple of (application to decrement, application to increment);
            both None when the application did not change
        """
        if previous_id == new_id:
            return None, None
        return previous_id, new_id


class ExpirationWindow:
    """Domain service for renewal date windows."""

    @staticmethod
    def near_expiration(today: date, days: int) -> Tuple[date, date]:
        """
        Inclusive date range counted as near expiration.

        Args:
            today: Reference date
            days: Number of days ahead

        Returns:
            Tuple of (start, end)
        """
        if days < 0:
            raise ValueError("Near expiration window cannot be negative")
        return today, today + timedelta(days=days)
