"""
License counts cache service.

Caches per-filter license tallies under a key for the day they were
counted, since the near-expiration and expired counts move at midnight.
Every license or user mutation invalidates the current day's entry.
"""
import logging
from datetime import date
from typing import Optional

from django.conf import settings
from django.utils import timezone

from core.infrastructure.cache_adapters import cache_adapter
from licenses.domain.license import LicenseCounts

logger = logging.getLogger(__name__)

CACHE_KEY_LICENSE_COUNTS = "licenses:counts:{day}"


def _cache_key(today: Optional[date]) -> str:
    return CACHE_KEY_LICENSE_COUNTS.format(day=(today or timezone.localdate()).isoformat())


class LicenseCountsCache:
    """Service for caching license counts."""

    @staticmethod
    async def get(today: Optional[date] = None) -> Optional[LicenseCounts]:
        """
        Get cached license counts.

        Args:
            today: Day the counts are relative to; defaults to the local date

        Returns:
            Cached LicenseCounts or None
        """
        cached = await cache_adapter.get(_cache_key(today))
        if not cached:
            return None
        try:
            return LicenseCounts(**cached)
        except TypeError as e:
            logger.warning("Error deserializing cached license counts: %s", e)
            return None

    @staticmethod
    async def set(
        counts: LicenseCounts, today: Optional[date] = None, ttl: Optional[int] = None
    ) -> None:
        """
        Cache license counts.

        Args:
            counts: LicenseCounts to cache
            today: Day the counts were computed for
            ttl: Time to live in seconds
        """
        await cache_adapter.set(
            _cache_key(today),
            counts.as_dict(),
            timeout=ttl or settings.LICENSE_COUNTS_CACHE_TTL,
        )

    @staticmethod
    async def invalidate(today: Optional[date] = None) -> None:
        """Invalidate cached license counts."""
        await cache_adapter.delete(_cache_key(today))
        logger.debug("Invalidated license counts cache")
