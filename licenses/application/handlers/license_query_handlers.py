"""
License read handlers.
"""
import logging
from typing import List

from django.utils import timezone

from core.domain.exceptions import LicenseNotFoundError
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.query_licenses import QueryLicensesQuery
from licenses.application.services.license_counts_cache import LicenseCountsCache
from licenses.domain.license import License, LicenseCounts
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ListLicensesHandler:
    """Handler returning every license."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self) -> List[License]:
        return await self.license_repository.list_all()


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: GetLicenseQuery) -> License:
        """
        Handle get license query.

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_id(query.license_id)
        if not license:
            raise LicenseNotFoundError()
        return license


class QueryLicensesHandler:
    """Handler for QueryLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: QueryLicensesQuery) -> List[License]:
        """
        Handle license table query.

        Args:
            query: QueryLicensesQuery; today defaults to the local date

        Returns:
            Matching licenses in the requested order
        """
        today = query.today or timezone.localdate()
        licenses = await self.license_repository.query(query.query, today)
        logger.debug(
            "License query filter=%s search=%r sort=%s %s returned %d rows",
            query.query.filter,
            query.query.search,
            query.query.sort_by,
            query.query.sort_direction,
            len(licenses),
        )
        return licenses


class GetLicenseCountsHandler:
    """
    Handler returning per-filter license counts.

    Counts are served from cache when available.
    """

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self) -> LicenseCounts:
        today = timezone.localdate()
        cached = await LicenseCountsCache.get(today)
        if cached is not None:
            return cached

        counts = await self.license_repository.counts(today)
        await LicenseCountsCache.set(counts, today)
        return counts
