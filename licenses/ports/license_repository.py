"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Iterable, List, Optional

from core.domain.value_objects import LicenseQuery
from licenses.domain.license import License, LicenseAttributes, LicenseCounts


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    Every write keeps application license counts and user
    assignments consistent within one transaction.
    """

    @abstractmethod
    async def list_all(self) -> List[License]:
        """
        List all licenses with their application and users, newest first.

        Returns:
            List of License entities
        """

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID, with its application and users.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def query(self, query: LicenseQuery, today: date) -> List[License]:
        """
        Filter, search and sort licenses.

        Args:
            query: Filter, search and sort selection
            today: Reference date for expiration filters

        Returns:
            List of matching License entities
        """

    @abstractmethod
    async def counts(self, today: date) -> LicenseCounts:
        """
        Count licenses per named filter.

        Args:
            today: Reference date for expiration filters

        Returns:
            LicenseCounts
        """

    @abstractmethod
    async def create(
        self, license: License, user_ids: Optional[Iterable[uuid.UUID]] = None
    ) -> License:
        """
        Insert a license, count it against its application and assign users.

        Raises:
            ApplicationNotFoundError: If the application does not exist
            UserNotFoundError: If any user does not exist
        """

    @abstractmethod
    async def update(
        self,
        license_id: uuid.UUID,
        attributes: LicenseAttributes,
        expected_updated_at: datetime,
        user_ids: Optional[Iterable[uuid.UUID]] = None,
    ) -> License:
        """
        Update a license if it was not modified since it was read.

        User assignments are reconciled only when user_ids is given.

        Raises:
            LicenseNotFoundError: If the license does not exist
            UpdateConflictError: If the timestamp no longer matches
            ApplicationNotFoundError: If the new application does not exist
            UserNotFoundError: If any user does not exist
        """

    @abstractmethod
    async def delete(self, license_id: uuid.UUID) -> None:
        """
        Delete a license, releasing its application count and user assignments.

        Raises:
            LicenseNotFoundError: If the license does not exist
        """
