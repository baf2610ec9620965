"""
Application repository port (interface).

This defines the contract for application persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from applications.domain.application import Application


class ApplicationRepository(ABC):
    """
    Abstract repository for Application entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, application: Application) -> Application:
        """
        Insert a new application.

        Args:
            application: Application entity to insert

        Returns:
            Stored application entity
        """

    @abstractmethod
    async def find_by_id(self, application_id: uuid.UUID) -> Optional[Application]:
        """
        Find an application by ID.

        Args:
            application_id: Application UUID

        Returns:
            Application entity or None if not found
        """

    @abstractmethod
    async def list_all(self) -> List[Application]:
        """
        List all applications, newest first.

        Returns:
            List of Application entities
        """

    @abstractmethod
    async def update(
        self, application: Application, expected_updated_at: datetime
    ) -> Application:
        """
        Update name and link if the row was not modified since it was read.

        Args:
            application: Application carrying the new values
            expected_updated_at: Modification timestamp the caller last read

        Returns:
            Updated application entity

        Raises:
            ApplicationNotFoundError: If the application does not exist
            UpdateConflictError: If the timestamp no longer matches
        """

    @abstractmethod
    async def delete(self, application_id: uuid.UUID) -> None:
        """
        Delete an unreferenced application.

        Args:
            application_id: Application UUID

        Raises:
            ApplicationNotFoundError: If the application does not exist
            DataDeletionError: If licenses still reference it
        """
