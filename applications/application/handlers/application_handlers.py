"""
Application handlers.

Handlers for listing, creating, updating, and deleting applications.
"""
import logging
from typing import List

from applications.application.commands.create_application import CreateApplicationCommand
from applications.application.commands.delete_application import DeleteApplicationCommand
from applications.application.commands.update_application import UpdateApplicationCommand
from applications.domain.application import Application
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import (
    ApplicationNotFoundError,
    DataDeletionError,
    UpdateConflictError,
)
from core.metrics import deletions_blocked_total, update_conflicts_total

logger = logging.getLogger(__name__)


class ListApplicationsHandler:
    """Handler returning every application."""

    def __init__(self, application_repository: ApplicationRepository):
        self.application_repository = application_repository

    async def handle(self) -> List[Application]:
        return await self.application_repository.list_all()


class CreateApplicationHandler:
    """Handler for CreateApplicationCommand."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repository."""
        self.application_repository = application_repository

    async def handle(self, command: CreateApplicationCommand) -> Application:
        """
        Handle create application command.

        Args:
            command: CreateApplicationCommand

        Returns:
            Created Application entity with no license associations
        """
        application = Application.create(
            name=command.name,
            link=command.link,
            application_id=command.application_id,
        )
        created = await self.application_repository.add(application)
        logger.info("Created application %s (%s)", created.id, created.name)
        return created


class UpdateApplicationHandler:
    """Handler for UpdateApplicationCommand."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repository."""
        self.application_repository = application_repository

    async def handle(self, command: UpdateApplicationCommand) -> Application:
        """
        Handle update application command.

        Args:
            command: UpdateApplicationCommand

        Returns:
            Updated Application entity

        Raises:
            ApplicationNotFoundError: If application not found
            UpdateConflictError: If the application changed since it was read
        """
        current = await self.application_repository.find_by_id(command.application_id)
        if not current:
            raise ApplicationNotFoundError()

        try:
            return await self.application_repository.update(
                current.rename(command.name, command.link),
                command.expected_updated_at,
            )
        except UpdateConflictError:
            update_conflicts_total.labels(entity="application").inc()
            logger.warning("Stale update rejected for application %s", command.application_id)
            raise


class DeleteApplicationHandler:
    """Handler for DeleteApplicationCommand."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repository."""
        self.application_repository = application_repository

    async def handle(self, command: DeleteApplicationCommand) -> None:
        """
        Handle delete application command.

        Args:
            command: DeleteApplicationCommand

        Raises:
            ApplicationNotFoundError: If application not found
            DataDeletionError: If licenses still reference the application
        """
        try:
            await self.application_repository.delete(command.application_id)
        except DataDeletionError:
            deletions_blocked_total.labels(entity="application").inc()
            logger.info("Blocked deletion of referenced application %s", command.application_id)
            raise
        logger.info("Deleted application %s", command.application_id)
