"""
License write handlers.

Handlers for creating, updating and deleting licenses. Association
bookkeeping happens in the repository's transaction; handlers add
metrics, logging and cache invalidation.
"""
import logging

from core.domain.exceptions import UpdateConflictError
from core.metrics import licenses_created_total, licenses_deleted_total, update_conflicts_total
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.services.license_counts_cache import LicenseCountsCache
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: CreateLicenseCommand) -> License:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            Created License with its application and users

        Raises:
            ApplicationNotFoundError: If the application does not exist
            UserNotFoundError: If any user does not exist
        """
        license = License.create(command.attributes, license_id=command.license_id)
        created = await self.license_repository.create(license, command.user_ids)
        await LicenseCountsCache.invalidate()
        licenses_created_total.inc()
        logger.info(
            "Created license %s for application %s with %d users",
            created.id,
            created.application_id,
            len(created.users),
        )
        return created


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: UpdateLicenseCommand) -> License:
        """
        Handle update license command.

        Raises:
            LicenseNotFoundError: If license not found
            UpdateConflictError: If the license changed since it was read
        """
        try:
            updated = await self.license_repository.update(
                command.license_id,
                command.attributes,
                command.expected_updated_at,
                command.user_ids,
            )
        except UpdateConflictError:
            update_conflicts_total.labels(entity="license").inc()
            logger.warning("Stale update rejected for license %s", command.license_id)
            raise
        await LicenseCountsCache.invalidate()
        logger.info("Updated license %s", command.license_id)
        return updated


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> None:
        await self.license_repository.delete(command.license_id)
        await LicenseCountsCache.invalidate()
        licenses_deleted_total.inc()
        logger.info("Deleted license %s", command.license_id)
