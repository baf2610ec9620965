"""
User handlers.
"""
import logging
from typing import List, Tuple

from licenses.application.services.license_counts_cache import LicenseCountsCache
from users.application.commands.delete_user import DeleteUserCommand
from users.application.commands.find_or_create_user import FindOrCreateUserCommand
from users.domain.user import User
from users.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)


class ListUsersHandler:
    """Handler returning every user."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self) -> List[User]:
        return await self.user_repository.list_all()


class FindOrCreateUserHandler:
    """Handler for FindOrCreateUserCommand."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, command: FindOrCreateUserCommand) -> Tuple[User, bool]:
        """
        Handle find-or-create user command.

        Returns:
            Tuple of (user, created)
        """
        user, created = await self.user_repository.find_or_create(command.name)
        if created:
            logger.info("Created user %s (%s)", user.id, user.name)
        return user, created


class DeleteUserHandler:
    """Handler for DeleteUserCommand."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, command: DeleteUserCommand) -> None:
        """
        Handle delete user command.

        Removing a user drops its assignments, which can move licenses
        from assigned to unassigned, so cached counts are invalidated.

        Raises:
            UserNotFoundError: If user not found
        """
        await self.user_repository.delete(command.user_id)
        await LicenseCountsCache.invalidate()
        logger.info("Deleted user %s", command.user_id)
