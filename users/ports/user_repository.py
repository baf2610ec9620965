"""
User repository port (interface).
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Tuple

from users.domain.user import User


class UserRepository(ABC):
    """Abstract repository for User entities."""

    @abstractmethod
    async def list_all(self) -> List[User]:
        """
        List all users ordered by name.

        Returns:
            List of User entities
        """

    @abstractmethod
    async def find_or_create(self, name: str) -> Tuple[User, bool]:
        """
        Return the user with this name, creating it when missing.

        Args:
            name: User name

        Returns:
            Tuple of (user, created)
        """

    @abstractmethod
    async def delete(self, user_id: uuid.UUID) -> None:
        """
        Delete a user together with its license assignments.

        Args:
            user_id: User UUID

        Raises:
            UserNotFoundError: If the user does not exist
        """
