"""
User domain entity.

A user is a named person licenses can be assigned to.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """User domain entity. Names are unique across the inventory."""

    id: uuid.UUID
    name: str

    def __post_init__(self):
        """Validate user entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("User name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("User name too long")

    @classmethod
    def create(cls, name: str, user_id: Optional[uuid.UUID] = None) -> "User":
        """
        Create a new User entity.

        Args:
            name: Display name
            user_id: Optional UUID (generated if not provided)

        Returns:
            User entity instance
        """
        return cls(id=user_id or uuid.uuid4(), name=name.strip())
