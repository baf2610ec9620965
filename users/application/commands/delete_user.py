"""
DeleteUserCommand.
"""
import uuid
from dataclasses import dataclass


@dataclass
class DeleteUserCommand:
    """Command to delete a user and its license assignments."""

    user_id: uuid.UUID
