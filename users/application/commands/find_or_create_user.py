"""
FindOrCreateUserCommand.
"""
from dataclasses import dataclass


@dataclass
class FindOrCreateUserCommand:
    """Command to resolve a user by name, creating it when missing."""

    name: str
