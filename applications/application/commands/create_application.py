"""
CreateApplicationCommand.

Command to add an application to the inventory.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateApplicationCommand:
    """Command to create an application."""

    name: str
    link: str = ""
    application_id: Optional[uuid.UUID] = None
