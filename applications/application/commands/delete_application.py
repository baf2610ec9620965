"""
DeleteApplicationCommand.
"""
import uuid
from dataclasses import dataclass


@dataclass
class DeleteApplicationCommand:
    """Command to delete an application with no licenses."""

    application_id: uuid.UUID
