"""
UpdateApplicationCommand.

Command to edit an application's display fields.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass
class UpdateApplicationCommand:
    """Command to update an application guarded by its last-read timestamp."""

    application_id: uuid.UUID
    name: str
    link: str
    expected_updated_at: datetime
