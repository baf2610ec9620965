"""
CreateLicenseCommand.

Command to add a license and assign its users.
"""
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from licenses.domain.license import LicenseAttributes


@dataclass
class CreateLicenseCommand:
    """Command to create a license."""

    attributes: LicenseAttributes
    user_ids: List[uuid.UUID] = field(default_factory=list)
    license_id: Optional[uuid.UUID] = None
