"""
UpdateLicenseCommand.

Command to edit a license guarded by its last-read timestamp.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from licenses.domain.license import LicenseAttributes


@dataclass
class UpdateLicenseCommand:
    """
    Command to update a license.

    user_ids of None leaves assignments untouched; an empty list
    removes every assignment.
    """

    license_id: uuid.UUID
    attributes: LicenseAttributes
    expected_updated_at: datetime
    user_ids: Optional[List[uuid.UUID]] = None
