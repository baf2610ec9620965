"""
GetLicenseQuery.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetLicenseQuery:
    """Query for a single license with its application and users."""

    license_id: uuid.UUID
