"""
Application domain entity.

An application is the software product a license is bought for.
It carries a denormalized count of the licenses referencing it.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class Application:
    """
    Application domain entity.

    license_associations is maintained incrementally by license
    writes and is never derived from this entity.
    """

    id: uuid.UUID
    name: str
    link: str
    license_associations: int
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate application entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Application name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Application name too long")
        if len(self.link) > 500:
            raise ValueError("Application link too long")
        if self.license_associations < 0:
            raise ValueError("License associations cannot be negative")

    @classmethod
    def create(
        cls,
        name: str,
        link: str = "",
        application_id: Optional[uuid.UUID] = None,
    ) -> "Application":
        """
        Create a new Application entity with no licenses.

        Args:
            name: Display name
            link: External link to the vendor or product page
            application_id: Optional UUID (generated if not provided)

        Returns:
            Application entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=application_id or uuid.uuid4(),
            name=name.strip(),
            link=(link or "").strip(),
            license_associations=0,
            created_at=now,
            updated_at=now,
        )

    def rename(self, name: str, link: str) -> "Application":
        """
        Create a new Application instance with edited display fields.

        Args:
            name: New display name
            link: New external link

        Returns:
            New Application instance
        """
        return replace(self, name=name.strip(), link=(link or "").strip())

    @property
    def can_be_deleted(self) -> bool:
        """Applications referenced by licenses must be kept."""
        return self.license_associations == 0
