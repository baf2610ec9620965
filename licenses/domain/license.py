"""
License domain entity.

This is the core domain entity representing a purchased license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional, Tuple

from applications.domain.application import Application
from users.domain.user import User


@dataclass(frozen=True)
class LicenseAttributes:
    """
    The editable fields of a license.

    Free-text fields are stored as entered; empty strings mean unset.
    """

    application_id: uuid.UUID
    renewal_date: Optional[date] = None
    auto_renewal: bool = False
    cost: Optional[Decimal] = None
    renewal_interval: str = ""
    category: str = ""
    status: str = ""
    contact_person: str = ""
    additional_contact_info: str = ""
    comment: str = ""

    def __post_init__(self):
        """Validate license attributes."""
        if not self.application_id:
            raise ValueError("Application ID is required")
        if self.cost is not None and self.cost < 0:
            raise ValueError("Cost cannot be negative")

    def as_dict(self) -> dict:
        """Field values keyed by model field name."""
        return {
            "application_id": self.application_id,
            "renewal_date": self.renewal_date,
            "auto_renewal": self.auto_renewal,
            "cost": self.cost,
            "renewal_interval": self.renewal_interval,
            "category": self.category,
            "status": self.status,
            "contact_person": self.contact_person,
            "additional_contact_info": self.additional_contact_info,
            "comment": self.comment,
        }


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    application and users are populated when the license is read
    together with its associations.
    """

    id: uuid.UUID
    attributes: LicenseAttributes
    created_at: datetime
    updated_at: datetime
    application: Optional[Application] = None
    users: Tuple[User, ...] = ()

    @classmethod
    def create(
        cls,
        attributes: LicenseAttributes,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new License entity.

        Args:
            attributes: Editable license fields
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            attributes=attributes,
            created_at=now,
            updated_at=now,
        )

    @property
    def application_id(self) -> uuid.UUID:
        return self.attributes.application_id

    @property
    def is_assigned(self) -> bool:
        """A license is in use once at least one user is assigned."""
        return len(self.users) > 0

    def with_attributes(self, attributes: LicenseAttributes) -> "License":
        """Return a copy carrying new editable fields."""
        return replace(self, attributes=attributes)

    def is_expired(self, today: date) -> bool:
        """
        Check if the renewal date has passed.

        Licenses without a renewal date never expire.
        """
        renewal_date = self.attributes.renewal_date
        return renewal_date is not None and renewal_date < today

    def is_near_expiration(self, today: date, days: int) -> bool:
        """
        Check if the renewal date falls within the next `days` days.

        Args:
            today: Reference date
            days: Window length, today inclusive

        Returns:
            True if today <= renewal_date <= today + days
        """
        renewal_date = self.attributes.renewal_date
        if renewal_date is None:
            return False
        return today <= renewal_date <= today + timedelta(days=days)


@dataclass(frozen=True)
class LicenseCounts:
    """Per-filter license tallies."""

    all: int
    assigned: int
    unassigned: int
    near_expiration: int
    expired: int

    def as_dict(self) -> dict:
        return {
            "all": self.all,
            "assigned": self.assigned,
            "unassigned": self.unassigned,
            "near_expiration": self.near_expiration,
            "expired": self.expired,
        }
