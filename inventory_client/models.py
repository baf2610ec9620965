"""
Client-side records.

Field names are snake_case in Python and camelCase on the wire.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base for records exchanged with the inventory API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self, *fields: str) -> dict:
        """camelCase JSON payload, optionally limited to the given fields."""
        return self.model_dump(by_alias=True, mode="json", include=set(fields) or None)


class ApplicationRecord(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = ""
    link: str = ""
    license_associations: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserRecord(Record):
    id: uuid.UUID
    name: str


class LicenseRecord(Record):
    """A license as returned by the API, with its application and users."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    application_id: Optional[uuid.UUID] = None
    renewal_date: Optional[date] = None
    auto_renewal: bool = False
    cost: Optional[Decimal] = None
    renewal_interval: str = ""
    category: str = ""
    status: str = ""
    contact_person: str = ""
    additional_contact_info: str = ""
    comment: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    application: Optional[ApplicationRecord] = None
    users: List[UserRecord] = Field(default_factory=list)


LICENSE_FIELDS = (
    "application_id",
    "renewal_date",
    "auto_renewal",
    "cost",
    "renewal_interval",
    "category",
    "status",
    "contact_person",
    "additional_contact_info",
    "comment",
    "users",
)


class LicenseCounts(Record):
    all: int = 0
    assigned: int = 0
    unassigned: int = 0
    near_expiration: int = 0
    expired: int = 0
