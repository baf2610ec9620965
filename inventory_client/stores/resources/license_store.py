"""
License store.
"""

import logging
import uuid
from typing import List, Optional

from inventory_client.errors import NotFoundError
from inventory_client.models import LICENSE_FIELDS, LicenseCounts, LicenseRecord
from inventory_client.stores.base import Writable
from inventory_client.stores.request_state import RequestKey
from inventory_client.stores.resources.base import FETCH_MIN_DURATION_MS, EditableResourceStore

logger = logging.getLogger(__name__)


class LicenseStore(EditableResourceStore[LicenseRecord]):
    """
    Licenses, the license being viewed or added, and per-filter counts.

    current holds a deep copy so edits never touch the collection until
    they are saved.
    """

    entity = "license"
    record_type = LicenseRecord

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.counts: Writable[Optional[LicenseCounts]] = Writable(None)

    def find(self, license_id) -> Optional[LicenseRecord]:
        license_id = uuid.UUID(str(license_id))
        return next((item for item in self.get() if item.id == license_id), None)

    async def fetch_all(self) -> bool:
        response = await self._send(
            RequestKey.LICENSE_FETCH,
            "GET",
            "/api/licenses",
            action="fetch",
            min_duration_ms=FETCH_MIN_DURATION_MS,
        )
        if response is None:
            return False
        licenses = self._decode(RequestKey.LICENSE_FETCH, "fetch", response, parse_licenses)
        if licenses is None:
            return False
        self.set(licenses)
        return True

    async def fetch_counts(self) -> bool:
        response = await self._send(
            RequestKey.LICENSE_FETCH, "GET", "/api/licenses/counts", action="count"
        )
        if response is None:
            return False
        counts = self._decode(
            RequestKey.LICENSE_FETCH, "count", response, LicenseCounts.model_validate
        )
        if counts is None:
            return False
        self.counts.set(counts)
        return True

    def load(self, license_id) -> bool:
        """
        Make a deep copy of a collection record the current license.

        A record missing from the collection is recorded as NotFound on the
        license fetch key.
        """
        record = self.find(license_id)
        if record is None:
            logger.warning("License %s is not in the collection", license_id)
            self.requests.set_error(
                RequestKey.LICENSE_FETCH,
                NotFoundError(
                    status=404,
                    message="License could not be found.",
                    details=(
                        "Please verify the provided ID is correct. If correct, the license "
                        "might have been deleted or does not exist."
                    ),
                ),
            )
            return False
        self.requests.set_error(RequestKey.LICENSE_FETCH, None)
        self.edit(record)
        return True

    async def add(self, license: LicenseRecord) -> bool:
        response = await self._mutate(
            RequestKey.LICENSE_POST,
            "POST",
            "/api/licenses",
            action="add",
            json=license.to_payload(*LICENSE_FIELDS),
        )
        if response is None:
            return False
        created = self._decode(
            RequestKey.LICENSE_POST, "add", response, LicenseRecord.model_validate
        )
        if created is None:
            return False
        self.items.update(lambda licenses: [created, *licenses])
        self.notifications.add("License added successfully", type="success")
        await self.fetch_counts()
        return True

    async def update(self, license: LicenseRecord) -> bool:
        """
        Save an edited license.

        On success the license is re-read and patched into the collection
        in place.
        """
        previous = self.find(license.id)
        body = {
            "currentLicense": (previous or license).to_payload("id", "application_id"),
            "updatedLicense": license.to_payload(*LICENSE_FIELDS, "updated_at"),
        }
        response = await self._mutate(
            RequestKey.LICENSE_POST,
            "PUT",
            f"/api/licenses/{license.id}",
            action="update",
            json=body,
        )
        if response is None:
            return False
        self.notifications.add("License was updated successfully", type="success")

        refreshed = await self._send(
            RequestKey.LICENSE_FETCH, "GET", f"/api/licenses/{license.id}", action="fetch"
        )
        record = None
        if refreshed is not None:
            record = self._decode(
                RequestKey.LICENSE_FETCH, "fetch", refreshed, LicenseRecord.model_validate
            )
        if record is not None:
            self.items.update(
                lambda licenses: [record if item.id == record.id else item for item in licenses]
            )
            self.current.set(record.model_copy(deep=True))
        await self.fetch_counts()
        return True

    async def delete(self, license_id) -> bool:
        license_id = uuid.UUID(str(license_id))
        response = await self._mutate(
            RequestKey.LICENSE_DELETE,
            "DELETE",
            f"/api/licenses/{license_id}",
            action="delete",
        )
        if response is None:
            return False
        self.items.update(lambda licenses: [item for item in licenses if item.id != license_id])
        self.notifications.add("License deleted successfully", type="success")
        await self.fetch_counts()
        return True


def parse_licenses(data) -> List[LicenseRecord]:
    return [LicenseRecord.model_validate(item) for item in data]
