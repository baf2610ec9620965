"""
Modal and routing state.

The URL query decides which license modal is open: ?modal=add opens the
add form and ?modal=view&id=<uuid> opens a license. Anything else
redirects to the root.
"""

import logging
import re
from enum import Enum
from typing import Optional, Protocol
from urllib.parse import parse_qs, urlsplit

from inventory_client.models import ApplicationRecord
from inventory_client.stores.base import Writable
from inventory_client.stores.close import CloseTransition
from inventory_client.stores.request_state import RequestKey, RequestStateTracker
from inventory_client.stores.resources.application_store import ApplicationStore
from inventory_client.stores.resources.license_store import LicenseStore

logger = logging.getLogger(__name__)

UUID_V4 = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def is_uuid_v4(value: str) -> bool:
    return bool(UUID_V4.match(value or ""))


class Navigator(Protocol):
    """Browser history as seen by the modal controller."""

    def current_url(self) -> str:
        ...

    async def goto(self, url: str) -> None:
        ...


class LicenseModalMode(str, Enum):
    CLOSED = "closed"
    ADD = "add"
    VIEW = "view"


class ApplicationModalMode(str, Enum):
    CLOSED = "closed"
    ADD = "add"
    EDIT = "edit"


class ModalController:
    """Keeps modal state and the URL in step."""

    def __init__(
        self,
        navigator: Navigator,
        licenses: LicenseStore,
        applications: ApplicationStore,
        requests: RequestStateTracker,
    ):
        self.navigator = navigator
        self.licenses = licenses
        self.applications = applications
        self.requests = requests
        self.license_mode = Writable(LicenseModalMode.CLOSED)
        self.application_mode = Writable(ApplicationModalMode.CLOSED)
        self.show_assigned_users = Writable(False)

    async def handle_navigation(self) -> None:
        """Sync modal state with the current URL after a history change."""
        params = parse_qs(urlsplit(self.navigator.current_url()).query, keep_blank_values=True)
        mode = _first(params, "modal")
        license_id = _first(params, "id")

        self.close_all()

        if mode == LicenseModalMode.ADD.value and not license_id:
            self.license_mode.set(LicenseModalMode.ADD)
        elif mode == LicenseModalMode.VIEW.value and license_id and is_uuid_v4(license_id):
            self.license_mode.set(LicenseModalMode.VIEW)
            self.licenses.load(license_id)
        elif params:
            logger.info("Unrecognized modal parameters %s; redirecting", params)
            await self.navigator.goto("/")
        else:
            self.licenses.reset_fields()

    async def open_view_license(self, license_id: str) -> None:
        license_id = str(license_id)
        if not is_uuid_v4(license_id):
            await self.navigator.goto("/")
            self.close_all()
            return
        await self.navigator.goto(f"?modal=view&id={license_id}")
        self.license_mode.set(LicenseModalMode.VIEW)
        self.licenses.load(license_id)

    async def open_add_license(self) -> None:
        self.requests.set_error(RequestKey.LICENSE_FETCH, None)
        await self.navigator.goto("?modal=add")
        self.license_mode.set(LicenseModalMode.ADD)

    async def close_license(self) -> CloseTransition:
        await self.navigator.goto("/")
        self.close_all()
        return self.licenses.begin_close()

    def open_add_application(self) -> None:
        self.applications.reset_fields()
        self.application_mode.set(ApplicationModalMode.ADD)

    def open_edit_application(self, application: ApplicationRecord) -> None:
        self.applications.edit(application)
        self.application_mode.set(ApplicationModalMode.EDIT)

    def close_application(self) -> CloseTransition:
        self.application_mode.set(ApplicationModalMode.CLOSED)
        return self.applications.begin_close()

    def open_assigned_users(self) -> None:
        self.show_assigned_users.set(True)

    def close_assigned_users(self) -> None:
        self.show_assigned_users.set(False)

    def close_all(self) -> None:
        self.close_application()
        self.close_assigned_users()
        self.license_mode.set(LicenseModalMode.CLOSED)


def _first(params: dict, name: str) -> Optional[str]:
    values = params.get(name)
    return values[0] if values else None
