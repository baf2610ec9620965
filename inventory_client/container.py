"""
Client state wiring.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from inventory_client.http import InventoryApiClient
from inventory_client.stores.modal import ModalController, Navigator
from inventory_client.stores.notifications import NotificationStore
from inventory_client.stores.request_state import RequestStateTracker
from inventory_client.stores.resources.application_store import ApplicationStore
from inventory_client.stores.resources.license_store import LicenseStore
from inventory_client.stores.resources.user_store import UserStore
from inventory_client.stores.table import TableController


@dataclass
class ClientState:
    """Every store a front end needs, sharing one tracker and one notification queue."""

    api: InventoryApiClient
    notifications: NotificationStore
    requests: RequestStateTracker
    applications: ApplicationStore
    licenses: LicenseStore
    users: UserStore
    table: TableController
    modal: ModalController


def create_client_state(
    api: InventoryApiClient,
    navigator: Navigator,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ClientState:
    """
    Build a fully wired ClientState.

    Usage:
        state = create_client_state(InventoryApiClient(base_url), navigator)
        await fetch_all_data(state)
    """
    notifications = NotificationStore()
    requests = RequestStateTracker(clock=clock, sleep=sleep)
    applications = ApplicationStore(api, requests, notifications)
    licenses = LicenseStore(api, requests, notifications)
    users = UserStore(api, requests, notifications)
    return ClientState(
        api=api,
        notifications=notifications,
        requests=requests,
        applications=applications,
        licenses=licenses,
        users=users,
        table=TableController(api, licenses, requests, notifications),
        modal=ModalController(navigator, licenses, applications, requests),
    )
