"""
License table state.

Tracks the active filter, the search text and the sort order of the
license table. Every change builds a query string, fetches the matching
licenses and replaces the license collection with them.
"""

import logging
from enum import Enum
from typing import Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from inventory_client.errors import internal_error, parse_error
from inventory_client.http import InventoryApiClient, json_or_none
from inventory_client.stores.base import Writable
from inventory_client.stores.notifications import NotificationStore
from inventory_client.stores.request_state import RequestKey, RequestStateTracker
from inventory_client.stores.resources.license_store import LicenseStore, parse_licenses

logger = logging.getLogger(__name__)


class TableFilter(str, Enum):
    ALL = "All"
    IN_USE = "In use"
    UNASSIGNED = "Unassigned"
    NEAR_EXPIRATION = "Near expiration"
    EXPIRED = "Expired"
    SEARCH = "Search"


class SortOrder(str, Enum):
    DEFAULT = "DEFAULT"
    ASC = "ASC"
    DESC = "DESC"


SORT_COLUMNS = ("application", "contactPerson", "users", "expirationDate")

FILTER_QUERIES = {
    TableFilter.ALL.value: "?filter=all",
    TableFilter.IN_USE.value: "?filter=assigned",
    TableFilter.UNASSIGNED.value: "?filter=unassigned",
    TableFilter.NEAR_EXPIRATION.value: "?filter=near-expiration",
    TableFilter.EXPIRED.value: "?filter=expired",
}

NEXT_SORT_ORDER = {
    SortOrder.DEFAULT: SortOrder.ASC,
    SortOrder.ASC: SortOrder.DESC,
    SortOrder.DESC: SortOrder.DEFAULT,
}


def default_sort_state() -> Dict[str, SortOrder]:
    return {column: SortOrder.DEFAULT for column in SORT_COLUMNS}


def next_sort_state(state: Dict[str, SortOrder], column: str) -> Dict[str, SortOrder]:
    """
    Advance one column DEFAULT -> ASC -> DESC -> DEFAULT.

    Every other column goes back to DEFAULT.

    Raises:
        KeyError: If the column is not sortable
    """
    if column not in state:
        raise KeyError(column)
    new_state = default_sort_state()
    new_state[column] = NEXT_SORT_ORDER[SortOrder(state[column])]
    return new_state


def active_sort(state: Dict[str, SortOrder]):
    """Return (column, order) of the sorted column, or (None, DEFAULT)."""
    for column, order in state.items():
        if order != SortOrder.DEFAULT:
            return column, SortOrder(order)
    return None, SortOrder.DEFAULT


def construct_filter_query(
    filter_name: str,
    search: str = "",
    sort_order: SortOrder = SortOrder.DEFAULT,
    sort_column: Optional[str] = None,
) -> str:
    """
    Build the query string for /api/licenses/query.

    >>> construct_filter_query("Near expiration", "", SortOrder.ASC, "expirationDate")
    '?filter=near-expiration&sortBy=expirationDate&sortDirection=ASC'
    """
    filter_name = getattr(filter_name, "value", filter_name)
    if filter_name == TableFilter.SEARCH.value:
        query = f"?search={quote(search, safe='')}" if search else ""
    elif filter_name in FILTER_QUERIES:
        query = FILTER_QUERIES[filter_name]
    else:
        logger.error("Unknown filter: %s", filter_name)
        query = FILTER_QUERIES[TableFilter.ALL.value]

    if sort_column and SortOrder(sort_order) != SortOrder.DEFAULT:
        query += ("&" if query else "?") + (
            f"sortBy={sort_column}&sortDirection={SortOrder(sort_order).value}"
        )
    return query


class TableController:
    """
    Drives the license table.

    Only the response to the newest query may update the collection;
    responses to superseded queries are dropped.
    """

    def __init__(
        self,
        api: InventoryApiClient,
        licenses: LicenseStore,
        requests: RequestStateTracker,
        notifications: NotificationStore,
    ):
        self.api = api
        self.licenses = licenses
        self.requests = requests
        self.notifications = notifications
        self.filter = Writable(TableFilter.ALL.value)
        self.search = Writable("")
        self.sort = Writable(default_sort_state())
        self._generation = 0

    def current_query(self) -> str:
        column, order = active_sort(self.sort.get())
        return construct_filter_query(self.filter.get(), self.search.get(), order, column)

    async def filter_by(self, filter_name: str) -> None:
        self.filter.set(getattr(filter_name, "value", filter_name))
        await self.update_state()

    async def search_for(self, text: str) -> None:
        """Switch to the search filter with the given text."""
        self.search.set(text)
        self.filter.set(TableFilter.SEARCH.value)
        await self.update_state()

    async def sort_by(self, column: str) -> None:
        self.sort.set(next_sort_state(self.sort.get(), column))
        await self.update_state()

    async def update_state(self) -> None:
        await self._send_query(self.current_query())

    def _reset(self) -> None:
        self.filter.set(TableFilter.ALL.value)
        self.sort.set(default_sort_state())

    async def _send_query(self, query: str) -> None:
        self._generation += 1
        generation = self._generation
        key = RequestKey.TABLE_FETCH

        self.requests.set_error(key, None)
        await self.requests.start_loading(key)
        try:
            await self._fetch(query, generation)
        finally:
            # A newer query owns the loading status
            if generation == self._generation:
                await self.requests.end_loading(key)

    async def _fetch(self, query: str, generation: int) -> None:
        key = RequestKey.TABLE_FETCH
        try:
            response = await self.api.get(f"/api/licenses/query{query}")
        except httpx.HTTPError as e:
            if generation != self._generation:
                return
            logger.error('Failed to fetch licenses with the query "%s": %s', query, e)
            self._fail(key, internal_error("Failed to fetch licenses."))
            return

        if generation != self._generation:
            logger.debug('Discarding response to superseded query "%s"', query)
            return

        if not response.is_success:
            error = parse_error(
                json_or_none(response), response.status_code, "Failed to fetch licenses."
            )
            logger.error('Query "%s" failed: %s', query, error.message)
            self._fail(key, error)
            return

        try:
            licenses = parse_licenses(response.json())
        except (ValueError, TypeError, ValidationError) as e:
            logger.error('Unreadable response to the query "%s": %s', query, e)
            self._fail(key, internal_error("Failed to fetch licenses."))
            return
        self.licenses.set(licenses)

    def _fail(self, key: str, error) -> None:
        self.requests.set_error(key, error)
        self.notifications.add(error.message, type="alert")
        self._reset()
