"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.domain.exceptions import InvalidQueryError


class LicenseFilter(Enum):
    """Named license collection filters."""

    ALL = "all"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    NEAR_EXPIRATION = "near-expiration"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return filter as string."""
        return self.value


class SortColumn(Enum):
    """Columns the license table can be sorted by."""

    APPLICATION = "application"
    CONTACT_PERSON = "contactPerson"
    USERS = "users"
    EXPIRATION_DATE = "expirationDate"

    def __str__(self) -> str:
        """Return column as string."""
        return self.value


class SortDirection(Enum):
    """Sort direction value object."""

    ASC = "ASC"
    DESC = "DESC"

    def __str__(self) -> str:
        """Return direction as string."""
        return self.value


@dataclass(frozen=True)
class LicenseQuery:
    """
    A read against the license collection.

    Combines an optional named filter, an optional free-text search
    and an optional single-column sort.
    """

    filter: LicenseFilter = LicenseFilter.ALL
    search: str = ""
    sort_by: Optional[SortColumn] = None
    sort_direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        """Normalize search text."""
        object.__setattr__(self, "search", (self.search or "").strip())

    @classmethod
    def from_params(
        cls,
        filter_name: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> "LicenseQuery":
        """
        Build a query from raw request parameters.

        Args:
            filter_name: Filter value, e.g. 'near-expiration'
            search: Free-text search
            sort_by: Sort column name
            sort_direction: 'ASC' or 'DESC'

        Returns:
            LicenseQuery instance

        Raises:
            InvalidQueryError: If any parameter is not recognized
        """
        try:
            license_filter = LicenseFilter(filter_name) if filter_name else LicenseFilter.ALL
            column = SortColumn(sort_by) if sort_by else None
            direction = (
                SortDirection(sort_direction.upper()) if sort_direction else SortDirection.ASC
            )
        except ValueError as e:
            raise InvalidQueryError(
                "Invalid license query.",
                f"{e}. Please check the filter, sortBy and sortDirection parameters.",
            ) from e
        return cls(
            filter=license_filter,
            search=search or "",
            sort_by=column,
            sort_direction=direction,
        )

    @property
    def is_sorted(self) -> bool:
        """Whether an explicit sort column was requested."""
        return self.sort_by is not None
