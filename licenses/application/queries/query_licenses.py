"""
QueryLicensesQuery.

Query for the license table: a named filter or a search, and a sort.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from core.domain.value_objects import LicenseQuery


@dataclass
class QueryLicensesQuery:
    """Query for filtered, searched and sorted licenses."""

    query: LicenseQuery = field(default_factory=LicenseQuery)
    today: Optional[date] = None
