"""Filter parameters for catalog search.

FilterSpec is built per request from the search envelope and never
persisted. Price bounds stay raw strings here; they are parsed leniently
when the query is built.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any


class SortOrder(str, Enum):
    """Supported result orderings."""

    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW_HIGH = "price-low-high"
    PRICE_HIGH_LOW = "price-high-low"

    @classmethod
    def parse(cls, value: Any) -> "SortOrder":
        """Resolve a sort order, falling back to NEWEST.

        Args:
            value: Enum member, raw value, or anything else.

        Returns:
            Matching SortOrder, or NEWEST when missing or unrecognised.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (TypeError, ValueError):
            return cls.NEWEST


@dataclass(frozen=True)
class FilterSpec:
    """User-selected search criteria.

    Attributes:
        search_query: Case-insensitive substring to find in product names.
        start_date: Earliest creation date, inclusive.
        end_date: Latest creation date, inclusive.
        min_price: Raw lower price bound; ignored unless numeric.
        max_price: Raw upper price bound; ignored unless numeric.
        selected_categories: Category labels, any of which may match.
        sort_order: Result ordering.
    """

    search_query: str = ""
    start_date: date | None = None
    end_date: date | None = None
    min_price: str | None = None
    max_price: str | None = None
    selected_categories: tuple[str, ...] = field(default_factory=tuple)
    sort_order: SortOrder = SortOrder.NEWEST


def parse_price_bound(value: str | float | int | None) -> float | None:
    """Parse a price bound, returning None for anything unusable.

    Empty, non-numeric, NaN and infinite inputs all mean "no bound".

    Args:
        value: Raw bound from the request.

    Returns:
        The bound as a float, or None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def start_of_day(day: date) -> datetime:
    """00:00:00.000 UTC on the given date."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    """23:59:59.999 UTC on the given date."""
    return datetime.combine(day, time(23, 59, 59, 999000), tzinfo=timezone.utc)
