"""Query construction for catalog search.

Translates a FilterSpec into a typed predicate and sort order, and
compiles both into SQLAlchemy expressions against the products table.
"""

from typing import Any

from sqlalchemy import ColumnElement, and_, true

from catalog_api.catalog.filters import (
    FilterSpec,
    SortOrder,
    end_of_day,
    parse_price_bound,
    start_of_day,
)
from catalog_api.catalog.models import Product
from catalog_api.catalog.predicates import (
    AllOf,
    Membership,
    Predicate,
    Range,
    SortSpec,
    TextMatch,
)

SORT_SPECS: dict[SortOrder, SortSpec] = {
    SortOrder.NEWEST: SortSpec("created_at", descending=True),
    SortOrder.OLDEST: SortSpec("created_at", descending=False),
    SortOrder.PRICE_LOW_HIGH: SortSpec("price", descending=False),
    SortOrder.PRICE_HIGH_LOW: SortSpec("price", descending=True),
}


def build_query(filters: FilterSpec) -> tuple[Predicate, SortSpec]:
    """Build the predicate and sort order for a search.

    Args:
        filters: Search criteria.

    Returns:
        Tuple of (predicate, sort). The predicate is the empty AllOf
        when no filter is active.
    """
    conditions: list[Predicate] = []

    if filters.search_query:
        conditions.append(TextMatch("name", filters.search_query))

    if filters.selected_categories:
        conditions.append(Membership("category", tuple(filters.selected_categories)))

    if filters.start_date is not None or filters.end_date is not None:
        conditions.append(
            Range(
                "created_at",
                lower=start_of_day(filters.start_date) if filters.start_date else None,
                upper=end_of_day(filters.end_date) if filters.end_date else None,
            )
        )

    min_price = parse_price_bound(filters.min_price)
    max_price = parse_price_bound(filters.max_price)
    if min_price is not None or max_price is not None:
        conditions.append(Range("price", lower=min_price, upper=max_price))

    sort = SORT_SPECS[SortOrder.parse(filters.sort_order)]
    return AllOf(tuple(conditions)), sort


# ============================================================================
# SQL Compilation
# ============================================================================


def _escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _column(field: str) -> Any:
    try:
        return getattr(Product, field)
    except AttributeError:
        raise ValueError(f"Unknown product field: {field}") from None


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Compile a predicate into a SQLAlchemy boolean expression.

    Args:
        predicate: Predicate to compile.

    Returns:
        Expression usable in ``select(...).where(...)``.
    """
    if isinstance(predicate, AllOf):
        if predicate.is_match_all:
            return true()
        return and_(*(compile_predicate(p) for p in predicate.predicates))

    column = _column(predicate.field)

    if isinstance(predicate, TextMatch):
        return column.ilike(f"%{_escape_like(predicate.text)}%", escape="\\")

    if isinstance(predicate, Membership):
        return column.in_(predicate.values)

    if isinstance(predicate, Range):
        bounds = []
        if predicate.lower is not None:
            bounds.append(column >= predicate.lower)
        if predicate.upper is not None:
            bounds.append(column <= predicate.upper)
        return and_(*bounds) if bounds else true()

    raise TypeError(f"Unsupported predicate: {predicate!r}")


def compile_sort(sort: SortSpec) -> list[Any]:
    """Compile a sort spec into ORDER BY clauses.

    Args:
        sort: Sort to compile.

    Returns:
        Clauses for the sort field then the id tiebreaker.
    """
    columns = [_column(sort.field), Product.id]
    if sort.descending:
        return [c.desc() for c in columns]
    return [c.asc() for c in columns]
