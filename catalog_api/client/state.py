"""Storefront product list state.

The UI state is an immutable ProductState snapshot. Each user or network
event is an action, and ``reduce`` maps (state, action) to the next
snapshot without side effects. Every filter change sends the user back to
page 1; sort order and explicit page changes do not.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Callable, Union

from catalog_api.catalog.filters import SortOrder


# ============================================================================
# State
# ============================================================================


@dataclass(frozen=True)
class FilterState:
    """Filter inputs as the user entered them."""

    search_query: str = ""
    start_date: date | None = None
    end_date: date | None = None
    min_price: str = ""
    max_price: str = ""
    selected_categories: tuple[str, ...] = ()
    sort_order: SortOrder = SortOrder.NEWEST


@dataclass(frozen=True)
class PaginationState:
    """Current page plus the last extent reported by the server."""

    current_page: int = 1
    items_per_page: int = 10
    total_items: int = 0
    total_pages: int = 0


@dataclass(frozen=True)
class ProductState:
    """Snapshot of the product list screen."""

    products: tuple[dict[str, Any], ...] = ()
    is_loading: bool = True
    error: str | None = None
    filters: FilterState = field(default_factory=FilterState)
    pagination: PaginationState = field(default_factory=PaginationState)


# ============================================================================
# Actions
# ============================================================================


@dataclass(frozen=True)
class SetSearchQuery:
    query: str


@dataclass(frozen=True)
class SetStartDate:
    value: date | None


@dataclass(frozen=True)
class SetEndDate:
    value: date | None


@dataclass(frozen=True)
class SetMinPrice:
    price: str


@dataclass(frozen=True)
class SetMaxPrice:
    price: str


@dataclass(frozen=True)
class ToggleCategory:
    category: str


@dataclass(frozen=True)
class SetSortOrder:
    order: SortOrder


@dataclass(frozen=True)
class ResetFilters:
    pass


@dataclass(frozen=True)
class SetCurrentPage:
    page: int


@dataclass(frozen=True)
class SetItemsPerPage:
    items: int


@dataclass(frozen=True)
class FetchStarted:
    """A request to the catalog API has been sent."""


@dataclass(frozen=True)
class FetchSucceeded:
    """Search results arrived.

    Attributes:
        products: Products as returned on the wire.
        pagination: Wire pagination object (camelCase keys).
    """

    products: tuple[dict[str, Any], ...]
    pagination: dict[str, int]


@dataclass(frozen=True)
class FetchFailed:
    message: str


@dataclass(frozen=True)
class RequestFinished:
    """A write request completed; clears the loading flag."""


Action = Union[
    SetSearchQuery,
    SetStartDate,
    SetEndDate,
    SetMinPrice,
    SetMaxPrice,
    ToggleCategory,
    SetSortOrder,
    ResetFilters,
    SetCurrentPage,
    SetItemsPerPage,
    FetchStarted,
    FetchSucceeded,
    FetchFailed,
    RequestFinished,
]


# ============================================================================
# Reducer
# ============================================================================


def _with_filters(state: ProductState, **changes: Any) -> ProductState:
    """Apply filter changes and go back to the first page."""
    return replace(
        state,
        filters=replace(state.filters, **changes),
        pagination=replace(state.pagination, current_page=1),
    )


def _toggle_category(state: ProductState, action: ToggleCategory) -> ProductState:
    selected = state.filters.selected_categories
    if action.category in selected:
        selected = tuple(c for c in selected if c != action.category)
    else:
        selected = selected + (action.category,)
    return _with_filters(state, selected_categories=selected)


def _fetch_succeeded(state: ProductState, action: FetchSucceeded) -> ProductState:
    wire = action.pagination
    pagination = PaginationState(
        current_page=wire.get("currentPage", state.pagination.current_page),
        items_per_page=wire.get("itemsPerPage", state.pagination.items_per_page),
        total_items=wire.get("totalItems", 0),
        total_pages=wire.get("totalPages", 0),
    )
    return replace(
        state,
        products=tuple(action.products),
        pagination=pagination,
        is_loading=False,
    )


_REDUCERS: dict[type, Callable[[ProductState, Any], ProductState]] = {
    SetSearchQuery: lambda s, a: _with_filters(s, search_query=a.query),
    SetStartDate: lambda s, a: _with_filters(s, start_date=a.value),
    SetEndDate: lambda s, a: _with_filters(s, end_date=a.value),
    SetMinPrice: lambda s, a: _with_filters(s, min_price=a.price),
    SetMaxPrice: lambda s, a: _with_filters(s, max_price=a.price),
    ToggleCategory: _toggle_category,
    SetSortOrder: lambda s, a: replace(
        s, filters=replace(s.filters, sort_order=SortOrder.parse(a.order))
    ),
    ResetFilters: lambda s, a: replace(
        s,
        filters=FilterState(),
        pagination=replace(s.pagination, current_page=1),
    ),
    SetCurrentPage: lambda s, a: replace(
        s, pagination=replace(s.pagination, current_page=a.page)
    ),
    SetItemsPerPage: lambda s, a: replace(
        s, pagination=replace(s.pagination, items_per_page=a.items, current_page=1)
    ),
    FetchStarted: lambda s, a: replace(s, is_loading=True, error=None),
    FetchSucceeded: _fetch_succeeded,
    # The previous product list stays visible after a failure
    FetchFailed: lambda s, a: replace(s, is_loading=False, error=a.message),
    RequestFinished: lambda s, a: replace(s, is_loading=False),
}


def reduce(state: ProductState, action: Action) -> ProductState:
    """Compute the next state for an action.

    Args:
        state: Current snapshot.
        action: Event to apply.

    Returns:
        New snapshot; ``state`` is never modified.

    Raises:
        TypeError: If the action type is unknown.
    """
    handler = _REDUCERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown action: {action!r}")
    return handler(state, action)


def to_search_payload(state: ProductState) -> dict[str, Any]:
    """Build the search request body for the current snapshot."""
    filters = state.filters
    return {
        "searchQuery": filters.search_query,
        "startDate": filters.start_date.isoformat() if filters.start_date else None,
        "endDate": filters.end_date.isoformat() if filters.end_date else None,
        "minPrice": filters.min_price,
        "maxPrice": filters.max_price,
        "selectedCategories": list(filters.selected_categories),
        "sortOrder": filters.sort_order.value,
        "page": state.pagination.current_page,
        "itemsPerPage": state.pagination.items_per_page,
    }
