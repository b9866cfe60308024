"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
Field names on the wire are camelCase to match the storefront client.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from catalog_api.catalog.filters import FilterSpec, SortOrder
from catalog_api.catalog.models import Product
from catalog_api.catalog.pagination import PageRequest, PageResult
from catalog_api.infrastructure.config import settings


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Common Schemas
# ============================================================================


class FailureResponse(CamelModel):
    """Standard failure envelope.

    All API errors follow this format for consistency.
    """

    success: bool = Field(default=False, description="Always false")
    message: str = Field(..., description="Human-readable error message")
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class MessageResponse(CamelModel):
    """Success envelope carrying only a message."""

    success: bool = True
    message: str


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(CamelModel):
    """Product representation."""

    id: str = Field(..., alias="_id", description="Product identifier")
    name: str
    price: float = Field(..., ge=0)
    images: list[str] = Field(default_factory=list, description="Image URIs in order")
    category: str | None = None
    created_at: datetime

    @classmethod
    def from_product(cls, product: Product) -> "ProductSchema":
        """Convert a Product entity to its schema."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            images=list(product.images or []),
            category=product.category,
            created_at=product.created_at,
        )


class PaginationSchema(CamelModel):
    """Pagination metadata."""

    current_page: int = Field(..., description="Requested page (1-based)")
    items_per_page: int = Field(..., description="Items per page")
    total_items: int = Field(..., description="Total matching products")
    total_pages: int = Field(..., description="Total number of pages")

    @classmethod
    def from_result(cls, result: PageResult) -> "PaginationSchema":
        return cls(
            current_page=result.current_page,
            items_per_page=result.items_per_page,
            total_items=result.total_items,
            total_pages=result.total_pages,
        )


class ProductListResponse(CamelModel):
    """All products, newest first."""

    success: bool = True
    products: list[ProductSchema]


class CategoryListResponse(CamelModel):
    """Category labels in use."""

    success: bool = True
    categories: list[str]


class AddProductResponse(CamelModel):
    """Result of creating a product."""

    success: bool = True
    message: str
    product: ProductSchema


# ============================================================================
# Search Schemas
# ============================================================================


def _coerce_date(value: Any) -> Any:
    """Accept ISO dates or ISO datetimes, keeping only the calendar date.

    A datetime contributes the date written in it, in its own offset; it is
    not shifted to the sender's local day. ``2024-05-31T22:00:00.000Z``,
    which a browser at UTC+2 sends for local midnight on June 1, becomes
    May 31. Clients that mean a local day should send a plain
    ``YYYY-MM-DD`` date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        # JavaScript Date.toISOString() uses a trailing Z
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return value


class SearchRequest(CamelModel):
    """Search envelope sent by the storefront client.

    Price bounds are accepted as strings or numbers and kept raw;
    unparseable bounds are ignored rather than rejected. Page values are
    checked by the service so that bad values produce the standard
    failure envelope.
    """

    search_query: str = Field(default="", description="Substring to find in product names")
    start_date: date | None = Field(default=None, description="Earliest creation date")
    end_date: date | None = Field(default=None, description="Latest creation date")
    min_price: str | None = Field(default=None, description="Lower price bound")
    max_price: str | None = Field(default=None, description="Upper price bound")
    selected_categories: list[str] = Field(
        default_factory=list, description="Categories, any of which may match"
    )
    sort_order: str = Field(
        default=SortOrder.NEWEST.value,
        description="newest, oldest, price-low-high or price-high-low",
    )
    page: int = Field(default=1, description="Page number (1-based)")
    items_per_page: int = Field(
        default=settings.default_items_per_page, description="Items per page"
    )

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, value: Any) -> Any:
        return _coerce_date(value)

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def stringify_prices(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("search_query", mode="before")
    @classmethod
    def default_search_query(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("sort_order", mode="before")
    @classmethod
    def resolve_sort_order(cls, value: Any) -> str:
        return SortOrder.parse(value).value

    @field_validator("selected_categories", mode="before")
    @classmethod
    def default_categories(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_filter_spec(self) -> FilterSpec:
        return FilterSpec(
            search_query=self.search_query,
            start_date=self.start_date,
            end_date=self.end_date,
            min_price=self.min_price,
            max_price=self.max_price,
            selected_categories=tuple(self.selected_categories),
            sort_order=SortOrder.parse(self.sort_order),
        )

    def to_page_request(self) -> PageRequest:
        return PageRequest(page=self.page, items_per_page=self.items_per_page)


class SearchResponse(CamelModel):
    """A page of products with pagination metadata."""

    success: bool = True
    products: list[ProductSchema]
    pagination: PaginationSchema
