"""Storefront client: product list state and the HTTP driver."""

from catalog_api.client.http import CatalogClientError, ProductStoreClient, WriteOutcome
from catalog_api.client.state import (
    FilterState,
    PaginationState,
    ProductState,
    reduce,
    to_search_payload,
)

__all__ = [
    "CatalogClientError",
    "FilterState",
    "PaginationState",
    "ProductState",
    "ProductStoreClient",
    "WriteOutcome",
    "reduce",
    "to_search_payload",
]
