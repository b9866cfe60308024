"""Domain layer module.

Contains the catalog exception hierarchy.
"""

from catalog_api.domain.exceptions import (
    CatalogError,
    ProductNotFoundError,
    QueryError,
    ValidationError,
)

__all__ = [
    "CatalogError",
    "ProductNotFoundError",
    "QueryError",
    "ValidationError",
]
