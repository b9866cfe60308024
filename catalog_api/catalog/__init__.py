"""Product Catalog.

Provides query building, pagination, repositories and the catalog
service behind the product endpoints.
"""

from catalog_api.catalog.filters import FilterSpec, SortOrder, parse_price_bound
from catalog_api.catalog.models import Product
from catalog_api.catalog.pagination import (
    PageRequest,
    PageResult,
    PageWindow,
    paginate,
)
from catalog_api.catalog.predicates import (
    MATCH_ALL,
    AllOf,
    Membership,
    Predicate,
    Range,
    SortSpec,
    TextMatch,
)
from catalog_api.catalog.query_builder import build_query, compile_predicate, compile_sort
from catalog_api.catalog.repository import (
    InMemoryProductRepository,
    ProductRepository,
    SqlProductRepository,
)
from catalog_api.catalog.service import CatalogService, SearchResult

__all__ = [
    # Filters
    "FilterSpec",
    "SortOrder",
    "parse_price_bound",
    # Models
    "Product",
    # Pagination
    "PageRequest",
    "PageResult",
    "PageWindow",
    "paginate",
    # Predicates
    "MATCH_ALL",
    "AllOf",
    "Membership",
    "Predicate",
    "Range",
    "SortSpec",
    "TextMatch",
    # Query builder
    "build_query",
    "compile_predicate",
    "compile_sort",
    # Repository
    "InMemoryProductRepository",
    "ProductRepository",
    "SqlProductRepository",
    # Service
    "CatalogService",
    "SearchResult",
]
