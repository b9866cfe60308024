"""Catalog service for product operations.

High-level service that combines the query builder, pagination and a
product repository into the search, list, add and delete operations
exposed by the API.
"""

import asyncio
import math
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError

from catalog_api.catalog.filters import FilterSpec, SortOrder
from catalog_api.catalog.models import Product
from catalog_api.catalog.pagination import PageRequest, PageResult, paginate
from catalog_api.catalog.predicates import MATCH_ALL
from catalog_api.catalog.query_builder import SORT_SPECS, build_query
from catalog_api.catalog.repository import ProductRepository
from catalog_api.domain.exceptions import (
    ProductNotFoundError,
    QueryError,
    ValidationError,
)
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.storage import ImageStorage, get_image_storage

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass
class SearchResult:
    """A page of products with its pagination metadata."""

    products: list[Product]
    pagination: PageResult


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(SqlProductRepository(session))
            result = await service.search(
                FilterSpec(search_query="lamp", sort_order=SortOrder.PRICE_LOW_HIGH),
                PageRequest(page=1, items_per_page=10),
            )
    """

    def __init__(
        self,
        repository: ProductRepository,
        max_items_per_page: int | None = None,
        query_timeout: float | None = None,
        image_storage: ImageStorage | None = None,
    ) -> None:
        """Initialize service.

        Args:
            repository: Product store.
            max_items_per_page: Largest accepted page size.
            query_timeout: Default deadline in seconds for a search;
                zero disables it.
            image_storage: Destination for uploaded images.
        """
        self.repository = repository
        self.max_items_per_page = (
            max_items_per_page
            if max_items_per_page is not None
            else settings.max_items_per_page
        )
        self.query_timeout = (
            query_timeout if query_timeout is not None else settings.query_timeout_seconds
        )
        self.image_storage = image_storage or get_image_storage()

    async def _run(
        self,
        operation: str,
        deadline: float | None,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run a store call, translating failures into QueryError.

        Args:
            operation: Name used in logs and error details.
            deadline: Event loop time by which the call must finish.
            func: Repository coroutine function.

        Returns:
            The store call's result.

        Raises:
            QueryError: On timeout, database error, or connection failure.
        """
        loop = asyncio.get_running_loop()
        remaining = None if deadline is None else deadline - loop.time()
        if remaining is not None and remaining <= 0:
            logger.warning("Product query deadline exceeded", operation=operation)
            raise QueryError("Product query timed out", operation=operation)

        try:
            return await asyncio.wait_for(func(*args, **kwargs), remaining)
        except asyncio.TimeoutError as e:
            logger.warning("Product query timed out", operation=operation)
            raise QueryError("Product query timed out", operation=operation) from e
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "Product query failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise QueryError(operation=operation) from e

    async def search(
        self,
        filters: FilterSpec,
        page_request: PageRequest,
        timeout: float | None = None,
    ) -> SearchResult:
        """Search products with filters and pagination.

        Count and fetch run against the same predicate but are not wrapped
        in a transaction, so a concurrent write may land between them.

        Args:
            filters: Filter parameters.
            page_request: Page to return.
            timeout: Seconds allowed for count and fetch together.

        Returns:
            Products for the page plus pagination metadata.

        Raises:
            ValidationError: If the page request is invalid.
            QueryError: If the store fails or the deadline passes.
        """
        page_request.validate(self.max_items_per_page)

        predicate, sort = build_query(filters)

        timeout = self.query_timeout if timeout is None else timeout
        deadline = asyncio.get_running_loop().time() + timeout if timeout else None

        total_items = await self._run("count", deadline, self.repository.count, predicate)
        window = paginate(total_items, page_request.page, page_request.items_per_page)
        products = await self._run(
            "find",
            deadline,
            self.repository.find,
            predicate,
            sort,
            skip=window.skip,
            limit=window.limit,
        )

        logger.info(
            "Search completed",
            total_items=total_items,
            page=page_request.page,
            items_per_page=page_request.items_per_page,
            returned=len(products),
            match_all=predicate.is_match_all,
        )

        return SearchResult(
            products=list(products),
            pagination=PageResult(
                total_items=total_items,
                total_pages=window.total_pages,
                current_page=page_request.page,
                items_per_page=page_request.items_per_page,
            ),
        )

    async def list_products(self) -> list[Product]:
        """List every product, newest first."""
        products = await self._run(
            "find", None, self.repository.find, MATCH_ALL, SORT_SPECS[SortOrder.NEWEST]
        )
        return list(products)

    async def list_categories(self) -> list[str]:
        """List category labels in use, sorted."""
        return await self._run("categories", None, self.repository.distinct_categories)

    async def add_product(
        self,
        name: str,
        price: float,
        images: list[str] | None = None,
        category: str | None = None,
        uploads: Sequence[tuple[str | None, bytes]] = (),
    ) -> Product:
        """Create a product.

        Uploaded files are written to image storage only after the name
        and price pass validation, and are appended after ``images``. If
        the store rejects the record, the stored files are removed again.

        Args:
            name: Product name.
            price: Non-negative price.
            images: Image URIs in display order.
            category: Optional category label.
            uploads: (filename, content) pairs of uploaded image files.

        Returns:
            The stored product.

        Raises:
            ValidationError: If name or price is invalid.
            QueryError: If the store fails.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("name", "must not be empty", name)
        if not math.isfinite(price) or price < 0:
            raise ValidationError("price", "must be a non-negative number", price)

        stored_uris = [
            self.image_storage.save(filename, content) for filename, content in uploads
        ]

        category = (category or "").strip() or None
        product = Product.create(
            name=name,
            price=price,
            images=list(images or []) + stored_uris,
            category=category,
        )
        try:
            await self._run("add", None, self.repository.add, product)
        except QueryError:
            # No record references the uploads
            for uri in stored_uris:
                self.image_storage.delete(uri)
            raise

        logger.info(
            "Product added",
            product_id=product.id,
            category=category,
            image_count=len(product.images),
        )
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Args:
            product_id: Product ID.

        Raises:
            ProductNotFoundError: If no product has this ID.
            QueryError: If the store fails.
        """
        deleted = await self._run("delete", None, self.repository.delete, product_id)
        if not deleted:
            raise ProductNotFoundError(product_id)

        logger.info("Product deleted", product_id=product_id)
