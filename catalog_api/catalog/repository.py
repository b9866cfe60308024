"""Product repositories.

Provides the store contract used by the catalog service, a SQLAlchemy
implementation, and an in-memory implementation that evaluates the same
predicates directly against records.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.models import Product
from catalog_api.catalog.predicates import MATCH_ALL, Predicate, SortSpec
from catalog_api.catalog.query_builder import compile_predicate, compile_sort


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except (TypeError, ValueError):
        return False
    return True


class ProductRepository(Protocol):
    """Store contract for product records."""

    async def count(self, predicate: Predicate) -> int:
        """Count records matching the predicate."""
        ...

    async def find(
        self,
        predicate: Predicate,
        sort: SortSpec,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Product]:
        """Fetch matching records in sort order, windowed by skip/limit."""
        ...

    async def get(self, product_id: str) -> Product | None:
        """Get a record by ID."""
        ...

    async def add(self, product: Product) -> Product:
        """Persist a new record."""
        ...

    async def delete(self, product_id: str) -> bool:
        """Delete a record, returning whether it existed."""
        ...

    async def distinct_categories(self) -> list[str]:
        """List distinct non-empty category labels, sorted."""
        ...


class SqlProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = SqlProductRepository(session)
            predicate, sort = build_query(filters)
            total = await repo.count(predicate)
            products = await repo.find(predicate, sort, skip=20, limit=10)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def count(self, predicate: Predicate) -> int:
        query = select(func.count(Product.id)).where(compile_predicate(predicate))
        result = await self.session.execute(query)
        return result.scalar_one()

    async def find(
        self,
        predicate: Predicate,
        sort: SortSpec,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Product]:
        query = (
            select(Product)
            .where(compile_predicate(predicate))
            .order_by(*compile_sort(sort))
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def get(self, product_id: str) -> Product | None:
        if not _is_uuid(product_id):
            return None
        return await self.session.get(Product, product_id)

    async def add(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.flush()
        return product

    async def delete(self, product_id: str) -> bool:
        # Malformed ids would be rejected by the UUID column type
        if not _is_uuid(product_id):
            return False
        result = await self.session.execute(
            delete(Product).where(Product.id == product_id)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def distinct_categories(self) -> list[str]:
        query = (
            select(Product.category)
            .where(Product.category.is_not(None), Product.category != "")
            .distinct()
            .order_by(Product.category)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())


class InMemoryProductRepository:
    """In-memory repository for products.

    Applies predicates with ``matches`` and sorts with the same id
    tiebreak as the SQL store, so both return identical orderings.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: dict[str, Product] = {}
        for product in products:
            self._products[product.id] = product

    async def count(self, predicate: Predicate = MATCH_ALL) -> int:
        return sum(1 for p in self._products.values() if predicate.matches(p))

    async def find(
        self,
        predicate: Predicate,
        sort: SortSpec,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Product]:
        matched = [p for p in self._products.values() if predicate.matches(p)]
        matched.sort(key=sort.key, reverse=sort.descending)
        end = None if limit is None else skip + limit
        return matched[skip:end]

    async def get(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    async def add(self, product: Product) -> Product:
        self._products[product.id] = product
        return product

    async def delete(self, product_id: str) -> bool:
        return self._products.pop(product_id, None) is not None

    async def distinct_categories(self) -> list[str]:
        return sorted({p.category for p in self._products.values() if p.category})
