"""Shared fixtures for catalog tests."""

from datetime import datetime, timezone

import pytest

from catalog_api.catalog.models import Product
from catalog_api.catalog.repository import InMemoryProductRepository
from catalog_api.catalog.service import CatalogService
from catalog_api.infrastructure.storage import ImageStorage


def product_id(index: int) -> str:
    """Deterministic UUID string for test products."""
    return f"00000000-0000-0000-0000-{index:012d}"


def make_product(
    index: int,
    name: str,
    price: float,
    category: str | None,
    created_at: datetime,
) -> Product:
    """Build a product with a fixed ID and timestamp."""
    return Product.create(
        product_id=product_id(index),
        name=name,
        price=price,
        images=[f"/media/product-{index}.jpg"],
        category=category,
        created_at=created_at,
    )


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def sample_products() -> list[Product]:
    """Seven products across three categories and ten days."""
    return [
        make_product(1, "Red Running Shoes", 59.99, "shoes", utc(2024, 3, 1, 10, 0)),
        make_product(2, "Leather Bag", 120.0, "bags", utc(2024, 3, 2, 8, 30)),
        make_product(3, "Canvas Tote Bag", 35.0, "bags", utc(2024, 3, 5, 23, 59, 59, 500000)),
        make_product(4, "Wool Hat", 25.0, "hats", utc(2024, 3, 6, 0, 0)),
        make_product(5, "Trail Shoes", 89.5, "shoes", utc(2024, 3, 8, 15, 0)),
        make_product(6, "Sun Hat", 25.0, "hats", utc(2024, 3, 9, 9, 0)),
        make_product(7, "Gift Card", 50.0, None, utc(2024, 3, 10, 12, 0)),
    ]


@pytest.fixture
def many_products() -> list[Product]:
    """Twenty-five products with distinct prices and timestamps."""
    return [
        make_product(
            i,
            f"Item {i:02d}",
            float(i * 10),
            "misc",
            utc(2024, 1, i, 12, 0),
        )
        for i in range(1, 26)
    ]


@pytest.fixture
def repository(sample_products: list[Product]) -> InMemoryProductRepository:
    """In-memory repository seeded with the sample products."""
    return InMemoryProductRepository(sample_products)


@pytest.fixture
def image_storage(tmp_path) -> ImageStorage:
    """Image storage writing into a temporary directory."""
    return ImageStorage(tmp_path / "media", "/media")


@pytest.fixture
def service(
    repository: InMemoryProductRepository,
    image_storage: ImageStorage,
) -> CatalogService:
    """Catalog service over the sample products."""
    return CatalogService(
        repository,
        max_items_per_page=100,
        query_timeout=5.0,
        image_storage=image_storage,
    )


@pytest.fixture
def product_factory():
    """Factory for products with fixed IDs and timestamps."""
    return make_product


@pytest.fixture
def override_service(service: CatalogService):
    """Route API requests to the in-memory catalog service."""
    from catalog_api.api.products import get_catalog_service
    from catalog_api.main import app

    app.dependency_overrides[get_catalog_service] = lambda: service
    yield service
    app.dependency_overrides.clear()
