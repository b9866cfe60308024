"""Tests for the catalog API client."""

import httpx
import pytest
import pytest_asyncio

from catalog_api.catalog.filters import SortOrder
from catalog_api.client.http import ProductStoreClient
from catalog_api.client.state import (
    FetchSucceeded,
    ProductState,
    SetCurrentPage,
    SetItemsPerPage,
    SetSortOrder,
    ToggleCategory,
    reduce,
)
from catalog_api.main import app


@pytest_asyncio.fixture
async def store(override_service):
    """Client talking to the app in-process."""
    client = ProductStoreClient(
        "http://testserver", transport=httpx.ASGITransport(app=app)
    )
    yield client
    await client.close()


@pytest.fixture
def loaded_state() -> ProductState:
    """State after a successful fetch of one product."""
    return reduce(
        ProductState(),
        FetchSucceeded(
            products=({"_id": "a", "name": "Lamp"},),
            pagination={"currentPage": 1, "itemsPerPage": 10, "totalItems": 1, "totalPages": 1},
        ),
    )


class TestFetchProducts:
    """Tests for fetching the current page."""

    @pytest.mark.asyncio
    async def test_fetch_applies_filters(self, store: ProductStoreClient) -> None:
        store.dispatch(ToggleCategory("hats"))
        store.dispatch(SetSortOrder(SortOrder.OLDEST))

        state = await store.fetch_products()

        assert [p["name"] for p in state.products] == ["Wool Hat", "Sun Hat"]
        assert state.pagination.total_items == 2
        assert state.is_loading is False
        assert state.error is None

    @pytest.mark.asyncio
    async def test_fetch_second_page(self, store: ProductStoreClient) -> None:
        store.dispatch(SetItemsPerPage(5))
        store.dispatch(SetCurrentPage(2))

        state = await store.fetch_products()

        assert len(state.products) == 2
        assert state.pagination.current_page == 2
        assert state.pagination.total_pages == 2

    @pytest.mark.asyncio
    async def test_server_failure_keeps_products(self, loaded_state: ProductState) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500,
                json={
                    "success": False,
                    "message": "An error occurred while fetching products",
                    "requestId": "abc",
                },
            )

        client = ProductStoreClient(
            "http://catalog", transport=httpx.MockTransport(handler), state=loaded_state
        )

        state = await client.fetch_products()
        await client.close()

        assert state.products == loaded_state.products
        assert state.error == "An error occurred while fetching products"
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_connection_failure_keeps_products(self, loaded_state: ProductState) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = ProductStoreClient(
            "http://catalog", transport=httpx.MockTransport(handler), state=loaded_state
        )

        state = await client.fetch_products()
        await client.close()

        assert state.products == loaded_state.products
        assert state.error.startswith("Request failed")
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_is_a_failure(self, loaded_state: ProductState) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False, "message": "Nope"})

        client = ProductStoreClient(
            "http://catalog", transport=httpx.MockTransport(handler), state=loaded_state
        )

        state = await client.fetch_products()
        await client.close()

        assert state.error == "Nope"
        assert state.products == loaded_state.products


class TestWrites:
    """Tests for add and delete through the client."""

    @pytest.mark.asyncio
    async def test_add_product_refetches(self, store: ProductStoreClient) -> None:
        outcome = await store.add_product(
            "Desk Lamp",
            "42.00",
            images=[("lamp.jpg", b"lamp-bytes", "image/jpeg")],
            category="lighting",
        )

        assert outcome.success is True
        assert outcome.message == "Product added successfully"
        assert store.state.products[0]["name"] == "Desk Lamp"
        assert store.state.pagination.total_items == 8
        assert store.state.is_loading is False

    @pytest.mark.asyncio
    async def test_add_product_rejected(self, store: ProductStoreClient) -> None:
        outcome = await store.add_product("Desk Lamp", "free")

        assert outcome.success is False
        assert outcome.message == "Invalid price: must be a number"
        assert store.state.error == outcome.message
        assert store.state.is_loading is False

    @pytest.mark.asyncio
    async def test_delete_product(self, store: ProductStoreClient) -> None:
        deleted = await store.delete_product("00000000-0000-0000-0000-000000000007")

        assert deleted is True
        assert store.state.pagination.total_items == 6
        assert "Gift Card" not in [p["name"] for p in store.state.products]

    @pytest.mark.asyncio
    async def test_delete_missing_product(self, store: ProductStoreClient) -> None:
        deleted = await store.delete_product("00000000-0000-0000-0000-000000000999")

        assert deleted is False
        assert store.state.error.startswith("Product not found")
