"""Catalog API client.

Thin HTTP client that keeps a ProductState snapshot in sync with the
catalog API. Network outcomes are fed through the reducer as actions, so
every failure path ends in the same state: previous products kept,
message recorded, loading cleared.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from catalog_api.client.state import (
    Action,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    ProductState,
    RequestFinished,
    reduce,
    to_search_payload,
)

logger = structlog.get_logger()


class CatalogClientError(Exception):
    """Raised internally when a catalog API call does not succeed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class WriteOutcome:
    """Result of an add-product request."""

    success: bool
    message: str


class ProductStoreClient:
    """HTTP client for the catalog API holding the product list state.

    Example usage:
        client = ProductStoreClient("http://localhost:8000")
        client.dispatch(SetSearchQuery("lamp"))
        await client.fetch_products()
        print(client.state.products)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        state: ProductState | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Catalog API base URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (e.g. ASGI in tests).
            state: Initial snapshot.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.state = state or ProductState()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def dispatch(self, action: Action) -> ProductState:
        """Apply an action to the held state.

        Returns:
            The new snapshot.
        """
        self.state = reduce(self.state, action)
        return self.state

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and return the success envelope.

        Raises:
            CatalogClientError: On transport errors, error statuses, or a
                non-success envelope.
        """
        client = await self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("Catalog request timeout", path=path, error=str(e))
            raise CatalogClientError(f"Request timed out: {path}") from e
        except httpx.RequestError as e:
            logger.error("Catalog request failed", path=path, error=str(e))
            raise CatalogClientError(f"Request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.status_code >= 400 or not data.get("success"):
            message = data.get("message") or f"Request failed with status {response.status_code}"
            raise CatalogClientError(message, status_code=response.status_code)

        return data

    async def fetch_products(self) -> ProductState:
        """Fetch the current page for the current filters.

        Returns:
            The snapshot after the fetch completes or fails.
        """
        self.dispatch(FetchStarted())
        try:
            data = await self._request(
                "POST", "/api/products", json=to_search_payload(self.state)
            )
        except CatalogClientError as e:
            logger.warning("Fetching products failed", error=e.message)
            return self.dispatch(FetchFailed(e.message))

        return self.dispatch(
            FetchSucceeded(
                products=tuple(data.get("products", [])),
                pagination=data.get("pagination", {}),
            )
        )

    async def add_product(
        self,
        name: str,
        price: float | str,
        images: list[tuple[str, bytes, str]] | None = None,
        category: str | None = None,
    ) -> WriteOutcome:
        """Create a product, then re-fetch the current page.

        Args:
            name: Product name.
            price: Product price.
            images: (filename, content, content type) triples.
            category: Optional category label.

        Returns:
            WriteOutcome with the server's message on failure.
        """
        self.dispatch(FetchStarted())

        form = {"name": name, "price": str(price)}
        if category:
            form["category"] = category
        files = [("images", image) for image in images or []]

        try:
            await self._request(
                "POST", "/api/products/add-product", data=form, files=files or None
            )
        except CatalogClientError as e:
            logger.warning("Adding product failed", error=e.message)
            self.dispatch(FetchFailed(e.message))
            return WriteOutcome(success=False, message=e.message)

        await self.fetch_products()
        self.dispatch(RequestFinished())
        return WriteOutcome(success=True, message="Product added successfully")

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product, then re-fetch the current page.

        Returns:
            True if the product was deleted.
        """
        self.dispatch(FetchStarted())
        try:
            await self._request("DELETE", f"/api/products/delete-product/{product_id}")
        except CatalogClientError as e:
            logger.warning("Deleting product failed", product_id=product_id, error=e.message)
            self.dispatch(FetchFailed(e.message))
            return False

        await self.fetch_products()
        self.dispatch(RequestFinished())
        return True

