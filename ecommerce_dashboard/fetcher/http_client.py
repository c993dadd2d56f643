"""Async HTTP client wrapper and HTTP-backed data source."""

from typing import Any, Dict, List, Optional

import httpx

from ecommerce_dashboard.fetcher.errors import ConnectivityError, DataError
from ecommerce_dashboard.models.data_models import Product, Review, SalesReport


class AsyncHTTPClient:
    """
    Async HTTP client wrapper around httpx.AsyncClient.

    Provides:
    - Configurable connect and read timeouts
    - Optional transport injection (mock or ASGI) for tests
    - Context manager for proper lifecycle management
    """

    def __init__(
        self,
        base_url: str = "",
        connect_timeout: float = 3.0,
        read_timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Prefix applied to relative request paths
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
            transport: Custom httpx transport
        """
        self.base_url = base_url
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Enter async context manager."""
        timeout = httpx.Timeout(
            connect=self.connect_timeout,
            read=self.read_timeout,
            write=5.0,
            pool=5.0
        )
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=self.transport
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Perform GET request.

        Returns:
            HTTP response
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        return await self._client.get(url, params=params, **kwargs)


class HttpDataSource:
    """
    Data source backed by the dashboard HTTP API.

    Transport failures, timeouts and 5xx responses surface as
    ConnectivityError; 404 surfaces as DataError. Anything else is
    raised as-is.
    """

    def __init__(self, client: AsyncHTTPClient):
        self.client = client

    async def _get_json(self, path: str, what: str) -> Any:
        try:
            response = await self.client.get(path)
        except httpx.TimeoutException as e:
            raise ConnectivityError(f"Failed to fetch {what}: Network connection timeout") from e
        except httpx.TransportError as e:
            raise ConnectivityError(f"Failed to fetch {what}: {e}") from e

        if response.status_code == 404:
            raise DataError(_detail(response) or f"No data found for {what}")
        if response.status_code >= 500:
            raise ConnectivityError(
                _detail(response) or f"Failed to fetch {what}: Server unavailable"
            )
        response.raise_for_status()
        return response.json()

    async def fetch_catalog(self) -> List[Product]:
        data = await self._get_json("/catalog", "product catalog")
        return [Product(**item) for item in data["products"]]

    async def fetch_reviews(self, product_id: int) -> List[Review]:
        data = await self._get_json(
            f"/products/{product_id}/reviews",
            f"reviews for product {product_id}"
        )
        return [Review(**item) for item in data["reviews"]]

    async def fetch_sales_report(self) -> SalesReport:
        data = await self._get_json("/sales-report", "sales report")
        return SalesReport(**data)


def _detail(response: httpx.Response) -> Optional[str]:
    """Extract FastAPI's error detail from a response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("detail")
    return None
