"""Deterministic data sources and sleeps for orchestration tests."""

import asyncio
from typing import Dict, Iterable, List, Optional, Set

from ecommerce_dashboard.fetcher.data_source import MOCK_PRODUCTS, MOCK_REVIEWS, MOCK_SALES_REPORT
from ecommerce_dashboard.fetcher.errors import ConnectivityError, DataError
from ecommerce_dashboard.models.data_models import Product, Review, SalesReport


class RecordingSleep:
    """Awaitable sleep replacement that records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        # Yield so concurrent retries still interleave
        await asyncio.sleep(0)


class ScriptedDataSource:
    """
    Data source whose failures are fixed in advance.

    catalog_failures / sales_failures: number of leading calls that raise
    ConnectivityError (use a large number for "always fails").
    review_failures: per product id, number of leading calls that raise
    ConnectivityError. Products with no reviews raise DataError every time.
    """

    def __init__(
        self,
        products: Optional[List[Product]] = None,
        reviews: Optional[List[Review]] = None,
        sales_report: SalesReport = MOCK_SALES_REPORT,
        catalog_failures: int = 0,
        review_failures: Optional[Dict[int, int]] = None,
        sales_failures: int = 0
    ):
        self.products = list(MOCK_PRODUCTS if products is None else products)
        self.reviews = list(MOCK_REVIEWS if reviews is None else reviews)
        self.sales_report = sales_report
        self.catalog_failures = catalog_failures
        self.review_failures = review_failures or {}
        self.sales_failures = sales_failures

        self.catalog_calls = 0
        self.sales_calls = 0
        self.review_calls: Dict[int, int] = {}
        self.in_flight: Set[int] = set()
        self.max_in_flight = 0
        self.events: List[str] = []

    async def fetch_catalog(self) -> List[Product]:
        self.catalog_calls += 1
        self.events.append("catalog")
        await asyncio.sleep(0)
        if self.catalog_calls <= self.catalog_failures:
            raise ConnectivityError("Failed to fetch product catalog: Network connection timeout")
        return list(self.products)

    async def fetch_reviews(self, product_id: int) -> List[Review]:
        self.review_calls[product_id] = self.review_calls.get(product_id, 0) + 1
        self.events.append(f"reviews:{product_id}")
        self.in_flight.add(product_id)
        self.max_in_flight = max(self.max_in_flight, len(self.in_flight))
        try:
            await asyncio.sleep(0)
            if self.review_calls[product_id] <= self.review_failures.get(product_id, 0):
                raise ConnectivityError(
                    f"Failed to fetch reviews for product {product_id}: Server unavailable"
                )
            reviews = [r for r in self.reviews if r.product_id == product_id]
            if not reviews:
                raise DataError(f"No reviews found for product {product_id}")
            return reviews
        finally:
            self.in_flight.discard(product_id)

    async def fetch_sales_report(self) -> SalesReport:
        self.sales_calls += 1
        self.events.append("sales")
        await asyncio.sleep(0)
        if self.sales_calls <= self.sales_failures:
            raise ConnectivityError("Failed to fetch sales report: Database connection failed")
        return self.sales_report


ALWAYS = 1_000_000


def products_with_ids(ids: Iterable[int]) -> List[Product]:
    return [Product(id=i, name=f"Product {i}", price=10.0 * i) for i in ids]
