"""Data source protocol and simulated implementation."""

import asyncio
import random
from typing import Callable, List, Optional, Protocol, Sequence

from ecommerce_dashboard.fetcher.errors import ConnectivityError, DataError
from ecommerce_dashboard.models.data_models import Product, Review, SalesReport


class DataSource(Protocol):
    """External collaborator the orchestrator loads dashboard data from."""

    async def fetch_catalog(self) -> List[Product]:
        ...

    async def fetch_reviews(self, product_id: int) -> List[Review]:
        ...

    async def fetch_sales_report(self) -> SalesReport:
        ...


MOCK_PRODUCTS: List[Product] = [
    Product(id=1, name="Laptop", price=999.99),
    Product(id=2, name="Smartphone", price=699.99),
    Product(id=3, name="Headphones", price=199.99),
    Product(id=4, name="Tablet", price=449.99),
    Product(id=5, name="Smartwatch", price=299.99),
]

MOCK_REVIEWS: List[Review] = [
    Review(id=1, product_id=1, rating=5, comment="Excellent laptop!", author="John"),
    Review(id=2, product_id=1, rating=4, comment="Good performance", author="Jane"),
    Review(id=3, product_id=2, rating=5, comment="Best phone ever", author="Mike"),
    Review(id=4, product_id=2, rating=3, comment="Battery could be better", author="Sarah"),
    Review(id=5, product_id=3, rating=4, comment="Great sound quality", author="Tom"),
    Review(id=6, product_id=4, rating=5, comment="Perfect for work", author="Lisa"),
    Review(id=7, product_id=5, rating=4, comment="Nice features", author="Alex"),
]

MOCK_SALES_REPORT = SalesReport(total_sales=125000.0, units_sold=450, average_price=277.78)


FailurePolicy = Callable[[], bool]


class RandomFailurePolicy:
    """Fails a call with the given probability."""

    def __init__(self, rate: float = 0.2, seed: Optional[int] = None):
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"rate must be between 0 and 1, got: {rate}")
        self.rate = rate
        self._rng = random.Random(seed)

    def __call__(self) -> bool:
        return self._rng.random() < self.rate


def never_fail() -> bool:
    return False


class SimulatedDataSource:
    """
    In-process data source with artificial latency and injected failures.

    Every call first waits its latency, then asks `failure_policy` whether
    to fail with a ConnectivityError. Review lookups for a product without
    reviews always raise DataError, so retries cannot clear them.
    """

    def __init__(
        self,
        products: Optional[Sequence[Product]] = None,
        reviews: Optional[Sequence[Review]] = None,
        sales_report: Optional[SalesReport] = None,
        failure_policy: Optional[FailurePolicy] = None,
        catalog_latency: float = 1.0,
        reviews_latency: float = 1.5,
        sales_latency: float = 1.0
    ):
        """
        Initialize simulated source.

        Args:
            products: Catalog contents (defaults to MOCK_PRODUCTS)
            reviews: Review contents (defaults to MOCK_REVIEWS)
            sales_report: Report contents (defaults to MOCK_SALES_REPORT)
            failure_policy: Returns True when a call should fail
            catalog_latency: Seconds each catalog call takes
            reviews_latency: Seconds each review call takes
            sales_latency: Seconds each sales report call takes
        """
        self.products = list(MOCK_PRODUCTS if products is None else products)
        self.reviews = list(MOCK_REVIEWS if reviews is None else reviews)
        self.sales_report = MOCK_SALES_REPORT if sales_report is None else sales_report
        self.failure_policy = failure_policy or RandomFailurePolicy()
        self.catalog_latency = catalog_latency
        self.reviews_latency = reviews_latency
        self.sales_latency = sales_latency

    async def fetch_catalog(self) -> List[Product]:
        await asyncio.sleep(self.catalog_latency)
        if self.failure_policy():
            raise ConnectivityError(
                "Failed to fetch product catalog: Network connection timeout"
            )
        return list(self.products)

    async def fetch_reviews(self, product_id: int) -> List[Review]:
        await asyncio.sleep(self.reviews_latency)
        if self.failure_policy():
            raise ConnectivityError(
                f"Failed to fetch reviews for product {product_id}: Server unavailable"
            )
        reviews = [r for r in self.reviews if r.product_id == product_id]
        if not reviews:
            raise DataError(f"No reviews found for product {product_id}")
        return reviews

    async def fetch_sales_report(self) -> SalesReport:
        await asyncio.sleep(self.sales_latency)
        if self.failure_policy():
            raise ConnectivityError(
                "Failed to fetch sales report: Database connection failed"
            )
        return self.sales_report
