"""FastAPI mock server exposing a data source over HTTP."""

import os
from dataclasses import asdict
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ecommerce_dashboard.fetcher.data_source import (
    DataSource,
    RandomFailurePolicy,
    SimulatedDataSource,
)
from ecommerce_dashboard.fetcher.errors import ConnectivityError, DataError


class ProductModel(BaseModel):
    id: int
    name: str
    price: float


class ReviewModel(BaseModel):
    id: int
    product_id: int
    rating: int
    comment: str
    author: str


class CatalogResponse(BaseModel):
    """Catalog response model."""
    products: List[ProductModel]


class ReviewsResponse(BaseModel):
    """Reviews response model."""
    product_id: int
    reviews: List[ReviewModel]


class SalesReportResponse(BaseModel):
    """Sales report response model."""
    total_sales: float
    units_sold: int
    average_price: float


def create_mock_app(source: DataSource, name: str = "dashboard-api") -> FastAPI:
    """
    Create a FastAPI app that serves the given data source.

    ConnectivityError becomes 503 and DataError becomes 404, so an
    HttpDataSource pointed at this app reproduces the source's failures.

    Args:
        source: Data source to serve
        name: Server name reported by /health

    Returns:
        FastAPI application
    """
    app = FastAPI(title=f"Mock API - {name}")

    @app.get("/catalog", response_model=CatalogResponse)
    async def get_catalog():
        try:
            products = await source.fetch_catalog()
        except ConnectivityError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return {"products": [asdict(p) for p in products]}

    @app.get("/products/{product_id}/reviews", response_model=ReviewsResponse)
    async def get_reviews(product_id: int):
        try:
            reviews = await source.fetch_reviews(product_id)
        except ConnectivityError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except DataError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return {"product_id": product_id, "reviews": [asdict(r) for r in reviews]}

    @app.get("/sales-report", response_model=SalesReportResponse)
    async def get_sales_report():
        try:
            report = await source.fetch_sales_report()
        except ConnectivityError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return asdict(report)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "server": name}

    return app


def create_app(seed: Optional[int] = None) -> FastAPI:
    """
    Build an app serving the simulated source, configured from the environment.

    Reads ERROR_RATE, RANDOM_SEED and LATENCY_SCALE (multiplier applied to
    the simulated per-call latencies; 0 disables them).
    """
    if seed is None and "RANDOM_SEED" in os.environ:
        seed = int(os.environ["RANDOM_SEED"])
    scale = float(os.getenv("LATENCY_SCALE", 1.0))
    source = SimulatedDataSource(
        failure_policy=RandomFailurePolicy(
            rate=float(os.getenv("ERROR_RATE", 0.2)),
            seed=seed
        ),
        catalog_latency=1.0 * scale,
        reviews_latency=1.5 * scale,
        sales_latency=1.0 * scale
    )
    return create_mock_app(source)
