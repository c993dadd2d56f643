"""End-to-end tests: orchestrator → HTTP data source → mock API.

The FastAPI app is served in-process through httpx.ASGITransport, so no
sockets are opened.
"""

import httpx
import pytest

from ecommerce_dashboard.fetcher.data_source import (
    RandomFailurePolicy,
    SimulatedDataSource,
    never_fail,
)
from ecommerce_dashboard.fetcher.http_client import AsyncHTTPClient, HttpDataSource
from ecommerce_dashboard.mock_servers import create_mock_app
from ecommerce_dashboard.models.data_models import DashboardSummary, ErrorKind, Product
from ecommerce_dashboard.pipeline.orchestrator import DashboardOrchestrator


def simulated(**kwargs) -> SimulatedDataSource:
    return SimulatedDataSource(catalog_latency=0, reviews_latency=0, sales_latency=0, **kwargs)


async def run_over_http(backend, config, reporter, sleep):
    transport = httpx.ASGITransport(app=create_mock_app(backend))
    async with AsyncHTTPClient(base_url="http://dashboard.test", transport=transport) as client:
        orchestrator = DashboardOrchestrator(
            config,
            HttpDataSource(client),
            reporter=reporter,
            sleep=sleep
        )
        return await orchestrator.run()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_full_dashboard_over_http(sample_config, reporter, transcript, recording_sleep):
    result = await run_over_http(simulated(failure_policy=never_fail), sample_config, reporter, recording_sleep)

    assert result.summary == DashboardSummary(5, 5, True)
    assert result.state.sales_report.units_sold == 450
    assert "Sales report: Loaded" in transcript.file.getvalue()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_not_found_and_outages_over_http(sample_config, reporter, transcript, recording_sleep):
    backend = simulated(
        products=[Product(id=1, name="Laptop", price=999.99), Product(id=9, name="Drone", price=799.0)],
        failure_policy=never_fail
    )
    transport_calls = []

    # Sales report endpoint is down for good; everything else works
    original = backend.fetch_sales_report

    async def broken_sales_report():
        transport_calls.append("sales")
        backend.failure_policy = lambda: True
        try:
            return await original()
        finally:
            backend.failure_policy = never_fail

    backend.fetch_sales_report = broken_sales_report

    result = await run_over_http(backend, sample_config, reporter, recording_sleep)

    assert result.summary == DashboardSummary(2, 1, False)
    assert len(transport_calls) == 4

    kinds = {(f.stage.value, f.product_id): f.kind for f in result.state.failures}
    assert kinds == {
        ("reviews", 9): ErrorKind.NOT_FOUND,
        ("sales_report", None): ErrorKind.CONNECTIVITY,
    }

    output = transcript.file.getvalue()
    assert "Data Error for Drone: No reviews found for product 9" in output
    assert "Network Error: Failed to fetch sales report: Database connection failed" in output


@pytest.mark.integration
@pytest.mark.asyncio
async def test_seeded_random_failures_are_repeatable(sample_config, reporter, recording_sleep):
    def backend():
        return simulated(failure_policy=RandomFailurePolicy(rate=0.5, seed=1234))

    first = await run_over_http(backend(), sample_config, reporter, recording_sleep)
    second = await run_over_http(backend(), sample_config, reporter, recording_sleep)

    assert first.summary == second.summary


@pytest.mark.integration
@pytest.mark.asyncio
async def test_simulated_source_direct(sample_config, reporter, recording_sleep):
    """The orchestrator accepts the in-process source unchanged."""
    orchestrator = DashboardOrchestrator(
        sample_config,
        simulated(failure_policy=never_fail),
        reporter=reporter,
        sleep=recording_sleep
    )

    result = await orchestrator.run()

    assert result.summary == DashboardSummary(5, 5, True)
    assert result.duration >= 0
