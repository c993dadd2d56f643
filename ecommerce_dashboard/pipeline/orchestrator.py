"""Dashboard orchestrator coordinating the catalog, reviews and sales stages."""

import asyncio
import time
from typing import Optional

from ecommerce_dashboard.fetcher.data_source import DataSource
from ecommerce_dashboard.fetcher.errors import classify_error
from ecommerce_dashboard.fetcher.retry_handler import RetryHandler, SleepFunc
from ecommerce_dashboard.models.config import DashboardConfig
from ecommerce_dashboard.models.data_models import (
    DashboardResult,
    DashboardState,
    DashboardSummary,
    FailureRecord,
    Product,
    Stage,
)
from ecommerce_dashboard.monitoring.logger import StructuredLogger
from ecommerce_dashboard.pipeline.output import TranscriptReporter


class DashboardOrchestrator:
    """Loads the dashboard: catalog → per-product reviews → sales report."""

    def __init__(
        self,
        config: DashboardConfig,
        source: DataSource,
        reporter: Optional[TranscriptReporter] = None,
        logger: Optional[StructuredLogger] = None,
        sleep: SleepFunc = asyncio.sleep
    ):
        """
        Initialize orchestrator.

        Args:
            config: Dashboard configuration (retry policy, log level)
            source: Data source to load from
            reporter: Transcript writer (stdout by default)
            logger: Structured logger for telemetry
            sleep: Awaitable sleep used between retries
        """
        self.config = config
        self.source = source
        self.reporter = reporter or TranscriptReporter()
        self.logger = logger or StructuredLogger(level=config.log_level)
        self.retry_handler = RetryHandler(
            max_retries=config.max_retries,
            delay=config.retry_delay,
            on_retry=self.reporter.retrying,
            sleep=sleep,
            logger=self.logger
        )

    async def run(self) -> DashboardResult:
        """
        Run all three stages and summarize the settled state.

        Data source failures never escape: each one is recorded on the
        state and the affected part of the dashboard is left empty.

        Returns:
            DashboardResult with state, summary and elapsed time
        """
        start = time.monotonic()
        state = DashboardState()
        self.reporter.dashboard_start()

        await self._load_catalog(state)
        if state.products:
            await self._load_reviews(state)
        await self._load_sales_report(state)

        duration = time.monotonic() - start
        summary = DashboardSummary.from_state(state)
        self.reporter.summary(summary)
        self.logger.dashboard_complete(
            products_loaded=summary.products_loaded,
            products_with_reviews=summary.products_with_reviews,
            sales_report_loaded=summary.sales_report_loaded,
            elapsed_ms=duration * 1000
        )
        return DashboardResult(state=state, summary=summary, duration=duration)

    async def _load_catalog(self, state: DashboardState) -> None:
        self.reporter.catalog_start()
        self.logger.stage_start(Stage.CATALOG.value)
        try:
            products = await self.retry_handler.execute(self.source.fetch_catalog)
        except Exception as e:
            self._record_failure(state, Stage.CATALOG, e)
            self.reporter.catalog_failed(e)
        else:
            state.products = list(products)
            self.logger.stage_success(Stage.CATALOG.value, items=len(state.products))
            self.reporter.catalog_loaded(state.products)
        finally:
            self.reporter.catalog_completed()

    async def _load_reviews(self, state: DashboardState) -> None:
        """Fetch reviews for every product concurrently and wait for all."""
        self.reporter.reviews_start()
        self.logger.stage_start(Stage.REVIEWS.value)

        # Each coroutine settles its own failure, so gather never short-circuits
        await asyncio.gather(*[
            self._load_product_reviews(state, product)
            for product in state.products
        ])

        self.reporter.reviews_completed()

    async def _load_product_reviews(self, state: DashboardState, product: Product) -> None:
        try:
            reviews = await self.retry_handler.execute(
                lambda: self.source.fetch_reviews(product.id)
            )
        except Exception as e:
            self._record_failure(state, Stage.REVIEWS, e, product_id=product.id)
            self.reporter.reviews_failed(product, e)
        else:
            state.review_index[product.id] = list(reviews)
            self.logger.stage_success(
                Stage.REVIEWS.value,
                items=len(reviews),
                product_id=product.id
            )
            self.reporter.reviews_loaded(product, reviews)
        finally:
            self.reporter.review_fetch_completed(product)

    async def _load_sales_report(self, state: DashboardState) -> None:
        self.reporter.sales_report_start()
        self.logger.stage_start(Stage.SALES_REPORT.value)
        try:
            report = await self.retry_handler.execute(self.source.fetch_sales_report)
        except Exception as e:
            self._record_failure(state, Stage.SALES_REPORT, e)
            self.reporter.sales_report_failed(e)
        else:
            state.sales_report = report
            self.logger.stage_success(Stage.SALES_REPORT.value, items=1)
            self.reporter.sales_report_loaded(report)
        finally:
            self.reporter.sales_report_completed()

    def _record_failure(
        self,
        state: DashboardState,
        stage: Stage,
        error: Exception,
        product_id: Optional[int] = None
    ) -> None:
        kind = classify_error(error)
        state.failures.append(FailureRecord(
            stage=stage,
            kind=kind,
            message=str(error),
            product_id=product_id
        ))
        self.logger.stage_failure(
            stage.value,
            kind=kind.value,
            error=str(error),
            product_id=product_id
        )
