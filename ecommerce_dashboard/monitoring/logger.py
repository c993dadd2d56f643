"""Structured logging for dashboard monitoring."""

import json
import logging
import sys
from typing import Optional


class StructuredLogger:
    """Structured logger with uniform schema."""

    def __init__(self, name: str = "dashboard", level: str = "WARNING"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        if not self.logger.handlers:
            # stderr keeps JSON lines out of the stdout transcript
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(handler)

    def log(self, event: str, level: int = logging.INFO, **kwargs) -> None:
        """
        Log structured event.

        Standard keys: event, stage, product_id, kind, error,
                      attempts_remaining, delay_ms, elapsed_ms
        """
        log_data = {"event": event, **kwargs}
        self.logger.log(level, json.dumps(log_data))

    def stage_start(self, stage: str, product_id: Optional[int] = None) -> None:
        self.log("stage_start", stage=stage, product_id=product_id)

    def stage_success(self, stage: str, items: int, product_id: Optional[int] = None) -> None:
        self.log("stage_success", stage=stage, items=items, product_id=product_id)

    def stage_failure(self, stage: str, kind: str, error: str, product_id: Optional[int] = None) -> None:
        self.log(
            "stage_failure",
            level=logging.WARNING,
            stage=stage,
            kind=kind,
            error=error,
            product_id=product_id
        )

    def retry_scheduled(self, attempts_remaining: int, delay_ms: float, error: str) -> None:
        self.log(
            "retry_scheduled",
            attempts_remaining=attempts_remaining,
            delay_ms=delay_ms,
            error=error
        )

    def dashboard_complete(
        self,
        products_loaded: int,
        products_with_reviews: int,
        sales_report_loaded: bool,
        elapsed_ms: float
    ) -> None:
        self.log(
            "dashboard_complete",
            products_loaded=products_loaded,
            products_with_reviews=products_with_reviews,
            sales_report_loaded=sales_report_loaded,
            elapsed_ms=elapsed_ms
        )
