"""Human-readable dashboard transcript.

Writes each stage's progress, retries, successes and classified failures
to a rich Console, followed by the final summary block.
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from ecommerce_dashboard.fetcher.errors import error_prefix
from ecommerce_dashboard.models.data_models import (
    DashboardSummary,
    Product,
    Review,
    SalesReport,
)


def _money(amount: float) -> str:
    """Whole amounts print without a decimal point (125000, not 125000.0)."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


class TranscriptReporter:
    """Prints the dashboard transcript to stdout (or any rich Console)."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def _line(self, text: str = "", style: Optional[str] = None) -> None:
        self.console.print(text, style=style, soft_wrap=True)

    def dashboard_start(self) -> None:
        self._line("=== E-commerce Dashboard Starting ===", style="bold cyan")
        self._line()

    def retrying(self, attempts_remaining: int, delay: float) -> None:
        delay_ms = int(round(delay * 1000))
        self._line(
            f"Retrying... Attempts remaining: {attempts_remaining}. Waiting {delay_ms}ms",
            style="yellow"
        )

    # Catalog stage

    def catalog_start(self) -> None:
        self._line("Fetching product catalog...")

    def catalog_loaded(self, products: List[Product]) -> None:
        self._line(f"Successfully fetched {len(products)} products:", style="green")
        for product in products:
            self._line(f"  - {escape(product.name)}: ${_money(product.price)}")
        self._line()

    def catalog_failed(self, error: Exception) -> None:
        self._line(f"{error_prefix(error)}: {escape(str(error))}", style="red")
        self._line("Failed to fetch product catalog after all retries.")
        self._line()

    def catalog_completed(self) -> None:
        self._line("Product catalog fetch attempt completed.")
        self._line()

    # Reviews stage

    def reviews_start(self) -> None:
        self._line("Fetching reviews for each product...")

    def reviews_loaded(self, product: Product, reviews: List[Review]) -> None:
        self._line(f"  Reviews for {escape(product.name)}:", style="green")
        for review in reviews:
            self._line(
                f"    - {escape(review.author)}: {review.rating}/5 - "
                f"\"{escape(review.comment)}\""
            )

    def reviews_failed(self, product: Product, error: Exception) -> None:
        self._line(
            f"  {error_prefix(error)} for {escape(product.name)}: {escape(str(error))}",
            style="red"
        )

    def review_fetch_completed(self, product: Product) -> None:
        self._line(f"  Review fetch for {escape(product.name)} completed.")

    def reviews_completed(self) -> None:
        self._line()
        self._line("All product reviews fetch attempts completed.")
        self._line()

    # Sales report stage

    def sales_report_start(self) -> None:
        self._line("Fetching sales report...")

    def sales_report_loaded(self, report: SalesReport) -> None:
        self._line("Sales Report:", style="green")
        self._line(f"  Total Sales: ${_money(report.total_sales)}")
        self._line(f"  Units Sold: {report.units_sold}")
        self._line(f"  Average Price: ${_money(report.average_price)}")

    def sales_report_failed(self, error: Exception) -> None:
        self._line(f"{error_prefix(error)}: {escape(str(error))}", style="red")
        self._line("Failed to fetch sales report after all retries.")

    def sales_report_completed(self) -> None:
        self._line()
        self._line("Sales report fetch attempt completed.")

    def summary(self, summary: DashboardSummary) -> None:
        self._line()
        self._line("=== Dashboard Summary ===", style="bold cyan")
        self._line(f"Products loaded: {summary.products_loaded}")
        self._line(f"Products with reviews: {summary.products_with_reviews}")
        status = "Loaded" if summary.sales_report_loaded else "Failed to load"
        self._line(f"Sales report: {status}")
        self._line("=== Dashboard Complete ===", style="bold cyan")
        self._line()
