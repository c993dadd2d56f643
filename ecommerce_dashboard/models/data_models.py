"""Core data models for the e-commerce dashboard."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ErrorKind(Enum):
    """Presentation-only classification of terminal failures."""
    CONNECTIVITY = "connectivity"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


class Stage(Enum):
    """Dashboard loading stages, in execution order."""
    CATALOG = "catalog"
    REVIEWS = "reviews"
    SALES_REPORT = "sales_report"


@dataclass(frozen=True)
class Product:
    """Catalog entry supplied by the data source."""
    id: int
    name: str
    price: float


@dataclass(frozen=True)
class Review:
    """Customer review for a single product."""
    id: int
    product_id: int
    rating: int  # 1-5
    comment: str
    author: str


@dataclass(frozen=True)
class SalesReport:
    """Aggregate sales figures."""
    total_sales: float
    units_sold: int
    average_price: float


@dataclass
class FailureRecord:
    """Terminal failure of one stage or one per-product fetch."""
    stage: Stage
    kind: ErrorKind
    message: str
    product_id: Optional[int] = None


@dataclass
class DashboardState:
    """
    Aggregate result of a single orchestration run.

    review_index only holds products whose review fetch succeeded.
    """
    products: List[Product] = field(default_factory=list)
    review_index: Dict[int, List[Review]] = field(default_factory=dict)
    sales_report: Optional[SalesReport] = None
    failures: List[FailureRecord] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardSummary:
    """Final counts reported once every stage has settled."""
    products_loaded: int
    products_with_reviews: int
    sales_report_loaded: bool

    @classmethod
    def from_state(cls, state: DashboardState) -> "DashboardSummary":
        return cls(
            products_loaded=len(state.products),
            products_with_reviews=len(state.review_index),
            sales_report_loaded=state.sales_report is not None
        )


@dataclass
class DashboardResult:
    """Complete orchestration result."""
    state: DashboardState
    summary: DashboardSummary
    duration: float
