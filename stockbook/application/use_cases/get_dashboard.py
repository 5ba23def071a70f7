"""Get Dashboard Use Case: inventory summary, weekly trend and product lists."""

from dataclasses import dataclass, field
from datetime import tzinfo

from stockbook.application.dto.responses import (
    DashboardResponse,
    InventorySummaryResponse,
    ProductResponse,
    TrendResponse,
)
from stockbook.config import get_logger, get_settings
from stockbook.core.entities import InventorySummary, Product, StockClass, TrendSeries
from stockbook.core.interfaces.product_store import IProductStore
from stockbook.core.services import (
    compute_inventory_summary,
    compute_trend,
    products_in_class,
    recent_products,
    top_selling_products,
)

logger = get_logger(__name__)

ALERT_CLASSES = frozenset({StockClass.LOW, StockClass.CRITICAL, StockClass.OUT_OF_STOCK})


def configured_timezone() -> tzinfo | None:
    """Zone for week bucketing, or None for the host's local time."""
    return get_settings().analytics.zone


@dataclass
class DashboardResult:
    summary: InventorySummary
    trend: TrendSeries
    recent_products: list[Product] = field(default_factory=list)
    top_selling_products: list[Product] = field(default_factory=list)
    stock_alerts: list[Product] = field(default_factory=list)


class GetDashboardUseCase:
    """
    Compute the home screen metrics from the full product collection.

    A store failure propagates; metrics are never reported as zero
    because a read failed.
    """

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from stockbook.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(self, weeks: int | None = None) -> DashboardResult:
        settings = get_settings().analytics
        store = await self._get_product_store()
        products = await store.get_all()

        summary = compute_inventory_summary(products)
        trend = compute_trend(
            products,
            weeks=weeks or settings.trend_weeks,
            tz=configured_timezone(),
        )

        logger.info(
            "dashboard_computed",
            products=summary.total_products,
            revenue=summary.total_revenue,
            weeks=len(trend.labels),
        )

        return DashboardResult(
            summary=summary,
            trend=trend,
            recent_products=recent_products(products, settings.recent_products_limit),
            top_selling_products=top_selling_products(
                products, settings.top_products_limit
            ),
            stock_alerts=products_in_class(products, ALERT_CLASSES),
        )

    async def get_trend(self, weeks: int | None = None) -> TrendSeries:
        """Trend series only."""
        store = await self._get_product_store()
        products = await store.get_all()
        return compute_trend(
            products,
            weeks=weeks or get_settings().analytics.trend_weeks,
            tz=configured_timezone(),
        )

    def to_response(self, result: DashboardResult) -> DashboardResponse:
        """Convert result to API response."""
        return DashboardResponse(
            summary=InventorySummaryResponse.from_entity(result.summary),
            trend=TrendResponse.from_entity(result.trend),
            recent_products=[ProductResponse.from_entity(p) for p in result.recent_products],
            top_selling_products=[
                ProductResponse.from_entity(p) for p in result.top_selling_products
            ],
            stock_alerts=[ProductResponse.from_entity(p) for p in result.stock_alerts],
        )
