"""Get Customer Analytics Use Case."""

from dataclasses import dataclass, field
from datetime import datetime

from stockbook.application.dto.responses import (
    CustomerAnalyticsListResponse,
    CustomerAnalyticsResponse,
)
from stockbook.config import get_logger, get_settings
from stockbook.core.entities import CustomerAnalytics, VisitFrequency
from stockbook.core.interfaces.customer_store import ICustomerStore
from stockbook.core.interfaces.invoice_store import IInvoiceStore
from stockbook.core.services.customer_analytics import (
    CustomerSort,
    compute_customer_analytics,
    filter_customer_analytics,
    get_visit_frequency,
    sort_customer_analytics,
)

logger = get_logger(__name__)


@dataclass
class CustomerAnalyticsResult:
    customers: list[CustomerAnalytics] = field(default_factory=list)
    frequencies: list[VisitFrequency] = field(default_factory=list)


class GetCustomerAnalyticsUseCase:
    """Lifetime per-customer metrics, optionally filtered and sorted."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        customer_store: ICustomerStore | None = None,
    ):
        self._invoice_store = invoice_store
        self._customer_store = customer_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from stockbook.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _get_customer_store(self) -> ICustomerStore:
        if self._customer_store is None:
            from stockbook.infrastructure.storage.sqlite import get_customer_store

            self._customer_store = await get_customer_store()
        return self._customer_store

    async def execute(
        self,
        query: str | None = None,
        sort_by: CustomerSort = "revenue",
        now: datetime | None = None,
    ) -> CustomerAnalyticsResult:
        customers = await (await self._get_customer_store()).get_all()
        invoices = await (await self._get_invoice_store()).get_all()

        analytics = compute_customer_analytics(
            customers,
            invoices,
            top_limit=get_settings().analytics.top_products_limit,
        )
        if query:
            analytics = filter_customer_analytics(analytics, query)
        analytics = sort_customer_analytics(analytics, sort_by)

        logger.info(
            "customer_analytics_computed",
            invoices=len(invoices),
            customers=len(analytics),
            sort_by=sort_by,
        )

        return CustomerAnalyticsResult(
            customers=analytics,
            frequencies=[get_visit_frequency(a, now) for a in analytics],
        )

    def to_response(
        self, result: CustomerAnalyticsResult
    ) -> CustomerAnalyticsListResponse:
        """Convert result to API response."""
        return CustomerAnalyticsListResponse(
            customers=[
                CustomerAnalyticsResponse.from_entity(a, f)
                for a, f in zip(result.customers, result.frequencies, strict=True)
            ],
            total=len(result.customers),
            total_revenue=sum(a.total_revenue for a in result.customers),
        )
