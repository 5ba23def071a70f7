"""Get Product Analytics Use Case."""

from dataclasses import dataclass

from stockbook.application.dto.responses import (
    ProductAnalyticsResponse,
    ProductResponse,
    TransactionResponse,
)
from stockbook.config import get_logger
from stockbook.core.entities import Product, ProductTransactionHistory
from stockbook.core.exceptions import ProductNotFoundError
from stockbook.core.interfaces.invoice_store import IInvoiceStore
from stockbook.core.interfaces.product_store import IProductStore
from stockbook.core.services import get_product_transactions

logger = get_logger(__name__)


@dataclass
class ProductAnalyticsResult:
    product: Product
    history: ProductTransactionHistory


class GetProductAnalyticsUseCase:
    """Product detail with its sales ledger reconstructed from invoices."""

    def __init__(
        self,
        product_store: IProductStore | None = None,
        invoice_store: IInvoiceStore | None = None,
    ):
        self._product_store = product_store
        self._invoice_store = invoice_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from stockbook.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from stockbook.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def execute(self, product_id: str) -> ProductAnalyticsResult:
        product = await (await self._get_product_store()).get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        history = await self.get_history(product_id)
        return ProductAnalyticsResult(product=product, history=history)

    async def get_history(self, product_id: str) -> ProductTransactionHistory:
        """Ledger only; works for products that were deleted."""
        invoices = await (await self._get_invoice_store()).get_all()
        history = get_product_transactions(product_id, invoices)
        logger.debug(
            "product_history_loaded",
            product_id=product_id,
            transactions=history.transaction_count,
        )
        return history

    @staticmethod
    def history_response(history: ProductTransactionHistory) -> list[TransactionResponse]:
        return [TransactionResponse(**t.model_dump()) for t in history.transactions]

    def to_response(self, result: ProductAnalyticsResult) -> ProductAnalyticsResponse:
        """Convert result to API response."""
        history = result.history
        return ProductAnalyticsResponse(
            product=ProductResponse.from_entity(result.product),
            transactions=self.history_response(history),
            revenue=history.revenue,
            profit=history.profit,
            quantity_sold=history.quantity_sold,
            transaction_count=history.transaction_count,
            average_sale_price=(
                history.revenue / history.quantity_sold if history.quantity_sold else 0.0
            ),
        )
