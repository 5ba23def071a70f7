"""Record Sale Use Case: deduct stock and accumulate lifetime counters."""

from dataclasses import dataclass

from stockbook.application.dto.responses import ProductResponse, SaleResponse
from stockbook.config import get_logger
from stockbook.core.entities.product import Product
from stockbook.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stockbook.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


@dataclass
class RecordSaleResult:
    """Result of recording a sale."""

    product: Product
    quantity: int
    revenue: float
    profit: float


class RecordSaleUseCase:
    """
    Apply one sale to a product.

    The product is written once with the decremented stock and the
    incremented counters. No invoice is created here; checkout builds
    the invoice and calls this once per line.
    """

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from stockbook.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(
        self,
        product_id: str,
        quantity: int,
        selling_price: float | None = None,
        cost_price: float | None = None,
    ) -> RecordSaleResult:
        """
        Record ``quantity`` units sold at ``selling_price``.

        Prices default to the product's current list and buying prices.

        Raises:
            ValidationError: quantity is not a positive integer
            ProductNotFoundError: no product with this id
            InsufficientStockError: not enough units on hand
        """
        if not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("quantity", "must be a positive integer", quantity)

        store = await self._get_product_store()
        product = await store.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        if not product.is_available(quantity):
            raise InsufficientStockError(
                product_id=product_id,
                requested=quantity,
                available=product.current_stock,
            )

        price = product.selling_price if selling_price is None else selling_price
        cost = product.buying_price if cost_price is None else cost_price
        revenue = price * quantity
        profit = (price - cost) * quantity

        product.current_stock -= quantity
        product.sold_units += quantity
        product.revenue += revenue
        product.profit += profit
        product = await store.save(product)

        logger.info(
            "sale_recorded",
            product_id=product_id,
            quantity=quantity,
            revenue=revenue,
            profit=profit,
            remaining_stock=product.current_stock,
        )

        return RecordSaleResult(
            product=product, quantity=quantity, revenue=revenue, profit=profit
        )

    def to_response(self, result: RecordSaleResult) -> SaleResponse:
        """Convert result to API response."""
        return SaleResponse(
            product=ProductResponse.from_entity(result.product),
            quantity=result.quantity,
            revenue=result.revenue,
            profit=result.profit,
        )
