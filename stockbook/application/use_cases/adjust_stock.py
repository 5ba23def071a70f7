"""Adjust Stock Use Case: restock or manual removal."""

from dataclasses import dataclass

from stockbook.application.dto.requests import AdjustStockRequest
from stockbook.application.dto.responses import ProductResponse, StockAdjustmentResponse
from stockbook.config import get_logger
from stockbook.core.entities.product import Product
from stockbook.core.exceptions import InsufficientStockError, ProductNotFoundError
from stockbook.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    product: Product
    action: str
    quantity: int
    previous_stock: int


class AdjustStockUseCase:
    """Change units on hand without touching sold units, revenue or profit."""

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from stockbook.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(
        self, product_id: str, request: AdjustStockRequest
    ) -> AdjustStockResult:
        """Execute adjust stock use case."""
        store = await self._get_product_store()
        product = await store.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        previous = product.current_stock
        if request.action == "add":
            product.current_stock += request.quantity
        else:
            if previous < request.quantity:
                raise InsufficientStockError(
                    product_id=product_id,
                    requested=request.quantity,
                    available=previous,
                )
            product.current_stock -= request.quantity

        product = await store.save(product)

        logger.info(
            "stock_adjusted",
            product_id=product_id,
            action=request.action,
            quantity=request.quantity,
            previous_stock=previous,
            new_stock=product.current_stock,
            reason=request.reason,
        )

        return AdjustStockResult(
            product=product,
            action=request.action,
            quantity=request.quantity,
            previous_stock=previous,
        )

    def to_response(self, result: AdjustStockResult) -> StockAdjustmentResponse:
        """Convert result to API response."""
        return StockAdjustmentResponse(
            product=ProductResponse.from_entity(result.product),
            action=result.action,
            quantity=result.quantity,
            previous_stock=result.previous_stock,
            new_stock=result.product.current_stock,
        )
