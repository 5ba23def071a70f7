"""Create Invoice Use Case: checkout of several products into one invoice."""

from dataclasses import dataclass

from stockbook.application.dto.requests import CreateInvoiceRequest
from stockbook.application.dto.responses import InvoiceResponse
from stockbook.application.use_cases.record_sale import RecordSaleUseCase
from stockbook.config import get_logger
from stockbook.core.entities.base import utc_now
from stockbook.core.entities.customer import Customer
from stockbook.core.entities.invoice import Invoice, InvoiceItem
from stockbook.core.entities.product import Product
from stockbook.core.exceptions import InsufficientStockError, ProductNotFoundError
from stockbook.core.interfaces.customer_store import ICustomerStore
from stockbook.core.interfaces.invoice_store import IInvoiceStore
from stockbook.core.interfaces.product_store import IProductStore
from stockbook.core.services.invoice_totals import compute_invoice_totals

logger = get_logger(__name__)


@dataclass
class CreateInvoiceResult:
    """Result of a checkout."""

    invoice: Invoice
    customer_registered: bool = False


class CreateInvoiceUseCase:
    """
    Sell several products and issue one invoice.

    Every line is validated before any stock moves: unknown products and
    quantities (merged per product) beyond the units on hand abort the
    checkout with nothing written.
    """

    def __init__(
        self,
        product_store: IProductStore | None = None,
        invoice_store: IInvoiceStore | None = None,
        customer_store: ICustomerStore | None = None,
        record_sale: RecordSaleUseCase | None = None,
    ):
        self._product_store = product_store
        self._invoice_store = invoice_store
        self._customer_store = customer_store
        self._record_sale = record_sale

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

    async def _get_customer_store(self) -> ICustomerStore:
        if self._customer_store is None:
            from stockbook.infrastructure.storage.sqlite import get_customer_store

            self._customer_store = await get_customer_store()
        return self._customer_store

    async def _get_record_sale(self) -> RecordSaleUseCase:
        if self._record_sale is None:
            self._record_sale = RecordSaleUseCase(await self._get_product_store())
        return self._record_sale

    async def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResult:
        """Execute checkout."""
        logger.info(
            "create_invoice_started",
            customer=request.customer_name,
            items=len(request.items),
        )

        product_store = await self._get_product_store()

        # Validate every line before any write
        products: dict[str, Product] = {}
        requested: dict[str, int] = {}
        for line in request.items:
            if line.product_id not in products:
                product = await product_store.get(line.product_id)
                if product is None:
                    raise ProductNotFoundError(line.product_id)
                products[line.product_id] = product
            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity

        for product_id, quantity in requested.items():
            product = products[product_id]
            if not product.is_available(quantity):
                raise InsufficientStockError(
                    product_id=product_id,
                    requested=quantity,
                    available=product.current_stock,
                )

        items = [
            InvoiceItem(
                product_id=line.product_id,
                product_name=products[line.product_id].name,
                quantity=line.quantity,
                price=(
                    products[line.product_id].selling_price
                    if line.price is None
                    else line.price
                ),
                cost_price=products[line.product_id].buying_price,
            )
            for line in request.items
        ]

        totals = compute_invoice_totals(items)

        record_sale = await self._get_record_sale()
        for item in items:
            await record_sale.execute(
                item.product_id,
                item.quantity,
                selling_price=item.price,
                cost_price=item.cost_price,
            )

        now = utc_now()
        invoice = Invoice(
            invoice_number=f"INV-{int(now.timestamp() * 1000)}",
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            items=items,
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
            profit=totals.profit,
            created_at=now,
        )
        invoice = await (await self._get_invoice_store()).save(invoice)

        registered = False
        if request.customer_phone:
            customer_store = await self._get_customer_store()
            if await customer_store.get_by_phone(request.customer_phone) is None:
                await customer_store.save(
                    Customer(name=request.customer_name, phone=request.customer_phone)
                )
                registered = True

        logger.info(
            "create_invoice_complete",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total=invoice.total,
            profit=invoice.profit,
            customer_registered=registered,
        )

        return CreateInvoiceResult(invoice=invoice, customer_registered=registered)

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return InvoiceResponse.from_entity(result.invoice)
