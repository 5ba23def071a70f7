"""
Data Transfer Use Case: export, import and reset.

The snapshot is the camelCase JSON shape of the four collections.
Importing an exported snapshot restores every record verbatim,
timestamps and counters included.
"""

from dataclasses import dataclass
from datetime import datetime

from pydantic import Field

from stockbook import __version__
from stockbook.application.dto.responses import ImportDataResponse
from stockbook.config import get_logger
from stockbook.core.entities import Customer, Invoice, Product
from stockbook.core.entities.base import EntityModel, utc_now
from stockbook.core.interfaces import (
    ICategoryStore,
    ICustomerStore,
    IInvoiceStore,
    IProductStore,
)
from stockbook.core.services import DEFAULT_CATEGORIES

logger = get_logger(__name__)


class DataSnapshot(EntityModel):
    """Full dump of the application data."""

    version: str = __version__
    exported_at: datetime = Field(default_factory=utc_now)
    products: list[Product] = Field(default_factory=list)
    invoices: list[Invoice] = Field(default_factory=list)
    customers: list[Customer] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


@dataclass
class ImportResult:
    products: int
    invoices: int
    customers: int
    categories: int


class DataTransferUseCase:
    """Move the whole dataset in and out, or wipe it."""

    def __init__(
        self,
        product_store: IProductStore | None = None,
        invoice_store: IInvoiceStore | None = None,
        customer_store: ICustomerStore | None = None,
        category_store: ICategoryStore | None = None,
    ):
        self._product_store = product_store
        self._invoice_store = invoice_store
        self._customer_store = customer_store
        self._category_store = category_store

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

    async def _get_category_store(self) -> ICategoryStore:
        if self._category_store is None:
            from stockbook.infrastructure.storage.sqlite import get_category_store

            self._category_store = await get_category_store()
        return self._category_store

    async def export(self) -> DataSnapshot:
        snapshot = DataSnapshot(
            products=await (await self._get_product_store()).get_all(),
            invoices=await (await self._get_invoice_store()).get_all(),
            customers=await (await self._get_customer_store()).get_all(),
            categories=await (await self._get_category_store()).get_all(),
        )
        logger.info(
            "data_exported",
            products=len(snapshot.products),
            invoices=len(snapshot.invoices),
            customers=len(snapshot.customers),
            categories=len(snapshot.categories),
        )
        return snapshot

    async def import_snapshot(self, snapshot: DataSnapshot) -> ImportResult:
        """Replace all current data with the snapshot contents."""
        await self._clear_all()

        product_store = await self._get_product_store()
        for product in snapshot.products:
            await product_store.save(product, touch=False)

        invoice_store = await self._get_invoice_store()
        for invoice in snapshot.invoices:
            await invoice_store.save(invoice)

        customer_store = await self._get_customer_store()
        for customer in snapshot.customers:
            await customer_store.save(customer)

        category_store = await self._get_category_store()
        for name in snapshot.categories:
            await category_store.save(name)

        result = ImportResult(
            products=len(snapshot.products),
            invoices=len(snapshot.invoices),
            customers=len(snapshot.customers),
            categories=len(snapshot.categories),
        )
        logger.info("data_imported", **vars(result))
        return result

    async def reset(self) -> None:
        """Delete everything; the category list returns to the defaults."""
        await self._clear_all()
        category_store = await self._get_category_store()
        for name in DEFAULT_CATEGORIES:
            await category_store.save(name)
        logger.warning("data_reset")

    async def _clear_all(self) -> None:
        await (await self._get_invoice_store()).clear_all()
        await (await self._get_product_store()).clear_all()
        await (await self._get_customer_store()).clear_all()
        await (await self._get_category_store()).clear_all()

    def to_response(self, result: ImportResult) -> ImportDataResponse:
        """Convert result to API response."""
        return ImportDataResponse(**vars(result))
