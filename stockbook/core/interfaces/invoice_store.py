"""Abstract interface for invoice storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from stockbook.core.entities.invoice import Invoice


class IInvoiceStore(ABC):
    """Interface for sales invoice persistence."""

    @abstractmethod
    async def get_all(self) -> list[Invoice]:
        """Get every invoice with its items, newest first."""
        pass

    @abstractmethod
    async def get(self, invoice_id: str) -> Invoice | None:
        """Get invoice by ID with items."""
        pass

    @abstractmethod
    async def save(self, invoice: Invoice) -> Invoice:
        """Upsert an invoice and its items by ID."""
        pass

    @abstractmethod
    async def delete(self, invoice_id: str) -> bool:
        """Delete by ID. A missing ID is a successful no-op."""
        pass

    @abstractmethod
    async def clear_all(self) -> None:
        """Remove every invoice."""
        pass

    @abstractmethod
    async def list_by_customer_phone(self, phone: str) -> list[Invoice]:
        """Invoices attributed to a customer phone, newest first."""
        pass

    @abstractmethod
    async def list_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[Invoice]:
        """Invoices created within [start, end], newest first."""
        pass
