"""Abstract interface for customer storage."""

from abc import ABC, abstractmethod

from stockbook.core.entities.customer import Customer


class ICustomerStore(ABC):
    """Interface for customer persistence."""

    @abstractmethod
    async def get_all(self) -> list[Customer]:
        """Get every customer."""
        pass

    @abstractmethod
    async def get(self, customer_id: str) -> Customer | None:
        """Get customer by ID."""
        pass

    @abstractmethod
    async def get_by_phone(self, phone: str) -> Customer | None:
        """Get the first customer registered with this phone."""
        pass

    @abstractmethod
    async def save(self, customer: Customer) -> Customer:
        """Upsert a customer by ID."""
        pass

    @abstractmethod
    async def delete(self, customer_id: str) -> bool:
        """Delete by ID. A missing ID is a successful no-op."""
        pass

    @abstractmethod
    async def clear_all(self) -> None:
        """Remove every customer."""
        pass
