"""Abstract interface for product storage."""

from abc import ABC, abstractmethod

from stockbook.core.entities.product import Product


class IProductStore(ABC):
    """Interface for product catalog persistence."""

    @abstractmethod
    async def get_all(self) -> list[Product]:
        """Get every product. Empty list before the first save."""
        pass

    @abstractmethod
    async def get(self, product_id: str) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def save(self, product: Product, touch: bool = True) -> Product:
        """
        Upsert a product by ID.

        The stored created_at is kept on later saves. updated_at is
        refreshed unless ``touch`` is False, which restores a record
        verbatim (used by data import).
        """
        pass

    @abstractmethod
    async def delete(self, product_id: str) -> bool:
        """Delete by ID. A missing ID is a successful no-op."""
        pass

    @abstractmethod
    async def clear_all(self) -> None:
        """Remove every product."""
        pass
