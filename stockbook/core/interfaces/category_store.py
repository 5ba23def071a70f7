"""Abstract interface for category storage."""

from abc import ABC, abstractmethod


class ICategoryStore(ABC):
    """
    Interface for the category set.

    Categories are bare unique strings kept in insertion order.
    """

    @abstractmethod
    async def get_all(self) -> list[str]:
        """Get all categories in insertion order."""
        pass

    @abstractmethod
    async def save(self, name: str) -> bool:
        """Add a category. Returns False when it already exists."""
        pass

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """Remove a category. A missing name is a successful no-op."""
        pass

    @abstractmethod
    async def rename(self, old_name: str, new_name: str) -> bool:
        """Replace a category; the new name moves to the end of the order."""
        pass

    @abstractmethod
    async def clear_all(self) -> None:
        """Remove every category."""
        pass
