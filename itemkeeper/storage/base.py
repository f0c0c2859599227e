"""
Storage abstraction layer.

All item persistence goes through ItemStore. Pipelines read from it during
decoration and write to it during persistence, and depend only on these
method signatures, never on a specific engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from itemkeeper.core.models import Item


class ItemNotFoundError(Exception):
    """The item to update or delete does not exist."""

    def __init__(self, item_id: str):
        super().__init__(f"Item not found: {item_id}")
        self.item_id = item_id


@dataclass
class ItemPage:
    """One page of a query. next_token is None on the last page."""

    items: list[Item] = field(default_factory=list)
    next_token: str | None = None


class ItemStore(ABC):
    """Storage for items, keyed by owner and item id."""

    @abstractmethod
    async def get_item(self, item_id: str) -> Item | None:
        """Get an item by ID."""
        pass

    @abstractmethod
    async def put_item(self, item: Item) -> None:
        """Store a new item."""
        pass

    @abstractmethod
    async def update_item(self, item: Item) -> None:
        """
        Replace an existing item.

        Raises:
            ItemNotFoundError: If the item does not exist
        """
        pass

    @abstractmethod
    async def delete_item(self, owner_id: str, item_id: str) -> bool:
        """Delete an item. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def query_items(
        self,
        owner_id: str,
        limit: int = 20,
        sort_order: str = "desc",
        start_key: str | None = None,
    ) -> ItemPage:
        """Items owned by a user, ordered by creation time."""
        pass

    @abstractmethod
    async def query_team_items(
        self,
        team_id: str,
        limit: int = 20,
        sort_order: str = "desc",
        start_key: str | None = None,
    ) -> ItemPage:
        """Items shared with a team, ordered by creation time."""
        pass

    @abstractmethod
    async def count_items(self, owner_id: str) -> int:
        """Number of items a user owns."""
        pass
