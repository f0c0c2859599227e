"""
Item writes.

Wraps every store failure in PersistenceException. A write against an
item that no longer exists is still a PersistenceException; its context
carries reason="not_found" so callers can tell it apart from an
infrastructure failure.
"""

from __future__ import annotations

import logging

from itemkeeper.core.models import Item
from itemkeeper.pipeline.exceptions import PersistenceException
from itemkeeper.storage.base import ItemNotFoundError, ItemStore

logger = logging.getLogger(__name__)


class ItemPersistenceService:
    """Write path to the item store."""

    def __init__(self, store: ItemStore):
        self.store = store

    async def save_item(self, item: Item) -> None:
        try:
            await self.store.put_item(item)
        except Exception as e:
            logger.warning(f"Persistence failed for item {item.id}: {e!r}")
            raise PersistenceException(
                f"Failed to persist item: {item.id}",
                context={"itemId": item.id, "reason": "storage_error"},
            ) from e
        logger.info(f"Item persisted: {item.id}")

    async def update_item(self, item: Item) -> None:
        try:
            await self.store.update_item(item)
        except ItemNotFoundError as e:
            raise PersistenceException(
                f"Failed to update item: {item.id}",
                context={"itemId": item.id, "reason": "not_found"},
            ) from e
        except Exception as e:
            logger.warning(f"Update failed for item {item.id}: {e!r}")
            raise PersistenceException(
                f"Failed to update item: {item.id}",
                context={"itemId": item.id, "reason": "storage_error"},
            ) from e
        logger.info(f"Item updated: {item.id}")

    async def delete_item(self, item: Item) -> None:
        try:
            deleted = await self.store.delete_item(item.user_id, item.id)
        except Exception as e:
            logger.warning(f"Delete failed for item {item.id}: {e!r}")
            raise PersistenceException(
                f"Failed to delete item: {item.id}",
                context={"itemId": item.id, "reason": "storage_error"},
            ) from e
        if not deleted:
            raise PersistenceException(
                f"Failed to delete item: {item.id}",
                context={"itemId": item.id, "reason": "not_found"},
            )
        logger.info(f"Item deleted: {item.id}")
