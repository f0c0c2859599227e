"""
Storage abstractions.

- ItemStore → any key-value/document store (in-memory for development)
"""

from itemkeeper.storage.base import ItemNotFoundError, ItemPage, ItemStore
from itemkeeper.storage.local import InMemoryItemStore

__all__ = [
    "ItemStore",
    "ItemPage",
    "ItemNotFoundError",
    "InMemoryItemStore",
]
