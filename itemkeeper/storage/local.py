"""
In-memory item storage for development and tests.

Works without any external services. Pagination tokens encode the sort key
(created_at, id) of the last item on the previous page, so a page resumes
correctly even if that item was deleted in between.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from itemkeeper.core.models import Item
from itemkeeper.storage.base import ItemNotFoundError, ItemPage, ItemStore

TOKEN_SEPARATOR = "|"


class InMemoryItemStore(ItemStore):
    """Dict-backed ItemStore."""

    def __init__(self, items: list[Item] | None = None):
        self._items: dict[str, Item] = {}
        for item in items or []:
            self._items[item.id] = item.model_copy()

    async def get_item(self, item_id: str) -> Item | None:
        item = self._items.get(item_id)
        return item.model_copy() if item else None

    async def put_item(self, item: Item) -> None:
        self._items[item.id] = item.model_copy()

    async def update_item(self, item: Item) -> None:
        if item.id not in self._items:
            raise ItemNotFoundError(item.id)
        self._items[item.id] = item.model_copy()

    async def delete_item(self, owner_id: str, item_id: str) -> bool:
        item = self._items.get(item_id)
        if item is None or item.user_id != owner_id:
            return False
        del self._items[item_id]
        return True

    async def query_items(
        self,
        owner_id: str,
        limit: int = 20,
        sort_order: str = "desc",
        start_key: str | None = None,
    ) -> ItemPage:
        return self._page(lambda i: i.user_id == owner_id, limit, sort_order, start_key)

    async def query_team_items(
        self,
        team_id: str,
        limit: int = 20,
        sort_order: str = "desc",
        start_key: str | None = None,
    ) -> ItemPage:
        return self._page(lambda i: i.is_team_item() and i.team_id == team_id, limit, sort_order, start_key)

    async def count_items(self, owner_id: str) -> int:
        return sum(1 for i in self._items.values() if i.user_id == owner_id)

    def _page(
        self,
        predicate: Callable[[Item], bool],
        limit: int,
        sort_order: str,
        start_key: str | None,
    ) -> ItemPage:
        descending = sort_order.lower() == "desc"
        matches = sorted(
            (i for i in self._items.values() if predicate(i)),
            key=_sort_key,
            reverse=descending,
        )

        if start_key:
            cursor = _decode_token(start_key)
            if descending:
                matches = [i for i in matches if _sort_key(i) < cursor]
            else:
                matches = [i for i in matches if _sort_key(i) > cursor]

        page = matches[:limit]
        has_more = len(matches) > limit
        return ItemPage(
            items=[i.model_copy() for i in page],
            next_token=_encode_token(page[-1]) if has_more and page else None,
        )


def _sort_key(item: Item) -> tuple[datetime, str]:
    return item.created_at, item.id


def _encode_token(item: Item) -> str:
    return f"{item.created_at.isoformat()}{TOKEN_SEPARATOR}{item.id}"


def _decode_token(token: str) -> tuple[datetime, str]:
    created_raw, separator, item_id = token.partition(TOKEN_SEPARATOR)
    try:
        created_at = datetime.fromisoformat(created_raw)
    except ValueError as e:
        raise ValueError(f"Invalid page token: {token}") from e
    if not separator or not item_id:
        raise ValueError(f"Invalid page token: {token}")
    return created_at, item_id
