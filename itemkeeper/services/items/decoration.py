"""
Decoration for item pipelines.

Fetches everything the business rules and responses need: whether the
caller exists in the directory, how many items they own, their
preferences, and the items themselves. Collaborator failures propagate;
the pipeline turns them into DecorationException.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Callable

from itemkeeper.auth.authorization import can_modify
from itemkeeper.auth.directory import IdentityDirectory
from itemkeeper.config import Settings, get_settings
from itemkeeper.core.models import Item, User
from itemkeeper.core.utils import utc_now
from itemkeeper.services.items.contexts import (
    ItemCreationContext,
    ItemRetrievalContext,
    SingleItemContext,
)
from itemkeeper.storage.base import ItemStore

logger = logging.getLogger(__name__)


class ItemDecorationService:
    """Enriches item contexts from the store and the directory."""

    def __init__(
        self,
        store: ItemStore,
        directory: IdentityDirectory,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.directory = directory
        self.settings = settings or get_settings()
        self.clock = clock

    async def enrich_for_creation(self, context: ItemCreationContext) -> None:
        user_id = context.user.user_id
        context.user_exists = await self.directory.user_exists(user_id)
        context.user_item_count = await self.store.count_items(user_id)
        if context.user_exists:
            context.user_preferences = await self.directory.get_preferences(user_id)

        context.add_metadata("userExists", context.user_exists)
        context.add_metadata("userItemCount", context.user_item_count)
        context.add_metadata("hasPreferences", context.user_preferences is not None)
        logger.debug(
            f"[{context.request_id}] creation enrichment: exists={context.user_exists} "
            f"items={context.user_item_count}"
        )

    async def enrich_for_listing(self, context: ItemRetrievalContext) -> None:
        user_id = context.user.user_id
        context.user_exists = await self.directory.user_exists(user_id)
        context.user_active = context.user_exists and await self.directory.is_active(user_id)

        if context.user_exists and context.user_active:
            if context.team_id:
                page = await self.store.query_team_items(
                    context.team_id,
                    limit=context.limit,
                    sort_order=context.sort_order,
                    start_key=context.last_evaluated_key,
                )
            else:
                page = await self.store.query_items(
                    user_id,
                    limit=context.limit,
                    sort_order=context.sort_order,
                    start_key=context.last_evaluated_key,
                )
            context.items = page.items
            context.next_token = page.next_token
            context.item_details = {i.id: self.enrich_item(i, context.user) for i in page.items}

        context.add_metadata("userExists", context.user_exists)
        context.add_metadata("userActive", context.user_active)
        context.add_metadata("rawItemCount", len(context.items))
        logger.debug(f"[{context.request_id}] listing enrichment: {len(context.items)} items for {user_id}")

    async def fetch_item(self, context: SingleItemContext) -> None:
        context.item = await self.store.get_item(context.item_id)
        if context.item is not None:
            context.item_details = self.enrich_item(context.item, context.user)
        context.add_metadata("itemFound", context.item is not None)

    def enrich_item(self, item: Item, user: User) -> dict[str, Any]:
        """Item dict plus computed fields for the caller."""
        enriched = item.to_dict()
        enriched["itemAge"] = self.item_age(item)
        enriched["canEdit"] = can_modify(user, item)
        return enriched

    def item_age(self, item: Item) -> str:
        if self.clock() - item.created_at > timedelta(days=self.settings.stale_item_days):
            return "old"
        return "recent"
