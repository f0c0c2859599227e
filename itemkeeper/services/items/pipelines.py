"""
One pipeline per item endpoint.

Each phase delegates to a specialized component (validation, decoration,
business rules, persistence, responses); the pipelines only wire them
into the ServicePipeline phases.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from itemkeeper.auth.authorization import AuthorizationService
from itemkeeper.auth.directory import IdentityDirectory
from itemkeeper.config import Settings, get_settings
from itemkeeper.core.models import Item
from itemkeeper.core.utils import utc_now
from itemkeeper.core.validation import ValidationResult
from itemkeeper.pipeline.base import ServicePipeline
from itemkeeper.services.items.contexts import (
    CreateItemRequest,
    DeleteItemRequest,
    GetItemRequest,
    ItemCreationContext,
    ItemRetrievalContext,
    ListItemsRequest,
    SingleItemContext,
    UpdateItemRequest,
    resolve_access_level,
)
from itemkeeper.services.items.decoration import ItemDecorationService
from itemkeeper.services.items.persistence import ItemPersistenceService
from itemkeeper.services.items.responses import ItemResponseBuilder
from itemkeeper.services.items.rules import ItemBusinessRules
from itemkeeper.services.items.validation import ItemValidationService
from itemkeeper.storage.base import ItemStore

logger = logging.getLogger(__name__)


class ItemServicePipeline(ServicePipeline):
    """Shared wiring for item pipelines."""

    def __init__(
        self,
        store: ItemStore,
        directory: IdentityDirectory,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings or get_settings()
        self.validation = ItemValidationService(self.settings)
        self.decoration = ItemDecorationService(store, directory, self.settings, clock)
        self.rules = ItemBusinessRules(self.settings, AuthorizationService(), clock)
        self.persistence = ItemPersistenceService(store)
        self.responses = ItemResponseBuilder()


# =============================================================================
# POST /items
# =============================================================================


class CreateItemService(ItemServicePipeline):
    operation = "create_item"
    requires_persistence = True

    def validate_input(self, request: CreateItemRequest) -> ValidationResult:
        return self.validation.validate_create(
            request.user, request.message, request.team_id, request.access_level
        )

    def create_context(self, request: CreateItemRequest) -> ItemCreationContext:
        item = Item.create(
            message=request.message.strip(),
            user_id=request.user.user_id,
            team_id=request.team_id,
            access_level=resolve_access_level(request.access_level, request.team_id),
        )
        context = ItemCreationContext(user=request.user, item=item)
        context.add_metadata("userId", request.user.user_id)
        return context

    async def decorate(self, context: ItemCreationContext) -> None:
        await self.decoration.enrich_for_creation(context)

    def validate_business(self, context: ItemCreationContext) -> ValidationResult:
        return self.rules.validate_creation(context)

    async def persist(self, context: ItemCreationContext) -> None:
        await self.persistence.save_item(context.item)
        context.add_metadata("persisted", True)

    def build_response(self, context: ItemCreationContext) -> dict[str, Any]:
        logger.info(f"Item created: {context.item.id}")
        return self.responses.build_create_response(context)


# =============================================================================
# GET /items
# =============================================================================


class ListItemsService(ItemServicePipeline):
    operation = "get_items"

    def validate_input(self, request: ListItemsRequest) -> ValidationResult:
        return self.validation.validate_list(
            request.user, request.limit, request.sort_order, request.team_id
        )

    def create_context(self, request: ListItemsRequest) -> ItemRetrievalContext:
        context = ItemRetrievalContext(
            user=request.user,
            limit=request.limit if request.limit is not None else self.settings.default_page_size,
            last_evaluated_key=request.last_evaluated_key,
            sort_order=(request.sort_order or self.settings.default_sort_order).lower(),
            team_id=request.team_id,
        )
        context.add_metadata("userId", request.user.user_id)
        context.add_metadata("limit", context.limit)
        return context

    async def decorate(self, context: ItemRetrievalContext) -> None:
        await self.decoration.enrich_for_listing(context)

    def validate_business(self, context: ItemRetrievalContext) -> ValidationResult:
        return self.rules.validate_listing(context)

    def build_response(self, context: ItemRetrievalContext) -> dict[str, Any]:
        visible = self.rules.filter_visible_items(context.user, context.items)
        logger.info(f"Retrieved {len(visible)} items for user {context.user.user_id}")
        return self.responses.build_list_response(context, [i.id for i in visible])


# =============================================================================
# GET /items/{id}
# =============================================================================


class GetItemService(ItemServicePipeline):
    operation = "get_item"

    def validate_input(self, request: GetItemRequest) -> ValidationResult:
        return self.validation.validate_item_lookup(request.user, request.item_id)

    def create_context(self, request: GetItemRequest) -> SingleItemContext:
        context = SingleItemContext(user=request.user, item_id=request.item_id)
        context.add_metadata("userId", request.user.user_id)
        context.add_metadata("itemId", request.item_id)
        return context

    async def decorate(self, context: SingleItemContext) -> None:
        await self.decoration.fetch_item(context)

    def validate_business(self, context: SingleItemContext) -> ValidationResult:
        return self.rules.validate_lookup(context)

    def build_response(self, context: SingleItemContext) -> dict[str, Any]:
        return self.responses.build_get_response(context)


# =============================================================================
# PUT /items/{id}
# =============================================================================


class UpdateItemService(GetItemService):
    """Changes the message only; owner, team and access level stay fixed."""

    operation = "update_item"
    requires_persistence = True

    def validate_input(self, request: UpdateItemRequest) -> ValidationResult:
        return self.validation.validate_update(request.user, request.item_id, request.message)

    def create_context(self, request: UpdateItemRequest) -> SingleItemContext:
        context = super().create_context(request)
        context.message = request.message.strip()
        return context

    def validate_business(self, context: SingleItemContext) -> ValidationResult:
        return self.rules.validate_update(context)

    async def persist(self, context: SingleItemContext) -> None:
        context.item.update_message(context.message)
        await self.persistence.update_item(context.item)

    def build_response(self, context: SingleItemContext) -> dict[str, Any]:
        return self.responses.build_update_response(context)


# =============================================================================
# DELETE /items/{id}
# =============================================================================


class DeleteItemService(GetItemService):
    operation = "delete_item"
    requires_persistence = True

    def validate_business(self, context: SingleItemContext) -> ValidationResult:
        return self.rules.validate_lookup(context, for_modify=True)

    async def persist(self, context: SingleItemContext) -> None:
        await self.persistence.delete_item(context.item)
        context.deleted = True

    def build_response(self, context: SingleItemContext) -> dict[str, Any]:
        return self.responses.build_delete_response(context)
