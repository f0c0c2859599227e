"""
Business rules for item operations.

Checks that need the decorated context: existence, quotas, content rules,
and the access decisions from itemkeeper.auth.authorization. A missing
subject (user or item) short-circuits, since nothing else can be checked
without it. Otherwise every rule runs and the result aggregates all of
them. Nothing here mutates the context.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from itemkeeper.auth.authorization import AuthorizationService
from itemkeeper.config import Settings, get_settings
from itemkeeper.core.models import Item, User
from itemkeeper.core.utils import utc_now
from itemkeeper.core.validation import ValidationResult
from itemkeeper.services.items.contexts import (
    ItemCreationContext,
    ItemRetrievalContext,
    SingleItemContext,
)

logger = logging.getLogger(__name__)


class ItemBusinessRules:
    """Phase-4 checks for every item pipeline."""

    def __init__(
        self,
        settings: Settings | None = None,
        authorization: AuthorizationService | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings or get_settings()
        self.authorization = authorization or AuthorizationService()
        self.clock = clock

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def validate_creation(self, context: ItemCreationContext) -> ValidationResult:
        result = ValidationResult()
        user = context.user
        item = context.item
        settings = self.settings

        if not context.user_exists:
            result.add_error("business.user", f"User does not exist: {user.user_id}")
            return result

        count = context.user_item_count
        if count >= settings.max_items_per_user:
            result.add_error(
                "business.limit",
                f"User has reached maximum item limit ({settings.max_items_per_user})",
            )
        elif count >= settings.item_limit_warning_threshold:
            result.add_warning(
                "business.limit",
                f"User is approaching item limit ({count}/{settings.max_items_per_user})",
            )

        self.check_content(item.message, result)

        if len(item.message) < settings.short_message_length and count > settings.high_volume_item_count:
            result.add_warning("business.content", "Short messages from high-volume users may be flagged")

        lowered = item.message.lower()
        if self.is_outside_business_hours() and "urgent" in lowered:
            result.add_warning("business.schedule", "Urgent items created outside business hours")

        prefs = context.user_preferences
        if prefs is not None and not prefs.notifications_enabled and "notify" in lowered:
            result.add_warning(
                "business.notifications",
                "User has notifications disabled but message requests notification",
            )

        if not self.authorization.is_valid_team_assignment(user, item.team_id):
            result.add_error("business.team", f"User cannot assign items to team: {item.team_id}")

        logger.debug(
            f"[{context.request_id}] creation rules for {user.user_id}: "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result

    # -------------------------------------------------------------------------
    # List
    # -------------------------------------------------------------------------

    def validate_listing(self, context: ItemRetrievalContext) -> ValidationResult:
        result = ValidationResult()
        user = context.user

        if not context.user_exists:
            result.add_error("business.user", f"User does not exist: {user.user_id}")
            return result
        if not context.user_active:
            result.add_error("business.permission", "User does not have permission to access items")
            return result
        if context.team_id and not self.authorization.can_user_access_team(user, context.team_id):
            result.add_error("business.permission", f"User is not a member of team: {context.team_id}")
            return result

        items = context.items
        archived = sum(1 for i in items if i.archived)
        if archived:
            result.add_warning("business.data", f"{archived} archived items will be hidden from results")

        old = sum(1 for i in items if context.item_details.get(i.id, {}).get("itemAge") == "old")
        if items and old > len(items) * 0.8:
            result.add_warning("business.data", "Most items are old - consider archiving or cleanup")

        return result

    def filter_visible_items(self, user: User, items: list[Item]) -> list[Item]:
        """Drop archived items and anything the user may not read."""
        return [
            i for i in items
            if not i.archived and self.authorization.can_user_access_item(user, i)
        ]

    # -------------------------------------------------------------------------
    # Get / update / delete
    # -------------------------------------------------------------------------

    def validate_lookup(self, context: SingleItemContext, for_modify: bool = False) -> ValidationResult:
        result = ValidationResult()
        item = context.item

        if item is None:
            result.add_error("business.item", f"Item not found: {context.item_id}")
            return result

        if for_modify:
            if not self.authorization.can_user_modify_item(context.user, item):
                result.add_error("business.permission", f"User cannot modify item: {item.id}")
        elif not self.authorization.can_user_access_item(context.user, item):
            result.add_error("business.permission", f"User cannot access item: {item.id}")
        return result

    def validate_update(self, context: SingleItemContext) -> ValidationResult:
        result = self.validate_lookup(context, for_modify=True)
        if context.item is not None and context.message is not None:
            self.check_content(context.message, result)
        return result

    # -------------------------------------------------------------------------
    # Shared checks
    # -------------------------------------------------------------------------

    def check_content(self, message: str, result: ValidationResult) -> None:
        lowered = message.lower()
        if any(term in lowered for term in self.settings.prohibited_terms_list):
            result.add_error("business.content", "Message contains prohibited content")

    def is_outside_business_hours(self) -> bool:
        hour = self.clock().hour
        return hour < self.settings.business_hours_start or hour >= self.settings.business_hours_end
