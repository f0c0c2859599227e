"""
Input validation for item requests.

Structural checks only (required fields, lengths, ranges, enum membership).
Every check runs and adds to the result; nothing here raises.
"""

from __future__ import annotations

import re

from itemkeeper.config import Settings, get_settings
from itemkeeper.core.models import AccessLevel, User
from itemkeeper.core.validation import ValidationResult

USER_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
SORT_ORDERS = ("asc", "desc")


class ItemValidationService:
    """Comprehensive input validation for every item operation."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Per-operation entry points
    # -------------------------------------------------------------------------

    def validate_create(
        self,
        user: User | None,
        message: str | None,
        team_id: str | None = None,
        access_level: str | None = None,
    ) -> ValidationResult:
        result = ValidationResult()
        self.check_message(message, result)
        self.check_user(user, result)
        self.check_team_assignment(team_id, access_level, result)
        return result

    def validate_list(
        self,
        user: User | None,
        limit: int | None = None,
        sort_order: str | None = None,
        team_id: str | None = None,
    ) -> ValidationResult:
        result = ValidationResult()
        self.check_user(user, result)

        if limit is not None:
            if limit < 1 or limit > self.settings.max_page_size:
                result.add_error("limit", f"Limit must be between 1 and {self.settings.max_page_size}")
            elif limit > self.settings.large_page_warning:
                result.add_warning("limit", "Large limit may impact performance")

        if sort_order is not None and sort_order.lower() not in SORT_ORDERS:
            result.add_error("sortOrder", "Sort order must be 'asc' or 'desc'")

        if team_id is not None and not team_id.strip():
            result.add_error("teamId", "Team ID cannot be empty")

        return result

    def validate_item_lookup(self, user: User | None, item_id: str | None) -> ValidationResult:
        """Get and delete."""
        result = ValidationResult()
        self.check_user(user, result)
        self.check_item_id(item_id, result)
        return result

    def validate_update(
        self,
        user: User | None,
        item_id: str | None,
        message: str | None,
    ) -> ValidationResult:
        result = self.validate_item_lookup(user, item_id)
        self.check_message(message, result)
        return result

    # -------------------------------------------------------------------------
    # Field checks
    # -------------------------------------------------------------------------

    def check_message(self, message: str | None, result: ValidationResult) -> None:
        if message is None or not message.strip():
            result.add_error("message", "Message is required and cannot be empty")
            return

        if len(message) > self.settings.max_message_length:
            result.add_error(
                "message",
                f"Message cannot exceed {self.settings.max_message_length} characters",
            )
        if len(message.strip()) < self.settings.min_message_length:
            result.add_error(
                "message",
                f"Message must be at least {self.settings.min_message_length} characters long",
            )
        if "urgent" in message.lower():
            result.add_warning("message", "Message marked as urgent - consider priority setting")

    def check_user(self, user: User | None, result: ValidationResult) -> None:
        if user is None or not user.user_id.strip():
            result.add_error("userId", "User ID is required")
            return

        if len(user.user_id) > self.settings.max_user_id_length:
            result.add_error(
                "userId",
                f"User ID cannot exceed {self.settings.max_user_id_length} characters",
            )
        if not USER_ID_PATTERN.match(user.user_id):
            result.add_error(
                "userId",
                "User ID can only contain letters, numbers, hyphens, and underscores",
            )

    def check_item_id(self, item_id: str | None, result: ValidationResult) -> None:
        if item_id is None or not item_id.strip():
            result.add_error("itemId", "Item ID is required")

    def check_team_assignment(
        self,
        team_id: str | None,
        access_level: str | None,
        result: ValidationResult,
    ) -> None:
        level = None
        if access_level is not None:
            try:
                level = AccessLevel(access_level.lower())
            except ValueError:
                allowed = ", ".join(a.value for a in AccessLevel)
                result.add_error("accessLevel", f"Access level must be one of: {allowed}")

        if team_id is not None and not team_id.strip():
            result.add_error("teamId", "Team ID cannot be empty")
            return

        if level == AccessLevel.TEAM and team_id is None:
            result.add_error("teamId", "Team items require a team ID")
        elif level is not None and level != AccessLevel.TEAM and team_id is not None:
            result.add_error("teamId", "Team ID is only allowed for team items")
