"""
Requests and pipeline contexts for item operations.

Requests are what the transport layer hands to a pipeline. Contexts are
created fresh per execution and accumulate decorated state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from itemkeeper.core.models import AccessLevel, Item, User, UserPreferences
from itemkeeper.pipeline.context import PipelineContext


# =============================================================================
# Requests
# =============================================================================


@dataclass(frozen=True)
class CreateItemRequest:
    user: User | None
    message: str | None = None
    team_id: str | None = None
    access_level: str | None = None  # validated against AccessLevel


@dataclass(frozen=True)
class ListItemsRequest:
    user: User | None
    limit: int | None = None
    last_evaluated_key: str | None = None
    sort_order: str | None = None
    team_id: str | None = None  # list a team's items instead of your own


@dataclass(frozen=True)
class GetItemRequest:
    user: User | None
    item_id: str | None = None


@dataclass(frozen=True)
class UpdateItemRequest:
    user: User | None
    item_id: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class DeleteItemRequest:
    user: User | None
    item_id: str | None = None


# =============================================================================
# Contexts
# =============================================================================


@dataclass
class ItemCreationContext(PipelineContext):
    user: User | None = None
    item: Item | None = None

    # Decorated
    user_exists: bool = False
    user_item_count: int = 0
    user_preferences: UserPreferences | None = None


@dataclass
class ItemRetrievalContext(PipelineContext):
    user: User | None = None
    limit: int = 20
    last_evaluated_key: str | None = None
    sort_order: str = "desc"
    team_id: str | None = None

    # Decorated
    user_exists: bool = False
    user_active: bool = False
    items: list[Item] = field(default_factory=list)
    item_details: dict[str, dict[str, Any]] = field(default_factory=dict)
    next_token: str | None = None


@dataclass
class SingleItemContext(PipelineContext):
    """Context for get, update and delete of one item."""

    user: User | None = None
    item_id: str = ""
    message: str | None = None  # update only

    # Decorated
    item: Item | None = None
    item_details: dict[str, Any] = field(default_factory=dict)

    # Set by persistence
    deleted: bool = False


def resolve_access_level(value: str | None, team_id: str | None) -> AccessLevel:
    """Access level for a validated create request."""
    if value:
        return AccessLevel(value.lower())
    return AccessLevel.TEAM if team_id is not None else AccessLevel.INDIVIDUAL
