"""
Core data models: the actors (users, teams) and the records they own (items).

Users are built per request from verified identity claims and a directory
lookup. Items are persisted by the storage layer; this module only reasons
about them and builds new ones.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from itemkeeper.core.utils import generate_id, utc_now


# =============================================================================
# Enums
# =============================================================================


class Role(str, Enum):
    """Global role of a user."""

    USER = "user"              # Own items and team items (read)
    TEAM_ADMIN = "team_admin"  # Also modifies items of teams they belong to
    ADMIN = "admin"            # Everything


class AccessLevel(str, Enum):
    """Visibility class of an item."""

    INDIVIDUAL = "individual"  # Owner only
    TEAM = "team"              # Members of the item's team
    PUBLIC = "public"          # Every authenticated user


# =============================================================================
# User
# =============================================================================


class User(BaseModel):
    """
    The caller of a request.

    Role and team membership come from the identity directory at
    construction and never change during the request.
    """

    model_config = {"frozen": True}

    user_id: str
    username: str | None = None
    email: str | None = None
    role: Role = Role.USER
    team_ids: frozenset[str] = Field(default_factory=frozenset)
    last_login: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_team_admin(self) -> bool:
        """TEAM_ADMIN or anything above it."""
        return self.role in (Role.TEAM_ADMIN, Role.ADMIN)

    @property
    def is_standard_user(self) -> bool:
        return self.role == Role.USER

    def is_member_of_team(self, team_id: str | None) -> bool:
        return team_id is not None and team_id in self.team_ids


class UserPreferences(BaseModel):
    """Per-user preferences consulted by business rules."""

    user_id: str
    theme: str = "default"
    notifications_enabled: bool = True


# =============================================================================
# Team
# =============================================================================


class Team(BaseModel):
    """A named group of users sharing items."""

    team_id: str = Field(default_factory=lambda: generate_id("team"))
    name: str
    description: str = ""
    owner_id: str
    member_ids: set[str] = Field(default_factory=set)
    admin_ids: set[str] = Field(default_factory=set)
    active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def is_member(self, user_id: str) -> bool:
        return user_id in self.member_ids

    def is_admin(self, user_id: str) -> bool:
        return user_id in self.admin_ids

    def is_owner(self, user_id: str) -> bool:
        return self.owner_id == user_id

    def can_user_access(self, user_id: str) -> bool:
        return self.is_owner(user_id) or self.is_admin(user_id) or self.is_member(user_id)

    def can_user_manage(self, user_id: str) -> bool:
        return self.is_owner(user_id) or self.is_admin(user_id)

    def touch(self) -> None:
        self.updated_at = utc_now()


# =============================================================================
# Item
# =============================================================================


class Item(BaseModel):
    """
    An owned record, individually owned, team-shared, or public.

    Invariant: access_level == TEAM if and only if team_id is set.
    Ownership, team and access level are fixed once the item exists;
    only the message changes, through update_message().
    """

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    id: str = Field(default_factory=lambda: generate_id("item"), frozen=True)
    message: str

    # Ownership
    user_id: str = Field(frozen=True)
    team_id: str | None = Field(default=None, frozen=True)
    access_level: AccessLevel = Field(default=AccessLevel.INDIVIDUAL, frozen=True)

    # Audit
    created_at: datetime = Field(default_factory=utc_now, frozen=True)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: str | None = Field(default=None, frozen=True)

    archived: bool = False

    @model_validator(mode="after")
    def _check_team_invariant(self) -> Item:
        if self.access_level == AccessLevel.TEAM and self.team_id is None:
            raise ValueError("team items require a team_id")
        if self.access_level != AccessLevel.TEAM and self.team_id is not None:
            raise ValueError(f"team_id is only allowed on team items, not {self.access_level.value}")
        if self.created_by is None:
            # Frozen field; bypass the frozen check during construction only
            object.__setattr__(self, "created_by", self.user_id)
        return self

    @classmethod
    def create(
        cls,
        message: str,
        user_id: str,
        team_id: str | None = None,
        access_level: AccessLevel | None = None,
        item_id: str | None = None,
        created_by: str | None = None,
    ) -> Item:
        """
        Build a new item.

        Supplying a team_id without an access level makes a team item.
        Raises ValueError (pydantic) if the team invariant is violated.
        """
        if access_level is None:
            access_level = AccessLevel.TEAM if team_id is not None else AccessLevel.INDIVIDUAL
        now = utc_now()
        return cls(
            id=item_id or generate_id("item"),
            message=message,
            user_id=user_id,
            team_id=team_id,
            access_level=access_level,
            created_at=now,
            updated_at=now,
            created_by=created_by or user_id,
        )

    def is_team_item(self) -> bool:
        return self.team_id is not None and self.access_level == AccessLevel.TEAM

    def is_individual_item(self) -> bool:
        return self.access_level == AccessLevel.INDIVIDUAL

    def is_public_item(self) -> bool:
        return self.access_level == AccessLevel.PUBLIC

    def touch(self) -> None:
        """Refresh updated_at."""
        self.updated_at = utc_now()

    def update_message(self, message: str) -> None:
        self.message = message
        self.touch()

    def archive(self) -> None:
        """Hide the item from listings. Set by storage-side retention, not by the item endpoints."""
        self.archived = True
        self.touch()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
