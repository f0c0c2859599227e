"""
Identity directory - turns verified identity claims into a User.

The directory owns the mapping from an identity to its role and team
memberships. Nothing else in the codebase decides roles.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable

from pydantic import BaseModel

from itemkeeper.core.models import Role, Team, User, UserPreferences

logger = logging.getLogger(__name__)


class IdentityClaims(BaseModel):
    """Verified claims from the authentication layer."""

    user_id: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class DirectoryEntry:
    """What the directory knows about one identity."""

    role: Role = Role.USER
    team_ids: frozenset[str] = field(default_factory=frozenset)
    active: bool = True


class IdentityDirectory(ABC):
    """
    Lookup of roles, team memberships and preferences.

    Implementations: in-memory (tests, local dev), or a real user/team
    directory service.
    """

    @abstractmethod
    async def lookup(self, user_id: str) -> DirectoryEntry | None:
        """Directory entry for a user, or None if unknown."""
        pass

    @abstractmethod
    async def get_preferences(self, user_id: str) -> UserPreferences | None:
        """User preferences, or None if the user has none stored."""
        pass

    async def resolve_user(self, claims: IdentityClaims) -> User:
        """
        Build the request's User from claims.

        Unknown identities get the standard role and no teams.
        """
        entry = await self.lookup(claims.user_id) or DirectoryEntry()
        user = User(
            user_id=claims.user_id,
            username=claims.username,
            email=claims.email,
            role=entry.role,
            team_ids=entry.team_ids,
        )
        logger.debug(
            f"Resolved user {user.user_id}: role={user.role.value} "
            f"teams={sorted(user.team_ids)}"
        )
        return user

    async def user_exists(self, user_id: str) -> bool:
        return await self.lookup(user_id) is not None

    async def is_active(self, user_id: str) -> bool:
        entry = await self.lookup(user_id)
        return entry is not None and entry.active


class InMemoryDirectory(IdentityDirectory):
    """
    Directory held in memory.

    Roles come from a user_id -> Role mapping; team membership is derived
    from active Team records (owner, admin or member all count).
    """

    def __init__(
        self,
        users: dict[str, Role] | None = None,
        teams: Iterable[Team] | None = None,
        preferences: Iterable[UserPreferences] | None = None,
        inactive: Iterable[str] | None = None,
    ):
        self._roles: dict[str, Role] = dict(users or {})
        self._teams: dict[str, Team] = {t.team_id: t for t in teams or []}
        self._preferences: dict[str, UserPreferences] = {p.user_id: p for p in preferences or []}
        self._inactive: set[str] = set(inactive or [])

    def add_user(self, user_id: str, role: Role = Role.USER) -> None:
        self._roles[user_id] = role

    def add_team(self, team: Team) -> None:
        self._teams[team.team_id] = team

    def get_team(self, team_id: str) -> Team | None:
        return self._teams.get(team_id)

    def teams_for(self, user_id: str) -> frozenset[str]:
        return frozenset(
            t.team_id for t in self._teams.values()
            if t.active and t.can_user_access(user_id)
        )

    async def lookup(self, user_id: str) -> DirectoryEntry | None:
        if user_id not in self._roles:
            return None
        return DirectoryEntry(
            role=self._roles[user_id],
            team_ids=self.teams_for(user_id),
            active=user_id not in self._inactive,
        )

    async def get_preferences(self, user_id: str) -> UserPreferences | None:
        if user_id not in self._roles:
            return None
        return self._preferences.get(user_id) or UserPreferences(user_id=user_id)
