"""Shared fixtures: a small directory with two teams, users, and stores."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from itemkeeper.auth.directory import InMemoryDirectory
from itemkeeper.config import Settings
from itemkeeper.core.models import Role, Team, User
from itemkeeper.storage.local import InMemoryItemStore

# Inside business hours
NOON = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOON


class SpyItemStore(InMemoryItemStore):
    """In-memory store that records every call."""

    def __init__(self, items=None):
        super().__init__(items)
        self.calls: list[str] = []

    @property
    def writes(self) -> list[str]:
        return [c for c in self.calls if c in ("put_item", "update_item", "delete_item")]

    async def get_item(self, item_id):
        self.calls.append("get_item")
        return await super().get_item(item_id)

    async def put_item(self, item):
        self.calls.append("put_item")
        return await super().put_item(item)

    async def update_item(self, item):
        self.calls.append("update_item")
        return await super().update_item(item)

    async def delete_item(self, owner_id, item_id):
        self.calls.append("delete_item")
        return await super().delete_item(owner_id, item_id)

    async def query_items(self, owner_id, limit=20, sort_order="desc", start_key=None):
        self.calls.append("query_items")
        return await super().query_items(owner_id, limit, sort_order, start_key)

    async def query_team_items(self, team_id, limit=20, sort_order="desc", start_key=None):
        self.calls.append("query_team_items")
        return await super().query_team_items(team_id, limit, sort_order, start_key)

    async def count_items(self, owner_id):
        self.calls.append("count_items")
        return await super().count_items(owner_id)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings():
    """Settings with defaults and a known JWT secret."""
    return Settings(jwt_secret_key="test-secret-key-with-at-least-32-bytes", sentry_dsn="")


@pytest.fixture
def engineering():
    return Team(
        team_id="engineering",
        name="Engineering",
        owner_id="eng-lead",
        member_ids={"alice", "bob"},
        admin_ids={"eng-admin"},
    )


@pytest.fixture
def marketing():
    return Team(team_id="marketing", name="Marketing", owner_id="mkt-lead", member_ids={"carol"})


@pytest.fixture
def directory(engineering, marketing):
    return InMemoryDirectory(
        users={
            "alice": Role.USER,
            "bob": Role.USER,
            "carol": Role.USER,
            "eng-admin": Role.TEAM_ADMIN,
            "root": Role.ADMIN,
            "dormant": Role.USER,
        },
        teams=[engineering, marketing],
        inactive=["dormant"],
    )


@pytest.fixture
def alice():
    return User(user_id="alice", username="alice", role=Role.USER, team_ids={"engineering"})


@pytest.fixture
def bob():
    return User(user_id="bob", username="bob", role=Role.USER, team_ids={"engineering"})


@pytest.fixture
def carol():
    return User(user_id="carol", username="carol", role=Role.USER, team_ids={"marketing"})


@pytest.fixture
def eng_admin():
    return User(user_id="eng-admin", role=Role.TEAM_ADMIN, team_ids={"engineering"})


@pytest.fixture
def root():
    return User(user_id="root", role=Role.ADMIN)


@pytest.fixture
def store():
    """Fresh spy store."""
    return SpyItemStore()
