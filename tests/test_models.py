"""
Tests for users, teams and items.

Core principle: an item's ownership, team and access level are fixed at
construction, and team items always carry a team.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from itemkeeper.core.models import AccessLevel, Item, Role, Team, User
from itemkeeper.core.utils import utc_now


# =============================================================================
# Item
# =============================================================================


class TestItemConstruction:
    def test_create_defaults(self):
        item = Item.create(message="hello", user_id="alice")

        assert item.access_level == AccessLevel.INDIVIDUAL
        assert item.team_id is None
        assert item.created_by == "alice"
        assert item.created_at == item.updated_at
        assert item.id.startswith("item-")
        assert item.is_individual_item()

    def test_team_id_implies_team_access(self):
        item = Item.create(message="hello", user_id="alice", team_id="engineering")

        assert item.access_level == AccessLevel.TEAM
        assert item.is_team_item()

    def test_explicit_creator(self):
        item = Item.create(message="hello", user_id="alice", created_by="importer")
        assert item.created_by == "importer"

    def test_plain_constructor_defaults_creator_to_owner(self):
        item = Item(message="hello", user_id="bob")
        assert item.created_by == "bob"

    @pytest.mark.parametrize("access_level, team_id", [
        (AccessLevel.TEAM, None),
        (AccessLevel.INDIVIDUAL, "engineering"),
        (AccessLevel.PUBLIC, "engineering"),
    ])
    def test_team_invariant_enforced(self, access_level, team_id):
        with pytest.raises(ValidationError):
            Item.create(message="hello", user_id="alice", team_id=team_id, access_level=access_level)

    @pytest.mark.parametrize("access_level, team_id, expected", [
        (AccessLevel.TEAM, "engineering", True),
        (AccessLevel.INDIVIDUAL, None, False),
        (AccessLevel.PUBLIC, None, False),
    ])
    def test_is_team_item(self, access_level, team_id, expected):
        item = Item.create(message="m", user_id="u", team_id=team_id, access_level=access_level)
        assert item.is_team_item() == (item.team_id is not None and item.access_level == AccessLevel.TEAM)
        assert item.is_team_item() is expected


class TestItemMutation:
    def test_update_message_touches(self):
        past = utc_now() - timedelta(days=1)
        item = Item(message="old", user_id="alice", created_at=past, updated_at=past)

        item.update_message("new")

        assert item.message == "new"
        assert item.updated_at > past
        assert item.created_at == past

    @pytest.mark.parametrize("field, value", [
        ("user_id", "mallory"),
        ("team_id", "marketing"),
        ("access_level", AccessLevel.PUBLIC),
        ("created_by", "mallory"),
    ])
    def test_ownership_fields_are_frozen(self, field, value):
        item = Item.create(message="hello", user_id="alice", team_id="engineering")
        with pytest.raises(ValidationError):
            setattr(item, field, value)

    def test_archive_hides_and_touches(self):
        past = utc_now() - timedelta(days=1)
        item = Item(message="old", user_id="alice", created_at=past, updated_at=past)

        item.archive()

        assert item.archived
        assert item.updated_at > past
        assert item.user_id == "alice"

    def test_to_dict_uses_camel_case(self):
        item = Item.create(message="hello", user_id="alice", team_id="engineering")
        data = item.to_dict()

        assert data["userId"] == "alice"
        assert data["teamId"] == "engineering"
        assert data["accessLevel"] == "team"
        assert "createdAt" in data and "updatedAt" in data


# =============================================================================
# User / Team
# =============================================================================


class TestUser:
    def test_role_predicates(self):
        admin = User(user_id="root", role=Role.ADMIN)
        lead = User(user_id="lead", role=Role.TEAM_ADMIN)
        user = User(user_id="u")

        assert admin.is_admin and admin.is_team_admin
        assert lead.is_team_admin and not lead.is_admin
        assert user.is_standard_user and not user.is_team_admin

    def test_membership(self):
        user = User(user_id="u", team_ids={"engineering"})
        assert user.is_member_of_team("engineering")
        assert not user.is_member_of_team("marketing")
        assert not user.is_member_of_team(None)

    def test_user_is_immutable(self):
        user = User(user_id="u")
        with pytest.raises(ValidationError):
            user.role = Role.ADMIN


class TestTeam:
    def test_access_and_management(self):
        team = Team(name="Eng", owner_id="lead", member_ids={"m"}, admin_ids={"a"})

        assert team.can_user_access("lead")
        assert team.can_user_access("a")
        assert team.can_user_access("m")
        assert not team.can_user_access("x")

        assert team.can_user_manage("lead")
        assert team.can_user_manage("a")
        assert not team.can_user_manage("m")
