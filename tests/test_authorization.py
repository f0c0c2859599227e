"""
Tests for item access decisions.

Core principle: admins and owners can always read and modify; team
membership grants reads of team items; only team admins of the item's
team can modify someone else's team item; public items are owner-only
for writes.
"""

import itertools

import pytest

from itemkeeper.auth.authorization import (
    AccessReason,
    AuthorizationService,
    access_reason,
    can_access,
    can_access_team,
    can_modify,
    is_valid_team_assignment,
    modify_reason,
    reason,
)
from itemkeeper.core.models import AccessLevel, Item, Role, User


def make_item(owner="user2", access_level=AccessLevel.INDIVIDUAL, team_id=None) -> Item:
    return Item.create(message="hello", user_id=owner, team_id=team_id, access_level=access_level)


# =============================================================================
# Scenarios
# =============================================================================


class TestTeamScenarios:
    @pytest.fixture
    def team_item(self):
        return make_item(owner="user2", access_level=AccessLevel.TEAM, team_id="engineering")

    def test_team_member_reads_but_cannot_modify(self, team_item):
        user = User(user_id="user1", role=Role.USER, team_ids={"engineering"})

        assert can_access(user, team_item)
        assert not can_modify(user, team_item)
        assert access_reason(user, team_item) == AccessReason.TEAM_MEMBER_ACCESS
        assert modify_reason(user, team_item) == AccessReason.MODIFY_DENIED

    def test_team_admin_member_can_modify(self, team_item):
        lead = User(user_id="user1", role=Role.TEAM_ADMIN, team_ids={"engineering"})

        assert can_modify(lead, team_item)
        assert modify_reason(lead, team_item) == AccessReason.TEAM_ADMIN_MODIFY

    def test_team_admin_of_other_team_cannot_modify(self, team_item):
        lead = User(user_id="user1", role=Role.TEAM_ADMIN, team_ids={"marketing"})

        assert not can_access(lead, team_item)
        assert not can_modify(lead, team_item)

    def test_outsider_cannot_read(self, team_item):
        outsider = User(user_id="user3", role=Role.USER, team_ids={"marketing"})

        assert not can_access(outsider, team_item)
        assert access_reason(outsider, team_item) == AccessReason.ACCESS_DENIED

    def test_admin_overrides_individual_item(self):
        item = make_item(owner="user2")
        admin = User(user_id="root", role=Role.ADMIN)

        assert can_access(admin, item)
        assert can_modify(admin, item)
        assert reason(admin, item) == AccessReason.ADMIN_ACCESS
        assert reason(admin, item, for_modify=True) == AccessReason.ADMIN_MODIFY

    def test_public_item_is_read_only_for_others(self):
        item = make_item(owner="user2", access_level=AccessLevel.PUBLIC)
        user = User(user_id="user1")

        assert can_access(user, item)
        assert access_reason(user, item) == AccessReason.PUBLIC_ACCESS
        assert not can_modify(user, item)

    def test_owner_wins_over_team_rules(self):
        item = make_item(owner="user2", access_level=AccessLevel.TEAM, team_id="engineering")
        # Owner is no longer in the team, but still owns the item
        owner = User(user_id="user2", team_ids=set())

        assert access_reason(owner, item) == AccessReason.OWNER_ACCESS
        assert modify_reason(owner, item) == AccessReason.OWNER_MODIFY


# =============================================================================
# Exhaustive grid
# =============================================================================


ROLES = list(Role)
OWNERSHIP = [True, False]
LEVELS = list(AccessLevel)
MEMBERSHIP = [True, False]

GRID = list(itertools.product(ROLES, OWNERSHIP, LEVELS, MEMBERSHIP))


def grid_case(role, is_owner, level, is_member):
    team_id = "engineering" if level == AccessLevel.TEAM else None
    item = make_item(owner="owner", access_level=level, team_id=team_id)
    user = User(
        user_id="owner" if is_owner else "someone",
        role=role,
        team_ids={"engineering"} if is_member else set(),
    )
    return user, item


class TestDecisionGrid:
    @pytest.mark.parametrize("role, is_owner, level, is_member", GRID)
    def test_admin_always_allowed(self, role, is_owner, level, is_member):
        user, item = grid_case(role, is_owner, level, is_member)
        if role == Role.ADMIN:
            assert can_access(user, item) and can_modify(user, item)

    @pytest.mark.parametrize("role, is_owner, level, is_member", GRID)
    def test_owner_always_allowed(self, role, is_owner, level, is_member):
        user, item = grid_case(role, is_owner, level, is_member)
        if is_owner:
            assert can_access(user, item) and can_modify(user, item)

    @pytest.mark.parametrize("role, is_owner, level, is_member", GRID)
    def test_team_item_hidden_from_non_members(self, role, is_owner, level, is_member):
        user, item = grid_case(role, is_owner, level, is_member)
        if level == AccessLevel.TEAM and not is_member and not is_owner and role != Role.ADMIN:
            assert not can_access(user, item)

    @pytest.mark.parametrize("role, is_owner, level, is_member", GRID)
    def test_public_items_owner_only_for_writes(self, role, is_owner, level, is_member):
        user, item = grid_case(role, is_owner, level, is_member)
        if level == AccessLevel.PUBLIC and not is_owner and role != Role.ADMIN:
            assert can_access(user, item)
            assert not can_modify(user, item)

    @pytest.mark.parametrize("role, is_owner, level, is_member", GRID)
    def test_modify_implies_access(self, role, is_owner, level, is_member):
        user, item = grid_case(role, is_owner, level, is_member)
        if can_modify(user, item):
            assert can_access(user, item)

    @pytest.mark.parametrize("role, is_owner, level, is_member", GRID)
    def test_reasons_agree_with_decisions(self, role, is_owner, level, is_member):
        user, item = grid_case(role, is_owner, level, is_member)

        assert can_access(user, item) == access_reason(user, item).granted
        assert can_modify(user, item) == modify_reason(user, item).granted
        assert (access_reason(user, item) == AccessReason.ACCESS_DENIED) != can_access(user, item)
        assert (modify_reason(user, item) == AccessReason.MODIFY_DENIED) != can_modify(user, item)


# =============================================================================
# Teams
# =============================================================================


class TestTeamAccess:
    def test_can_access_team(self):
        member = User(user_id="u", team_ids={"engineering"})
        admin = User(user_id="root", role=Role.ADMIN)

        assert can_access_team(member, "engineering")
        assert not can_access_team(member, "marketing")
        assert can_access_team(admin, "marketing")
        assert not can_access_team(admin, None)

    def test_team_assignment(self):
        member = User(user_id="u", team_ids={"engineering"})

        assert is_valid_team_assignment(member, None)
        assert is_valid_team_assignment(member, "engineering")
        assert not is_valid_team_assignment(member, "marketing")


class TestAuthorizationService:
    @pytest.fixture
    def service(self):
        return AuthorizationService()

    def test_missing_inputs_are_denied(self, service):
        user = User(user_id="u")
        item = make_item(owner="u")

        assert not service.can_user_access_item(None, item)
        assert not service.can_user_access_item(user, None)
        assert not service.can_user_modify_item(None, item)
        assert not service.can_user_modify_item(user, None)
        assert not service.can_user_access_team(None, "engineering")
        assert not service.is_valid_team_assignment(None, None)

    def test_delegates_to_decisions(self, service):
        user = User(user_id="user1", team_ids={"engineering"})
        item = make_item(owner="user2", access_level=AccessLevel.TEAM, team_id="engineering")

        assert service.can_user_access_item(user, item)
        assert not service.can_user_modify_item(user, item)
        assert service.can_user_access_team(user, "engineering")
        assert service.is_valid_team_assignment(user, "engineering")
