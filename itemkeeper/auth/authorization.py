"""
Access decisions - who may read or write which item.

The decision functions are pure and total: no I/O, no shared state, and
they never raise for a well-formed (user, item) pair. Rules are evaluated
in a fixed precedence order and the first match wins:

    read:   admin > owner > team member (team item) > public item > deny
    modify: admin > owner > team admin of the item's team > deny

The reason functions mirror that precedence and return a categorical
tag for audit logs. A granted decision always has a non-denied tag.
"""

from __future__ import annotations

import logging
from enum import Enum

from itemkeeper.core.models import AccessLevel, Item, Role, User

logger = logging.getLogger(__name__)


class AccessReason(str, Enum):
    """Why an access decision came out the way it did."""

    ADMIN_ACCESS = "admin_access"
    OWNER_ACCESS = "owner_access"
    TEAM_MEMBER_ACCESS = "team_member_access"
    PUBLIC_ACCESS = "public_access"
    ACCESS_DENIED = "access_denied"

    ADMIN_MODIFY = "admin_modify"
    OWNER_MODIFY = "owner_modify"
    TEAM_ADMIN_MODIFY = "team_admin_modify"
    MODIFY_DENIED = "modify_denied"

    @property
    def granted(self) -> bool:
        return self not in (AccessReason.ACCESS_DENIED, AccessReason.MODIFY_DENIED)


# =============================================================================
# Decisions
# =============================================================================


def access_reason(user: User, item: Item) -> AccessReason:
    """Read decision with its reason."""
    if user.role == Role.ADMIN:
        return AccessReason.ADMIN_ACCESS
    if user.user_id == item.user_id:
        return AccessReason.OWNER_ACCESS
    if item.access_level == AccessLevel.TEAM and user.is_member_of_team(item.team_id):
        return AccessReason.TEAM_MEMBER_ACCESS
    if item.access_level == AccessLevel.PUBLIC:
        return AccessReason.PUBLIC_ACCESS
    return AccessReason.ACCESS_DENIED


def modify_reason(user: User, item: Item) -> AccessReason:
    """Write/delete decision with its reason."""
    if user.role == Role.ADMIN:
        return AccessReason.ADMIN_MODIFY
    if user.user_id == item.user_id:
        return AccessReason.OWNER_MODIFY
    if (
        user.is_team_admin
        and item.access_level == AccessLevel.TEAM
        and user.is_member_of_team(item.team_id)
    ):
        return AccessReason.TEAM_ADMIN_MODIFY
    return AccessReason.MODIFY_DENIED


def reason(user: User, item: Item, for_modify: bool = False) -> AccessReason:
    return modify_reason(user, item) if for_modify else access_reason(user, item)


def can_access(user: User, item: Item) -> bool:
    """Can the user read the item?"""
    return access_reason(user, item).granted


def can_modify(user: User, item: Item) -> bool:
    """Can the user update or delete the item? Public items stay owner-only."""
    return modify_reason(user, item).granted


def can_access_team(user: User, team_id: str | None) -> bool:
    if team_id is None:
        return False
    return user.is_admin or user.is_member_of_team(team_id)


def is_valid_team_assignment(user: User, team_id: str | None) -> bool:
    """Individual items (no team) are always valid; otherwise the user needs the team."""
    if team_id is None:
        return True
    return can_access_team(user, team_id)


# =============================================================================
# Service wrapper (adds logging, tolerates missing inputs)
# =============================================================================


class AuthorizationService:
    """
    Logged entry point to the access rules.

    Missing users or items are denied rather than raising, so callers in
    the business-validation phase can turn a deny into a validation error.
    """

    def can_user_access_item(self, user: User | None, item: Item | None) -> bool:
        if user is None or item is None:
            return False
        decision = access_reason(user, item)
        logger.debug(
            f"Access check: user={user.user_id} item={item.id} "
            f"allowed={decision.granted} reason={decision.value}"
        )
        return decision.granted

    def can_user_modify_item(self, user: User | None, item: Item | None) -> bool:
        if user is None or item is None:
            return False
        decision = modify_reason(user, item)
        logger.debug(
            f"Modify check: user={user.user_id} item={item.id} "
            f"allowed={decision.granted} reason={decision.value}"
        )
        return decision.granted

    def can_user_access_team(self, user: User | None, team_id: str | None) -> bool:
        if user is None:
            return False
        return can_access_team(user, team_id)

    def is_valid_team_assignment(self, user: User | None, team_id: str | None) -> bool:
        if user is None:
            return False
        return is_valid_team_assignment(user, team_id)
