"""
Authorization - who may read or write which item.

Design principles:
1. Pure decision functions, no I/O
2. Roles and team memberships come from an injected directory
3. Every decision has an audit reason in the same precedence order
"""

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
from itemkeeper.auth.directory import (
    DirectoryEntry,
    IdentityClaims,
    IdentityDirectory,
    InMemoryDirectory,
)

__all__ = [
    # Decisions
    "can_access",
    "can_modify",
    "can_access_team",
    "is_valid_team_assignment",
    "reason",
    "access_reason",
    "modify_reason",
    "AccessReason",
    "AuthorizationService",
    # Directory
    "IdentityClaims",
    "IdentityDirectory",
    "DirectoryEntry",
    "InMemoryDirectory",
]
