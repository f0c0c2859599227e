"""
Core domain for itemkeeper.

Contains the fundamental models and validation primitives:
- Users, teams and items with their access predicates
- ValidationResult for collecting every violation before failing
"""

from itemkeeper.core.models import (
    AccessLevel,
    Item,
    Role,
    Team,
    User,
    UserPreferences,
)
from itemkeeper.core.utils import generate_id, generate_request_id, utc_now
from itemkeeper.core.validation import (
    ApiError,
    ValidationError,
    ValidationResponse,
    ValidationResult,
    ValidationSeverity,
)

__all__ = [
    # Models
    "Role",
    "AccessLevel",
    "User",
    "UserPreferences",
    "Team",
    "Item",
    # Validation
    "ValidationSeverity",
    "ValidationError",
    "ValidationResult",
    "ApiError",
    "ValidationResponse",
    # Utils
    "generate_id",
    "generate_request_id",
    "utc_now",
]
