# =============================================================================
# Identity tokens
# =============================================================================
#
# Decodes bearer tokens into IdentityClaims. Token issuance belongs to the
# identity provider; create_identity_token exists for local development
# and tests.
#
# =============================================================================

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

import jwt

from itemkeeper.auth.directory import IdentityClaims
from itemkeeper.config import Settings, get_settings
from itemkeeper.core.utils import utc_now

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Token is invalid, expired, or missing required claims."""
    pass


def create_identity_token(
    claims: IdentityClaims,
    settings: Settings | None = None,
    expires_in: timedelta = timedelta(minutes=30),
) -> str:
    settings = settings or get_settings()
    now = utc_now()
    payload: dict[str, Any] = {
        "sub": claims.user_id,
        "username": claims.username,
        "email": claims.email,
        "iat": now,
        "exp": now + expires_in,
    }
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_identity_token(token: str, settings: Settings | None = None) -> IdentityClaims:
    """
    Verify a token and extract its identity claims.

    Raises:
        TokenError: If the token is invalid or has no subject
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience or None,
            options={"verify_aud": bool(settings.jwt_audience)},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
        raise TokenError("Invalid token") from e

    if not payload.get("sub"):
        raise TokenError("Token has no subject")

    return IdentityClaims(
        user_id=payload["sub"],
        username=payload.get("username") or payload.get("cognito:username"),
        email=payload.get("email"),
    )
