"""
Shared utility functions for itemkeeper.

Id and clock helpers used by the models and the pipeline.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone


def generate_id(prefix: str = "") -> str:
    """
    Generate a unique ID with optional prefix.

    Args:
        prefix: Optional prefix (e.g., "item", "team")

    Returns:
        A unique ID like "item-1f0c2d9e-..."
    """
    uid = str(uuid.uuid4())
    return f"{prefix}-{uid}" if prefix else uid


def generate_request_id() -> str:
    """Request id for tracing: millisecond timestamp plus a random suffix."""
    return f"req-{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)
