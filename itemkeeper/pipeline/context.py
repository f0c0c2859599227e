"""
Per-request pipeline context.

A fresh context is created for every pipeline execution and threaded
through all phases. Endpoint pipelines subclass it with their own fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from itemkeeper.core.utils import generate_request_id, utc_now


@dataclass
class PipelineContext:
    """Request id, request time, and a metadata bag for later phases."""

    request_id: str = field(default_factory=generate_request_id)
    request_time: datetime = field(default_factory=utc_now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    @property
    def operation(self) -> str | None:
        return self.metadata.get("operation")
