"""
Pipeline exceptions.

Each carries a context map (requestId, operation, ...) that the pipeline
fills in as the failure propagates, without overwriting keys the raising
phase already set.
"""

from __future__ import annotations

from typing import Any

from itemkeeper.core.validation import ValidationResult


class ServicePipelineException(Exception):
    """Base for every failure surfaced by a pipeline."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self._context: dict[str, Any] = dict(context or {})

    def add_context(self, key: str, value: Any) -> None:
        self._context[key] = value

    def add_context_if_missing(self, key: str, value: Any) -> None:
        """Set key only if it is absent and value is not None."""
        if key not in self._context and value is not None:
            self._context[key] = value

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def get_context(self, key: str) -> Any:
        return self._context.get(key)

    def __str__(self) -> str:
        if not self._context:
            return self.message
        return f"{self.message} [Context: {self._context}]"


class ValidationException(ServicePipelineException):
    """Input or business rules rejected the request (caller can fix it)."""

    def __init__(
        self,
        message: str,
        result: ValidationResult | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context)
        if result is None:
            result = ValidationResult()
            result.add_error(message)
        self.result = result


class DecorationException(ServicePipelineException):
    """A collaborator needed to enrich the context failed."""
    pass


class PersistenceException(ServicePipelineException):
    """A write to storage failed (including writes to items that no longer exist)."""
    pass
