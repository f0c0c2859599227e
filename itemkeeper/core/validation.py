"""
Validation results that collect every problem before failing.

Input and business checks have no ordering dependency between them, so
each check appends to a shared ValidationResult and the caller gets the
complete list of violations in one response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class ValidationSeverity(str, Enum):
    """Severity of a validation entry."""

    ERROR = "error"      # Blocks execution
    WARNING = "warning"  # Informational, execution continues


# =============================================================================
# API-facing shapes
# =============================================================================


class ApiError(BaseModel):
    """One validation entry as returned to API callers."""

    field: str | None = None
    message: str
    severity: str


class ValidationResponse(BaseModel):
    """Structured validation outcome suitable for a response body."""

    valid: bool
    errors: list[ApiError] = Field(default_factory=list)
    warnings: list[ApiError] = Field(default_factory=list)


# =============================================================================
# Validation entries
# =============================================================================


@dataclass(frozen=True)
class ValidationError:
    """A single validation problem, optionally scoped to a field."""

    field: str | None
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR

    def __str__(self) -> str:
        return f"{self.field}: {self.message}" if self.field else self.message

    def to_api_error(self) -> ApiError:
        return ApiError(
            field=self.field,
            message=self.message,
            severity=self.severity.value,
        )


class ValidationResult:
    """
    Ordered errors (blocking) and warnings (informational).

    Usage:
        result = ValidationResult()
        result.add_error("message", "Message is required")
        result.add_warning("Large limit may impact performance")
        if not result.is_valid:
            raise ValidationException(result.errors_as_string(), result=result)
    """

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []
        self._warnings: list[ValidationError] = []

    def add_error(self, field_or_message: str | None, message: str | None = None) -> None:
        """Add an error. With one argument the error is not tied to a field."""
        field, text = _split(field_or_message, message)
        self._errors.append(ValidationError(field, text, ValidationSeverity.ERROR))

    def add_warning(self, field_or_message: str | None, message: str | None = None) -> None:
        """Add a warning. With one argument the warning is not tied to a field."""
        field, text = _split(field_or_message, message)
        self._warnings.append(ValidationError(field, text, ValidationSeverity.WARNING))

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def has_warnings(self) -> bool:
        return bool(self._warnings)

    @property
    def errors(self) -> list[ValidationError]:
        return list(self._errors)

    @property
    def warnings(self) -> list[ValidationError]:
        return list(self._warnings)

    def errors_as_string(self) -> str:
        return "; ".join(str(e) for e in self._errors)

    def warnings_as_string(self) -> str:
        return "; ".join(str(w) for w in self._warnings)

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Append all of `other`'s errors and warnings to this result."""
        self._errors.extend(other._errors)
        self._warnings.extend(other._warnings)
        return self

    def to_api_response(self) -> ValidationResponse:
        return ValidationResponse(
            valid=self.is_valid,
            errors=[e.to_api_error() for e in self._errors],
            warnings=[w.to_api_error() for w in self._warnings],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self._errors == other._errors and self._warnings == other._warnings

    def __repr__(self) -> str:
        return f"<ValidationResult(errors={len(self._errors)}, warnings={len(self._warnings)})>"


def _split(field_or_message: str | None, message: str | None) -> tuple[str | None, str]:
    if message is None:
        return None, field_or_message or ""
    return field_or_message, message
