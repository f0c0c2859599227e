"""
Tests for ValidationResult.

Every violation is collected; validity depends on errors only.
"""

from collections import Counter

from itemkeeper.core.validation import (
    ValidationError,
    ValidationResult,
    ValidationSeverity,
)


class TestValidationResult:
    def test_empty_result_is_valid(self):
        result = ValidationResult()
        assert result.is_valid
        assert not result.has_warnings
        assert result.errors_as_string() == ""

    def test_field_and_global_errors(self):
        result = ValidationResult()
        result.add_error("message", "Message is required")
        result.add_error("Something is off globally")

        assert not result.is_valid
        assert result.errors[0] == ValidationError("message", "Message is required")
        assert result.errors[1].field is None
        assert result.errors_as_string() == "message: Message is required; Something is off globally"

    def test_warnings_do_not_affect_validity(self):
        result = ValidationResult()
        result.add_warning("limit", "Large limit may impact performance")
        result.add_warning("Just so you know")

        assert result.is_valid
        assert result.has_warnings
        assert all(w.severity == ValidationSeverity.WARNING for w in result.warnings)

    def test_lists_are_copies(self):
        result = ValidationResult()
        result.add_error("a", "b")
        result.errors.clear()
        assert len(result.errors) == 1

    def test_merge_is_union(self):
        a = ValidationResult()
        a.add_error("message", "too short")
        a.add_warning("message", "urgent")
        b = ValidationResult()
        b.add_error("limit", "out of range")
        b.add_warning("sortOrder", "odd")

        ab = ValidationResult().merge(a).merge(b)
        ba = ValidationResult().merge(b).merge(a)

        assert Counter(ab.errors) == Counter(a.errors + b.errors)
        assert Counter(ab.warnings) == Counter(a.warnings + b.warnings)
        assert Counter(ab.errors) == Counter(ba.errors)
        # Order follows merge order
        assert [e.field for e in ab.errors] == ["message", "limit"]

    def test_api_response_shape(self):
        result = ValidationResult()
        result.add_error("message", "Message is required")
        result.add_warning("Heads up")

        body = result.to_api_response().model_dump()

        assert body == {
            "valid": False,
            "errors": [{"field": "message", "message": "Message is required", "severity": "error"}],
            "warnings": [{"field": None, "message": "Heads up", "severity": "warning"}],
        }
