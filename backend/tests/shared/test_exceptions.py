"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    MabarError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)


class TestMabarError:
    def test_message_and_default_code(self):
        """MabarError should store message and default code to class name."""
        error = MabarError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.code == "MabarError"
        assert error.details == {}

    def test_custom_code_and_details(self):
        error = MabarError("Test error", code="CUSTOM_ERROR", details={"key": "value"})
        assert error.to_dict() == {
            "error": "CUSTOM_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
        }


class TestSubclasses:
    def test_hierarchy(self):
        """Every API-mapped error is a MabarError."""
        for cls in (NotFoundError, ValidationError, ConflictError, AuthenticationError, AuthorizationError):
            error = cls("x")
            assert isinstance(error, MabarError)
            assert error.code == cls.__name__

    def test_rate_limit_exceeded(self):
        error = RateLimitExceededError("203.0.113.7")
        assert error.code == "RATE_LIMIT_EXCEEDED"
        assert error.details["client_key"] == "203.0.113.7"


class TestExternalServiceError:
    def test_stores_service(self):
        error = ExternalServiceError("Connection failed", service="supabase")
        assert error.service == "supabase"
        assert error.to_dict()["details"]["service"] == "supabase"

    def test_preserves_other_details(self):
        error = ExternalServiceError("Connection failed", service="supabase", details={"code": "08006"})
        assert error.details == {"code": "08006", "service": "supabase"}
