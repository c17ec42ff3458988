"""Unit tests for HTTP status classification."""

import pytest
import pytest_check as check

from cybermate.errors import (
    QUOTA_MESSAGE,
    RATE_LIMIT_MESSAGE,
    QuotaExceededError,
    RateLimitedError,
    TransportError,
    UpstreamRejectedError,
    classify_response,
)
from cybermate.models.schemas import ErrorCategory


class TestClassifyResponse:
    """Tests for classify_response."""

    def test_429_uses_relay_message(self) -> None:
        """The relay's JSON error text is preferred when present."""
        error = classify_response(429, '{"error": "Slow down"}')

        check.is_instance(error, RateLimitedError)
        check.equal(error.message, "Slow down")
        check.equal(error.status_code, 429)

    def test_429_default_message(self) -> None:
        """Without a JSON body the default advice is used."""
        error = classify_response(429, "")

        assert error.message == RATE_LIMIT_MESSAGE

    def test_402_default_message(self) -> None:
        """402 maps to the quota category."""
        error = classify_response(402, "<html>nope</html>")

        check.is_instance(error, QuotaExceededError)
        check.equal(error.message, QUOTA_MESSAGE)
        check.equal(
            error.message,
            "AI usage quota exceeded. Please add credits in Settings > Workspace > Usage.",
        )
        check.equal(error.to_turn_error().category, ErrorCategory.QUOTA_EXHAUSTED)

    @pytest.mark.parametrize("status_code", [400, 401, 404, 500, 502, 503])
    def test_other_statuses_are_generic(self, status_code: int) -> None:
        """Any other non-success status echoes status and text."""
        error = classify_response(status_code, "gateway exploded")

        check.is_instance(error, UpstreamRejectedError)
        check.equal(error.message, f"Request failed ({status_code}): gateway exploded")

    def test_nested_error_object(self) -> None:
        """OpenAI-style nested error objects expose their message."""
        error = classify_response(500, '{"error": {"message": "bad key", "code": 401}}')

        assert error.message == "Request failed (500): bad key"

    def test_empty_body(self) -> None:
        """An empty body still yields readable text."""
        error = classify_response(503, "   ")

        assert error.message == "Request failed (503): no response body"


class TestTurnError:
    """Tests for conversion to the caller-facing TurnError."""

    def test_transport_error_has_no_status(self) -> None:
        """Transport failures carry no HTTP status."""
        turn_error = TransportError("Connection failed: refused").to_turn_error()

        check.equal(turn_error.category, ErrorCategory.TRANSPORT)
        check.is_none(turn_error.status_code)
        check.equal(str(turn_error), "Connection failed: refused")
