"""Error taxonomy for chat turns.

Each turn-level failure is raised internally as a ``ChatError`` subclass and
handed to the caller as a ``TurnError``. Stream-level decode problems never
reach this module; they are skipped by the decoder.
"""

import json

from cybermate.models.schemas import ErrorCategory, TurnError

RATE_LIMIT_MESSAGE = "Too many requests. Please wait a moment and try again."
QUOTA_MESSAGE = "AI usage quota exceeded. Please add credits in Settings > Workspace > Usage."


class ChatError(Exception):
    """Base class for failures that end a chat turn."""

    category = ErrorCategory.UPSTREAM

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_turn_error(self) -> TurnError:
        return TurnError(
            category=self.category,
            message=self.message,
            status_code=self.status_code,
        )


class RateLimitedError(ChatError):
    """Upstream answered 429; the caller may retry after a short wait."""

    category = ErrorCategory.RATE_LIMITED


class QuotaExceededError(ChatError):
    """Upstream answered 402; the account needs attention."""

    category = ErrorCategory.QUOTA_EXHAUSTED


class UpstreamRejectedError(ChatError):
    """Any other non-success status, including relay misconfiguration."""

    category = ErrorCategory.UPSTREAM


class TransportError(ChatError):
    """The request never completed (connection refused, reset, timeout)."""

    category = ErrorCategory.TRANSPORT


class ProviderStreamError(ChatError):
    """The provider reported an error inside the event stream."""

    category = ErrorCategory.PROVIDER


def _extract_error_text(body: str) -> str | None:
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("error"):
        error = payload["error"]
        if isinstance(error, dict):
            return str(error.get("message") or error)
        return str(error)
    return None


def classify_response(status_code: int, body: str) -> ChatError:
    """Map a non-success HTTP response to the matching ``ChatError``.

    Args:
        status_code: HTTP status returned by the relay.
        body: Raw response body text (may be JSON ``{"error": ...}``).

    Returns:
        The exception describing the failure. It is returned, not raised.
    """
    detail = _extract_error_text(body)

    if status_code == 429:
        return RateLimitedError(detail or RATE_LIMIT_MESSAGE, status_code)
    if status_code == 402:
        return QuotaExceededError(detail or QUOTA_MESSAGE, status_code)

    text = detail or body.strip() or "no response body"
    return UpstreamRejectedError(f"Request failed ({status_code}): {text}", status_code)
