from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Speaker of a message in the conversation history."""

    USER = "user"
    ASSISTANT = "assistant"


class Mode(str, Enum):
    """Persona selector applied by the relay as a system prompt."""

    ASSESSMENT = "assessment"
    INCIDENT = "incident"
    AWARENESS = "awareness"
    HELPLINE = "helpline"


class ErrorCategory(str, Enum):
    """User-facing failure categories for a chat turn."""

    RATE_LIMITED = "rate_limited"
    QUOTA_EXHAUSTED = "quota_exhausted"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"
    PROVIDER = "provider"


class Message(BaseModel):
    """A single chat message in the conversation.

    Attributes:
        role: The speaker (user or assistant).
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request payload sent to the relay for one turn.

    Attributes:
        messages: Full ordered conversation history, latest user message last.
        mode: Persona the relay should apply. Unrecognized values fall
            back to ``assessment``.
    """

    messages: list[Message] = Field(default_factory=list)
    mode: Mode = Mode.ASSESSMENT

    @field_validator("mode", mode="before")
    @classmethod
    def fallback_unknown_mode(cls, v: Any) -> Any:
        try:
            return Mode(v)
        except ValueError:
            return Mode.ASSESSMENT


class StreamEvent(BaseModel):
    """A decoded unit from the event stream.

    Attributes:
        kind: ``delta`` for a text fragment, ``done`` for the end marker.
        text: The fragment text (empty for ``done``).
    """

    kind: Literal["delta", "done"]
    text: str = ""


class ChunkDelta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str | None = None


class ChunkChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    delta: ChunkDelta | None = None


class ChatCompletionChunk(BaseModel):
    """Partial schema of a streamed chat-completion envelope.

    Every level is optional. A missing layer means the envelope carries
    no text, which callers treat as a skip rather than a failure.
    """

    model_config = ConfigDict(extra="ignore")

    choices: list[ChunkChoice] | None = None
    error: Any = None

    def content(self) -> str | None:
        """Return the first choice's delta text, if any."""
        if not self.choices:
            return None
        delta = self.choices[0].delta
        if delta is None:
            return None
        return delta.content or None

    def error_message(self) -> str | None:
        """Return the provider-reported error text, if any."""
        if not self.error:
            return None
        if isinstance(self.error, dict):
            return str(self.error.get("message") or self.error)
        return str(self.error)


class ErrorResponse(BaseModel):
    """JSON error body returned by the relay."""

    error: str


class TurnError(BaseModel):
    """Failure report handed to the caller's error callback.

    Attributes:
        category: Which kind of failure ended the turn.
        message: Human-readable text suitable for display.
        status_code: Upstream HTTP status, when one was received.
    """

    category: ErrorCategory
    message: str
    status_code: int | None = None

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace so echoed upstream bodies display cleanly."""
        return v.strip()

    def __str__(self) -> str:
        return self.message
