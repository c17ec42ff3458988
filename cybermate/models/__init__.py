"""Pydantic models shared by the chat client and the relay.

Provides type safety and validation for the conversation history, the
relay request body, and the partially-typed streaming envelope.

Models:
    - Message: Individual role-tagged message in the conversation
    - ChatRequest: Payload posted to the relay for one turn
    - StreamEvent: Decoded delta or end-of-stream marker
    - ChatCompletionChunk: Tolerant schema of a streamed provider envelope
    - ErrorResponse: Relay JSON error body
    - TurnError: Failure report passed to the caller
"""

from cybermate.models.schemas import (
    ChatCompletionChunk,
    ChatRequest,
    ChunkChoice,
    ChunkDelta,
    ErrorCategory,
    ErrorResponse,
    Message,
    Mode,
    Role,
    StreamEvent,
    TurnError,
)

__all__ = [
    "ChatCompletionChunk",
    "ChatRequest",
    "ChunkChoice",
    "ChunkDelta",
    "ErrorCategory",
    "ErrorResponse",
    "Message",
    "Mode",
    "Role",
    "StreamEvent",
    "TurnError",
]
