"""Client-side chat turn orchestration.

Responsibilities:
    - Ordered, mode-scoped conversation history
    - One streamed turn in flight per session (reject-on-busy)
    - Cumulative delta delivery and a single trailing assistant message
    - Exactly-once completion or error reporting, silent cancellation
"""

from cybermate.chat.session import ChatSession, TurnOutcome, TurnState

__all__ = ["ChatSession", "TurnOutcome", "TurnState"]
