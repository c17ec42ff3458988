"""Chat session: one conversation, one streamed turn at a time.

The session owns the ordered message history for a single mode. Each call to
``send`` appends the user message, posts the full history to the relay,
feeds the streamed body through ``StreamDecoder`` and grows a single trailing
assistant message as deltas arrive.

Callers integrate through three callbacks:

    on_delta(content)  cumulative assistant text so far, called per delta
    on_done()          the turn completed; fired at most once
    on_error(error)    the turn failed with a ``TurnError``; fired at most once

Exactly one of ``on_done`` / ``on_error`` fires per accepted turn, unless the
turn is cancelled, in which case neither does.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from types import TracebackType

import httpx

from cybermate.errors import ChatError, TransportError, classify_response
from cybermate.models.schemas import ChatRequest, Message, Mode, Role, TurnError
from cybermate.stream.decoder import StreamDecoder

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0

DeltaCallback = Callable[[str], None]
DoneCallback = Callable[[], None]
ErrorCallback = Callable[[TurnError], None]


class TurnState(str, Enum):
    """Lifecycle state of the session's most recent turn."""

    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TurnOutcome(str, Enum):
    """Result returned by ``ChatSession.send``."""

    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class _Turn:
    """In-progress turn: the accumulator and the assistant slot it owns."""

    def __init__(self) -> None:
        self.content = ""
        self.assistant_index: int | None = None
        self.cancelled = False
        self.task: asyncio.Task[None] | None = None


class ChatSession:
    """Manages conversation state and streaming turns for one mode.

    Args:
        endpoint_url: Relay URL accepting ``ChatRequest`` and answering
            with an event stream.
        mode: Initial persona mode.
        client: Optional shared ``httpx.AsyncClient``. When omitted the
            session creates its own and closes it in ``aclose``.
        headers: Extra request headers (e.g. relay API key).
    """

    def __init__(
        self,
        endpoint_url: str,
        *,
        mode: Mode | str = Mode.ASSESSMENT,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._mode = Mode(mode)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        self._headers = {"Accept": "text/event-stream", **(headers or {})}
        self._messages: list[Message] = []
        self._state = TurnState.IDLE
        self._turn: _Turn | None = None

    async def __aenter__(self) -> "ChatSession":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the conversation history, oldest first."""
        return tuple(self._messages)

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_busy(self) -> bool:
        """Whether a turn is currently in flight."""
        return self._turn is not None

    def set_mode(self, mode: Mode | str) -> None:
        """Switch persona mode, discarding the conversation.

        An in-flight turn is cancelled first, so none of its callbacks fire
        and its ``send`` returns ``CANCELLED``.
        """
        mode = Mode(mode)
        if mode is self._mode:
            return
        self.cancel()
        logger.info(f"Switching mode {self._mode.value} -> {mode.value}; clearing history")
        self._mode = mode
        self._messages.clear()
        self._state = TurnState.IDLE

    def reset(self) -> None:
        """Clear the conversation history, cancelling any in-flight turn."""
        self.cancel()
        self._messages.clear()
        self._state = TurnState.IDLE

    async def send(
        self,
        text: str,
        *,
        on_delta: DeltaCallback,
        on_done: DoneCallback,
        on_error: ErrorCallback,
    ) -> TurnOutcome:
        """Run one conversational turn.

        The user message is appended before any network activity so it can
        be rendered immediately. Deltas are accumulated into one trailing
        assistant message and reported cumulatively via ``on_delta``.

        Args:
            text: The user's message. Blank input is rejected.
            on_delta: Receives the full assistant content after each delta.
            on_done: Called once when the stream ends normally.
            on_error: Called once with a ``TurnError`` on failure.

        Returns:
            How the turn ended, or ``REJECTED`` if it never started
            (blank input, or another turn still in flight).
        """
        text = text.strip()
        if not text:
            logger.debug("Ignoring blank message")
            return TurnOutcome.REJECTED
        if self.is_busy:
            logger.warning("Rejected send: a turn is already in flight")
            return TurnOutcome.REJECTED

        self._messages.append(Message(role=Role.USER, content=text))
        turn = _Turn()
        self._turn = turn
        self._state = TurnState.STREAMING

        request = ChatRequest(messages=list(self._messages), mode=self._mode)
        logger.info(f"Sending turn: mode={self._mode.value}, messages={len(request.messages)}")

        turn.task = asyncio.create_task(self._stream_turn(turn, request, on_delta))
        try:
            await turn.task
        except asyncio.CancelledError:
            self._settle(turn, TurnState.CANCELLED)
            if turn.cancelled:
                return TurnOutcome.CANCELLED
            logger.info("Turn cancelled by caller task")
            raise
        except ChatError as e:
            if turn.cancelled:
                return TurnOutcome.CANCELLED
            self._settle(turn, TurnState.FAILED)
            logger.warning(f"Turn failed ({e.category.value}): {e.message}")
            on_error(e.to_turn_error())
            return TurnOutcome.FAILED
        except Exception:
            self._settle(turn, TurnState.FAILED)
            raise

        if turn.cancelled:
            return TurnOutcome.CANCELLED
        self._settle(turn, TurnState.COMPLETED)
        logger.info(f"Turn completed: {len(turn.content)} characters")
        on_done()
        return TurnOutcome.COMPLETED

    def cancel(self) -> bool:
        """Abort the in-flight turn without firing any callback.

        Returns:
            True if a turn was cancelled, False if none was in flight.
        """
        turn = self._turn
        if turn is None:
            return False

        turn.cancelled = True
        self._settle(turn, TurnState.CANCELLED)
        if turn.task is not None:
            turn.task.cancel()
        logger.info("Turn cancelled")
        return True

    async def aclose(self) -> None:
        """Tear the session down: cancel any turn and drop the history."""
        self.cancel()
        self._messages.clear()
        if self._owns_client:
            await self._client.aclose()

    async def _stream_turn(
        self,
        turn: _Turn,
        request: ChatRequest,
        on_delta: DeltaCallback,
    ) -> None:
        decoder = StreamDecoder()
        try:
            async with self._client.stream(
                "POST",
                self._endpoint_url,
                json=request.model_dump(mode="json"),
                headers=self._headers,
            ) as response:
                if not response.is_success:
                    body = await response.aread()
                    raise classify_response(
                        response.status_code, body.decode("utf-8", errors="replace")
                    )

                async for delta in decoder.iter_deltas(response.aiter_bytes()):
                    self._apply_delta(turn, delta, on_delta)
        except httpx.RequestError as e:
            raise TransportError(f"Connection failed: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise TransportError(f"Request could not be sent: {e}") from e

    def _apply_delta(self, turn: _Turn, delta: str, on_delta: DeltaCallback) -> None:
        if turn.cancelled or self._turn is not turn:
            return

        turn.content += delta
        message = Message(role=Role.ASSISTANT, content=turn.content)
        if turn.assistant_index is None:
            self._messages.append(message)
            turn.assistant_index = len(self._messages) - 1
        else:
            self._messages[turn.assistant_index] = message

        on_delta(turn.content)

    def _settle(self, turn: _Turn, state: TurnState) -> None:
        # A stale turn (already cancelled and replaced) must not touch state.
        if self._turn is turn:
            self._turn = None
            self._state = state
