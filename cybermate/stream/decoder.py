"""Incremental decoder for chat-completion event streams.

Turns the raw ``text/event-stream`` body relayed from the LLM gateway into
text deltas. Network reads may split a line anywhere (even inside a UTF-8
sequence), so the decoder keeps a carry-over buffer and only interprets
complete lines.

Wire format handled::

    : keep-alive comment
    data: {"choices":[{"delta":{"content":"Hi"}}]}

    data: [DONE]

Each ``data:`` line carries one JSON envelope. Envelopes that are malformed
or carry no text are skipped. A provider error envelope ends the stream with
``ProviderStreamError``.
"""

import codecs
import logging
from collections.abc import AsyncIterable, AsyncIterator

from pydantic import ValidationError

from cybermate.errors import ProviderStreamError
from cybermate.models.schemas import ChatCompletionChunk, StreamEvent

logger = logging.getLogger(__name__)

DATA_FIELD = "data"
DONE_MARKER = "[DONE]"


class StreamDecoder:
    """Single-use decoder for one streamed response.

    Feed it raw chunks with ``feed`` and call ``close`` when the source ends,
    or hand it an async byte iterator via ``iter_deltas``. Once ``[DONE]`` is
    seen or the stream is closed the decoder is finished and ignores any
    further input.
    """

    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._finished = False

    @property
    def finished(self) -> bool:
        """Whether the end marker was seen or the stream was closed."""
        return self._finished

    def feed(self, chunk: bytes | str) -> list[StreamEvent]:
        """Consume one network read and return the events it completes.

        Args:
            chunk: Raw bytes (or already-decoded text) from the stream.

        Returns:
            Events decoded from every complete line now in the buffer.
            A trailing partial line stays buffered for the next read.

        Raises:
            ProviderStreamError: If an envelope reports a provider error.
        """
        if self._finished:
            return []

        if isinstance(chunk, bytes):
            chunk = self._utf8.decode(chunk)
        self._buffer += chunk

        events: list[StreamEvent] = []
        while not self._finished:
            newline = self._buffer.find("\n")
            if newline == -1:
                break
            line = self._buffer[:newline]
            self._buffer = self._buffer[newline + 1 :]
            events.extend(self._process_line(line.removesuffix("\r")))
        return events

    def close(self) -> list[StreamEvent]:
        """Flush the buffer after the source stream ended.

        A final line without a trailing newline is still interpreted.

        Returns:
            Events decoded from the remaining buffer.
        """
        if self._finished:
            return []

        events = self.feed(self._utf8.decode(b"", final=True))
        if not self._finished and self._buffer:
            line, self._buffer = self._buffer, ""
            events.extend(self._process_line(line.removesuffix("\r")))

        self._finished = True
        self._buffer = ""
        return events

    async def iter_deltas(self, source: AsyncIterable[bytes]) -> AsyncIterator[str]:
        """Lazily yield delta texts from an async byte source.

        Stops at ``[DONE]`` or when the source is exhausted.

        Args:
            source: Async iterable of raw response chunks.

        Yields:
            Text fragments in arrival order.
        """
        if self._finished:
            raise RuntimeError("StreamDecoder is single-use; create a new one per request")

        async for chunk in source:
            for event in self.feed(chunk):
                if event.kind == "done":
                    return
                yield event.text

        for event in self.close():
            if event.kind == "delta":
                yield event.text

    def _process_line(self, line: str) -> list[StreamEvent]:
        # Blank lines separate events; ':' lines are keep-alive comments.
        if not line or line.startswith(":"):
            return []

        field, _, value = line.partition(":")
        if field != DATA_FIELD:
            return []

        event = self._parse_payload(value.strip())
        return [event] if event else []

    def _parse_payload(self, payload: str) -> StreamEvent | None:
        if not payload:
            return None

        if payload == DONE_MARKER:
            self._finished = True
            self._buffer = ""
            return StreamEvent(kind="done")

        try:
            envelope = ChatCompletionChunk.model_validate_json(payload)
        except ValidationError:
            logger.debug(f"Skipping malformed stream event: {payload[:80]!r}")
            return None

        error = envelope.error_message()
        if error:
            raise ProviderStreamError(error)

        content = envelope.content()
        if content is None:
            return None
        return StreamEvent(kind="delta", text=content)


def decode_all(data: bytes | str) -> list[str]:
    """Decode a complete stream body in one call.

    Args:
        data: The entire response body.

    Returns:
        Delta texts in order, up to the end marker.
    """
    decoder = StreamDecoder()
    events = decoder.feed(data) + decoder.close()
    return [event.text for event in events if event.kind == "delta"]
