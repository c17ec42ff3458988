"""Event-stream decoding for streamed chat completions.

Responsibilities:
    - Carry-over buffering across arbitrary network read boundaries
    - ``data:`` line framing with ``[DONE]`` termination
    - Tolerant envelope parsing that skips malformed or empty frames
"""

from cybermate.stream.decoder import StreamDecoder, decode_all

__all__ = ["StreamDecoder", "decode_all"]
