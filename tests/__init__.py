"""Test package for CyberMate.

Provides test coverage for all components with unit tests for isolated
logic and integration tests for the relay and end-to-end turns.

Structure:
    - unit/: Decoder, session, error, schema and config tests
    - integration/: Relay endpoint and ChatSession through the relay

The LLM gateway is always replaced by httpx.MockTransport; no network access
is needed. Leverages pytest with pytest-check for soft assertions.
"""
