"""Integration tests for components working together.

Coverage:
    - /chat-ai relay through ASGITransport with a fake gateway
    - ChatSession streaming a full turn through the in-process relay
"""
