"""Unit tests for individual components in isolation.

Coverage:
    - stream/: Framing, buffering and tolerant envelope parsing
    - chat/: Turn lifecycle, callbacks, busy guard, cancellation
    - models/, errors: Validation and status classification
    - agent/: Relay configuration and persona prompts

The relay is mocked with httpx.MockTransport.
"""
