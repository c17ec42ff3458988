"""CyberMate - streaming chat assistant for online-safety questions.

Combines FastAPI for the LLM relay, httpx for streamed HTTP, NiceGUI for
the chat page, and Pydantic for data validation.

Components:
    - stream: Event-stream decoding of streamed chat completions
    - chat: Client-side session and turn orchestration
    - api: Relay endpoint that injects the persona prompt
    - agent: Relay configuration and system prompts
    - ui: Web interface for chat interactions
    - models: Message, request and stream schemas
"""

__version__ = "0.1.0"
