"""FastAPI relay for the CyberMate chat client.

HTTP and streaming routes with async request handling. Relays
Server-Sent Events from the LLM gateway to the browser.

Endpoints:
    - GET /health: Service health status
    - POST /chat-ai: Streamed chat turn for a persona mode
"""

from cybermate.api.app import app, create_app

__all__ = ["app", "create_app"]
