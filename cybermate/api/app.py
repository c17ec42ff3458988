"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cybermate.agent.config import RelayConfig, get_relay_config
from cybermate.api.chat import router as chat_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Closes the upstream HTTP client on shutdown unless it was supplied
    by the caller.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting CyberMate relay...")
    if not app.state.relay_config.has_api_key:
        logger.warning("LLM_API_KEY is not set; chat requests will fail until it is")
    yield
    # Shutdown
    logger.info("Shutting down CyberMate relay...")
    client: httpx.AsyncClient | None = app.state.http_client
    if client is not None and app.state.owns_http_client:
        await client.aclose()


def create_app(
    config: RelayConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Relay configuration. Loads from environment if not provided.
        http_client: Optional upstream client (tests inject a mock transport).

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="CyberMate Chat Relay",
        description=(
            "Streaming relay between the CyberMate chat client and an "
            "OpenAI-compatible LLM gateway. Injects the persona system prompt "
            "for the selected mode and passes the event stream through."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.relay_config = config or get_relay_config()
    application.state.http_client = http_client
    application.state.owns_http_client = http_client is None

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "cybermate-relay"}

    return application


app = create_app()
