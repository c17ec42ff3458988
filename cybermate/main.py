"""Main application entry point.

Serves the chat relay (FastAPI) with the NiceGUI chat page mounted on the
same port. Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run the relay with NiceGUI mounted on the same server.

    FastAPI serves /chat-ai and /health, NiceGUI serves the page at /.
    """
    import uvicorn
    from nicegui import ui

    port = int(os.getenv("PORT", "8000"))
    # The page's ChatSession talks to the relay over HTTP, even in-process.
    os.environ.setdefault("CHAT_ENDPOINT_URL", f"http://localhost:{port}/chat-ai")

    from cybermate.api.app import create_app
    from cybermate.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="CyberMate",
        favicon="🛡️",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "cybermate-secret"),
    )

    logger.info(f"Starting CyberMate on http://localhost:{port}")
    logger.info(f"Relay endpoint at http://localhost:{port}/chat-ai")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_relay() -> None:
    """Run only the relay API, for deployments with a separate front-end."""
    import uvicorn

    logger.info("Starting CyberMate relay without UI")
    uvicorn.run(
        "cybermate.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point.

    Set RUN_MODE=relay to serve only the API. Default is integrated mode.
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting CyberMate in {mode} mode")

    if mode == "relay":
        run_relay()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
