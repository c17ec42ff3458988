"""Relay configuration with environment variable loading.

Pydantic-based configuration for forwarding chat requests to an
OpenAI-compatible gateway via a custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"


class RelayConfig(BaseModel):
    """Configuration for the chat relay.

    A missing API key is not a startup error: the relay reports it per
    request so the client sees it as an ordinary upstream failure.

    Attributes:
        api_key: Gateway API key (empty when not configured).
        base_url: Gateway base URL, without trailing slash.
        model_name: Model identifier to request.
        timeout: Upstream request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", os.getenv("LOVABLE_API_KEY", "")),
        description="API key for the LLM gateway",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL,
        description="Gateway base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TIMEOUT", "120")),
        gt=0.0,
        description="Upstream request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.strip().rstrip("/")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.
    """
    return RelayConfig()
