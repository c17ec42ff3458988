"""Relay-side LLM configuration and persona prompts.

Responsibilities:
    - Gateway credentials, base URL and model selection from the environment
    - Mode-to-system-prompt mapping injected ahead of the conversation

Maintains clean separation from the HTTP layer.
"""

from cybermate.agent.config import RelayConfig, get_relay_config
from cybermate.agent.prompts import SYSTEM_PROMPTS, system_prompt_for

__all__ = ["SYSTEM_PROMPTS", "RelayConfig", "get_relay_config", "system_prompt_for"]
