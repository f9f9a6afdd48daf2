from __future__ import annotations

from typing import Optional

from .anthropic_client import AnthropicClient
from .base import LLMClient
from .errors import UnsupportedProviderError
from .openai_client import OpenAIClient
from .transport import HttpTransport
from .types import ProviderConfig

ANTHROPIC_PROVIDERS = frozenset({"anthropic", "claude"})
OPENAI_PROVIDERS = frozenset({"openai"})
SUPPORTED_PROVIDERS = ANTHROPIC_PROVIDERS | OPENAI_PROVIDERS


def create_service(
    config: ProviderConfig,
    *,
    transport: Optional[HttpTransport] = None,
) -> LLMClient:
    """Build the client for ``config.provider``; performs no I/O."""

    if config.provider in ANTHROPIC_PROVIDERS:
        return AnthropicClient(config, transport=transport)
    if config.provider in OPENAI_PROVIDERS:
        return OpenAIClient(config, transport=transport)
    raise UnsupportedProviderError(f"Unsupported LLM provider: {config.provider}")
