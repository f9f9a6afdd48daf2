from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncGenerator

from .types import CompletionRequest, CompletionResponse


class LLMClient(ABC):
    provider_name: str

    @abstractmethod
    async def send_request(self, request: CompletionRequest) -> CompletionResponse:
        """Generate a buffered completion for the given request."""

    @abstractmethod
    def stream_request(self, request: CompletionRequest) -> AsyncGenerator[str, None]:
        """Stream text deltas for the given request; each call issues a new request."""
