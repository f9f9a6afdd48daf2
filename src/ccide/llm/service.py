from __future__ import annotations

from typing import AsyncGenerator

from .base import LLMClient
from .registry import get_llm_service
from .types import CompletionRequest, CompletionResponse


async def send_request(
    request: CompletionRequest,
    client: LLMClient | None = None,
) -> CompletionResponse:
    llm_client = client or get_llm_service()
    return await llm_client.send_request(request)


def stream_request(
    request: CompletionRequest,
    client: LLMClient | None = None,
) -> AsyncGenerator[str, None]:
    llm_client = client or get_llm_service()
    return llm_client.stream_request(request)
