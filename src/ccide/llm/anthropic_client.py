"""Anthropic messages API client."""

from __future__ import annotations

from typing import Any, AsyncGenerator, Mapping, Optional, Sequence
import logging

from ccide.observability import estimate_completion_cost_usd

from .base import LLMClient
from .exchange import post_json, stream_text
from .parsing import as_token_count, first_set, optional_str
from .streaming import MalformedEventPolicy, extract_anthropic_text
from .transport import AiohttpTransport, HttpTransport
from .types import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    CompletionRequest,
    CompletionResponse,
    ProviderConfig,
    ResponseMetadata,
    TokenUsage,
)


class AnthropicClient(LLMClient):
    """Anthropic messages API client over raw HTTP."""

    provider_name = "Anthropic"
    API_URL = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"

    def __init__(
        self,
        config: ProviderConfig,
        *,
        transport: Optional[HttpTransport] = None,
        malformed_events: MalformedEventPolicy = MalformedEventPolicy.SKIP,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._endpoint = config.endpoint or self.API_URL
        self._transport = transport or AiohttpTransport()
        self._malformed_events = malformed_events
        self._logger = logger or logging.getLogger("ccide.llm.client")

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send_request(self, request: CompletionRequest) -> CompletionResponse:
        payload = self._build_payload(request, stream=False)
        self._logger.debug(
            "llm_request_start provider=anthropic model=%s messages=%s",
            self._config.model,
            len(request.messages),
        )
        raw = await post_json(
            self._transport,
            provider_name=self.provider_name,
            url=self._endpoint,
            headers=self._headers(),
            payload=payload,
            logger=self._logger,
        )
        response = _parse_anthropic_response(raw, fallback_model=self._config.model)
        self._logger.info(
            "llm_completion_success provider=anthropic model=%s input_tokens=%s output_tokens=%s estimated_cost_usd=%s",
            response.metadata.model,
            response.usage.prompt_tokens,
            response.usage.completion_tokens,
            estimate_completion_cost_usd(
                model=response.metadata.model,
                input_tokens=response.usage.prompt_tokens,
                output_tokens=response.usage.completion_tokens,
            ),
        )
        return response

    def stream_request(self, request: CompletionRequest) -> AsyncGenerator[str, None]:
        payload = self._build_payload(request, stream=True)
        self._logger.debug(
            "llm_stream_start provider=anthropic model=%s messages=%s",
            self._config.model,
            len(request.messages),
        )
        return stream_text(
            self._transport,
            provider_name=self.provider_name,
            url=self._endpoint,
            headers=self._headers(),
            payload=payload,
            extract_text=extract_anthropic_text,
            malformed=self._malformed_events,
            logger=self._logger,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self._config.api_key,
            "anthropic-version": self.API_VERSION,
        }

    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self._config.model,
            "max_tokens": first_set(
                request.max_tokens, self._config.max_tokens, DEFAULT_MAX_TOKENS
            ),
            "temperature": first_set(
                request.temperature, self._config.temperature, DEFAULT_TEMPERATURE
            ),
            "messages": [message.as_payload() for message in request.messages],
        }
        if request.system_prompt:
            payload["system"] = request.system_prompt
        if stream:
            payload["stream"] = True
        payload.update(request.options)
        return payload


def _parse_anthropic_response(
    payload: Mapping[str, Any],
    *,
    fallback_model: str,
) -> CompletionResponse:
    content = payload.get("content")
    text_parts = []
    if isinstance(content, Sequence) and not isinstance(content, str):
        for part in content:
            if not isinstance(part, Mapping):
                continue
            if part.get("type", "text") == "text" and isinstance(part.get("text"), str):
                text_parts.append(part["text"])

    usage = payload.get("usage")
    if not isinstance(usage, Mapping):
        usage = {}

    total = usage.get("total_tokens")
    return CompletionResponse(
        text="".join(text_parts),
        usage=TokenUsage.from_counts(
            as_token_count(usage.get("input_tokens")),
            as_token_count(usage.get("output_tokens")),
            as_token_count(total) if total is not None else None,
        ),
        metadata=ResponseMetadata(
            model=optional_str(payload.get("model")) or fallback_model,
            stop_reason=optional_str(payload.get("stop_reason")),
            id=optional_str(payload.get("id")),
        ),
    )
