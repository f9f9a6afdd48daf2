"""OpenAI chat completions API client."""

from __future__ import annotations

from typing import Any, AsyncGenerator, Mapping, Optional, Sequence
import logging

from ccide.observability import estimate_completion_cost_usd

from .base import LLMClient
from .errors import InvalidResponseError
from .exchange import post_json, stream_text
from .parsing import as_token_count, first_set, optional_str
from .streaming import MalformedEventPolicy, extract_openai_text
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


class OpenAIClient(LLMClient):
    """OpenAI-compatible chat completions client over raw HTTP.

    ``config.endpoint`` replaces the full chat completions URL, so any
    OpenAI-compatible server can be targeted.
    """

    provider_name = "OpenAI"
    API_URL = "https://api.openai.com/v1/chat/completions"

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
            "llm_request_start provider=openai model=%s messages=%s",
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
        response = _parse_openai_response(raw, fallback_model=self._config.model)
        self._logger.info(
            "llm_completion_success provider=openai model=%s input_tokens=%s output_tokens=%s estimated_cost_usd=%s",
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
            "llm_stream_start provider=openai model=%s messages=%s",
            self._config.model,
            len(request.messages),
        )
        return stream_text(
            self._transport,
            provider_name=self.provider_name,
            url=self._endpoint,
            headers=self._headers(),
            payload=payload,
            extract_text=extract_openai_text,
            malformed=self._malformed_events,
            logger=self._logger,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }

    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> dict[str, Any]:
        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.extend(message.as_payload() for message in request.messages)

        payload: dict[str, Any] = {
            "model": self._config.model,
            "max_tokens": first_set(
                request.max_tokens, self._config.max_tokens, DEFAULT_MAX_TOKENS
            ),
            "temperature": first_set(
                request.temperature, self._config.temperature, DEFAULT_TEMPERATURE
            ),
            "messages": messages,
        }
        if stream:
            payload["stream"] = True
        payload.update(request.options)
        return payload


def _parse_openai_response(
    payload: Mapping[str, Any],
    *,
    fallback_model: str,
) -> CompletionResponse:
    choices = payload.get("choices")
    if not isinstance(choices, Sequence) or isinstance(choices, str) or not choices:
        raise InvalidResponseError("OpenAI response missing choices array.")

    choice = choices[0]
    if not isinstance(choice, Mapping):
        raise InvalidResponseError("OpenAI choice is not an object.")

    message = choice.get("message")
    if not isinstance(message, Mapping):
        raise InvalidResponseError("OpenAI choice missing message object.")

    # Tool-call responses carry a null content.
    text = message.get("content")
    if text is None:
        text = ""
    elif not isinstance(text, str):
        raise InvalidResponseError("OpenAI message content is not a string.")

    usage = payload.get("usage")
    if not isinstance(usage, Mapping):
        usage = {}

    total = usage.get("total_tokens")
    return CompletionResponse(
        text=text,
        usage=TokenUsage.from_counts(
            as_token_count(usage.get("prompt_tokens")),
            as_token_count(usage.get("completion_tokens")),
            as_token_count(total) if total is not None else None,
        ),
        metadata=ResponseMetadata(
            model=optional_str(payload.get("model")) or fallback_model,
            stop_reason=optional_str(choice.get("finish_reason")),
            id=optional_str(payload.get("id")),
        ),
    )
