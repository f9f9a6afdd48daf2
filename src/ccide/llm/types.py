from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from .errors import InvalidModelConfigError, InvalidRequestError

DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7

MESSAGE_ROLES = ("user", "assistant")

# Text fragment emitted by a streaming completion.
StreamDelta = str


@dataclass(frozen=True)
class ProviderConfig:
    provider: str
    model: str
    api_key: str = field(repr=False)
    endpoint: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.provider, str) or not self.provider.strip():
            raise InvalidModelConfigError("provider cannot be empty.")

        if not isinstance(self.model, str) or not self.model.strip():
            raise InvalidModelConfigError("model cannot be empty.")

        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise InvalidModelConfigError("api_key cannot be empty.")

        endpoint = self.endpoint.strip() if self.endpoint else None
        if endpoint == "":
            endpoint = None

        if self.max_tokens is not None:
            if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int):
                raise InvalidModelConfigError("max_tokens must be an integer.")
            if self.max_tokens <= 0:
                raise InvalidModelConfigError("max_tokens must be > 0.")

        temperature = self.temperature
        if temperature is not None:
            if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
                raise InvalidModelConfigError("temperature must be numeric.")
            if not 0.0 <= temperature <= 2.0:
                raise InvalidModelConfigError("temperature must be between 0.0 and 2.0.")
            temperature = float(temperature)

        object.__setattr__(self, "model", self.model.strip())
        object.__setattr__(self, "endpoint", endpoint)
        object.__setattr__(self, "temperature", temperature)


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def __post_init__(self) -> None:
        if self.role not in MESSAGE_ROLES:
            raise InvalidRequestError(
                f"message role must be one of {', '.join(MESSAGE_ROLES)}; got {self.role!r}."
            )
        if not isinstance(self.content, str):
            raise InvalidRequestError("message content must be a string.")

    def as_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class CompletionRequest:
    messages: Sequence[ChatMessage]
    system_prompt: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        messages = tuple(
            message if isinstance(message, ChatMessage) else ChatMessage(**message)
            for message in self.messages
        )
        if not messages:
            raise InvalidRequestError("messages must contain at least one entry.")

        if self.max_tokens is not None:
            if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int):
                raise InvalidRequestError("max_tokens must be an integer.")
            if self.max_tokens <= 0:
                raise InvalidRequestError("max_tokens must be a positive integer.")

        temperature = self.temperature
        if temperature is not None:
            if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
                raise InvalidRequestError("temperature must be numeric.")
            if not 0.0 <= temperature <= 2.0:
                raise InvalidRequestError("temperature must be between 0.0 and 2.0.")
            temperature = float(temperature)

        object.__setattr__(self, "messages", messages)
        object.__setattr__(self, "temperature", temperature)
        object.__setattr__(self, "options", dict(self.options))

    @classmethod
    def from_prompt(cls, prompt: str, **kwargs: Any) -> "CompletionRequest":
        return cls(messages=(ChatMessage(role="user", content=prompt),), **kwargs)


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(
        cls,
        prompt_tokens: int,
        completion_tokens: int,
        total_tokens: Optional[int] = None,
    ) -> "TokenUsage":
        if total_tokens is None:
            total_tokens = prompt_tokens + completion_tokens
        return cls(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
        )


@dataclass(frozen=True)
class ResponseMetadata:
    model: str
    stop_reason: str = ""
    id: str = ""


@dataclass(frozen=True)
class CompletionResponse:
    text: str
    usage: TokenUsage
    metadata: ResponseMetadata
