"""LLM client abstractions and provider clients."""

from .anthropic_client import AnthropicClient
from .base import LLMClient
from .config import provider_config_from_mapping
from .errors import (
    InvalidModelConfigError,
    InvalidRequestError,
    InvalidResponseError,
    LLMError,
    NetworkError,
    NotInitializedError,
    ProviderHttpError,
    StreamDecodeError,
    StreamUnavailableError,
    UnsupportedProviderError,
)
from .factory import SUPPORTED_PROVIDERS, create_service
from .openai_client import OpenAIClient
from .registry import (
    LLMServiceRegistry,
    get_llm_service,
    initialize_llm_service,
    reset_llm_service,
)
from .service import send_request, stream_request
from .streaming import MalformedEventPolicy, decode_event_stream
from .transport import AiohttpTransport
from .types import (
    ChatMessage,
    CompletionRequest,
    CompletionResponse,
    ProviderConfig,
    ResponseMetadata,
    StreamDelta,
    TokenUsage,
)

__all__ = [
    "AiohttpTransport",
    "AnthropicClient",
    "ChatMessage",
    "CompletionRequest",
    "CompletionResponse",
    "InvalidModelConfigError",
    "InvalidRequestError",
    "InvalidResponseError",
    "LLMClient",
    "LLMError",
    "LLMServiceRegistry",
    "MalformedEventPolicy",
    "NetworkError",
    "NotInitializedError",
    "OpenAIClient",
    "ProviderConfig",
    "ProviderHttpError",
    "ResponseMetadata",
    "SUPPORTED_PROVIDERS",
    "StreamDecodeError",
    "StreamDelta",
    "StreamUnavailableError",
    "TokenUsage",
    "UnsupportedProviderError",
    "create_service",
    "decode_event_stream",
    "get_llm_service",
    "initialize_llm_service",
    "provider_config_from_mapping",
    "reset_llm_service",
    "send_request",
    "stream_request",
]
