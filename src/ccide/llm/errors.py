from __future__ import annotations


class LLMError(Exception):
    """Base error for LLM provider failures."""


class UnsupportedProviderError(LLMError):
    """Raised when a provider is not supported by the factory."""


class InvalidModelConfigError(LLMError):
    """Raised when provider configuration is invalid."""


class InvalidRequestError(LLMError):
    """Raised when a completion request is malformed."""


class ProviderHttpError(LLMError):
    """Raised when a provider answers with a non-success HTTP status."""

    def __init__(self, message: str, *, status: int, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class NetworkError(LLMError):
    """Raised when the HTTP transport itself fails."""


class StreamUnavailableError(LLMError):
    """Raised when a streaming response carries no readable body."""


class StreamDecodeError(LLMError):
    """Raised for an undecodable stream event when skipping is disabled."""

    def __init__(self, message: str, *, payload: str) -> None:
        super().__init__(message)
        self.payload = payload


class InvalidResponseError(LLMError):
    """Raised when a successful response body has an unexpected shape."""


class NotInitializedError(LLMError):
    """Raised when the LLM service registry is used before initialization."""
