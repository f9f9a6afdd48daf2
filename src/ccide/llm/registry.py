"""Owner of the application's active LLM client."""

from __future__ import annotations

from typing import Callable, Optional
import logging

from .base import LLMClient
from .errors import NotInitializedError
from .factory import create_service
from .types import ProviderConfig

NOT_INITIALIZED_MESSAGE = "LLM service not initialized. Call initialize_llm_service() first."


class LLMServiceRegistry:
    """Holds at most one client with an explicit initialize/get/reset lifecycle.

    Components that can take a client by injection should do so; the registry
    exists for callers that need the one instance shared by the application.
    """

    def __init__(
        self,
        factory: Callable[[ProviderConfig], LLMClient] = create_service,
        logger: logging.Logger | None = None,
    ) -> None:
        self._factory = factory
        self._client: Optional[LLMClient] = None
        self._logger = logger or logging.getLogger("ccide.llm.registry")

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    def initialize(self, config: ProviderConfig) -> LLMClient:
        # The previous client is dropped as-is; clients hold no open resources.
        self._client = self._factory(config)
        self._logger.info(
            "llm_service_initialized provider=%s model=%s",
            config.provider,
            config.model,
        )
        return self._client

    def get(self) -> LLMClient:
        if self._client is None:
            raise NotInitializedError(NOT_INITIALIZED_MESSAGE)
        return self._client

    def reset(self) -> None:
        self._client = None


_default_registry = LLMServiceRegistry()


def initialize_llm_service(config: ProviderConfig) -> LLMClient:
    return _default_registry.initialize(config)


def get_llm_service() -> LLMClient:
    return _default_registry.get()


def reset_llm_service() -> None:
    _default_registry.reset()
