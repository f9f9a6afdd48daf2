from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import InvalidModelConfigError
from .types import ProviderConfig

DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-5-20250929",
    "claude": "claude-sonnet-4-5-20250929",
    "openai": "gpt-4",
}


def provider_config_from_mapping(payload: Mapping[str, Any]) -> ProviderConfig:
    """Build a ``ProviderConfig`` from a stored credential record.

    Records use the credential store's camelCase keys (``apiKey``,
    ``maxTokens``); snake_case spellings are accepted too.
    """

    provider = _required_non_empty_str(payload, "provider")
    model = _optional_str(payload, "model") or DEFAULT_MODELS.get(provider)
    if model is None:
        raise InvalidModelConfigError("'model' must be a non-empty string.")

    return ProviderConfig(
        provider=provider,
        model=model,
        api_key=_required_non_empty_str(payload, "apiKey", "api_key"),
        endpoint=_optional_str(payload, "endpoint", "base_url"),
        max_tokens=_optional_positive_int(payload, "maxTokens", "max_tokens"),
        temperature=_optional_float(payload, "temperature"),
    )


def _lookup(payload: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _required_non_empty_str(payload: Mapping[str, Any], *keys: str) -> str:
    value = _lookup(payload, keys)
    if not isinstance(value, str) or not value.strip():
        raise InvalidModelConfigError(f"'{keys[0]}' must be a non-empty string.")
    return value.strip()


def _optional_positive_int(payload: Mapping[str, Any], *keys: str) -> int | None:
    value = _lookup(payload, keys)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidModelConfigError(f"'{keys[0]}' must be a positive integer.")
    return value


def _optional_float(payload: Mapping[str, Any], *keys: str) -> float | None:
    value = _lookup(payload, keys)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidModelConfigError(f"'{keys[0]}' must be a numeric value.")
    return float(value)


def _optional_str(payload: Mapping[str, Any], *keys: str) -> str | None:
    value = _lookup(payload, keys)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise InvalidModelConfigError(f"'{keys[0]}' must be a string if provided.")
