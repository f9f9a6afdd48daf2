"""Typed settings for the LLM client, read from a JSON file and ``CCIDE_*`` variables."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional
import json
import os

from ccide.llm.factory import SUPPORTED_PROVIDERS
from ccide.llm.types import ProviderConfig

ENV_PREFIX = "CCIDE"

_REQUIRED = object()
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsError(ValueError):
    """Raised when settings cannot be loaded or validated."""


@dataclass(frozen=True)
class LLMSettings:
    provider: str
    model: str
    api_key_env: str = "ANTHROPIC_API_KEY"
    endpoint: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        for name in ("provider", "model", "api_key_env"):
            value = getattr(self, name).strip()
            if not value:
                raise SettingsError(f"llm.{name} cannot be empty.")
            object.__setattr__(self, name, value)

        if self.provider not in SUPPORTED_PROVIDERS:
            raise SettingsError(
                f"llm.provider must be one of: {', '.join(sorted(SUPPORTED_PROVIDERS))}"
            )
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise SettingsError("llm.max_tokens must be > 0.")
        if self.temperature is not None and not 0.0 <= self.temperature <= 2.0:
            raise SettingsError("llm.temperature must be between 0.0 and 2.0.")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise SettingsError("llm.timeout_seconds must be > 0.")

        object.__setattr__(self, "endpoint", (self.endpoint or "").strip() or None)


@dataclass(frozen=True)
class RuntimeSettings:
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        level = self.log_level.strip().upper()
        if level not in _LOG_LEVELS:
            raise SettingsError(f"runtime.log_level must be one of: {', '.join(_LOG_LEVELS)}")
        object.__setattr__(self, "log_level", level)


@dataclass(frozen=True)
class AppSettings:
    llm: LLMSettings
    runtime: RuntimeSettings


class _SettingsSource:
    """Looks settings up in the environment first, then the config file."""

    def __init__(self, config: Mapping[str, Any], environ: Mapping[str, str]) -> None:
        self._config = config
        self._environ = environ

    def get(
        self,
        section: str,
        key: str,
        parse: Callable[[Any], Any],
        default: Any = _REQUIRED,
    ) -> Any:
        env_key = f"{ENV_PREFIX}_{section}_{key}".upper()
        if self._environ.get(env_key):
            raw, origin = self._environ[env_key], env_key
        elif key in self._section(section):
            raw, origin = self._section(section)[key], f"{section}.{key} in config"
        elif default is not _REQUIRED:
            return default
        else:
            raise SettingsError(
                f"Missing required setting '{section}.{key}'. "
                f"Provide it in config or via '{env_key}'."
            )

        try:
            return parse(raw)
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"Invalid value for {section}.{key} from {origin}: {raw!r}") from exc

    def _section(self, name: str) -> Mapping[str, Any]:
        section = self._config.get(name, {})
        if not isinstance(section, Mapping):
            raise SettingsError(f"Config section '{name}' must be an object.")
        return section


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppSettings:
    """Load validated settings; environment variables win over file values."""

    source = _SettingsSource(
        _read_config_file(config_path),
        os.environ if environ is None else environ,
    )
    return AppSettings(
        llm=LLMSettings(
            provider=source.get("llm", "provider", _text, "anthropic"),
            model=source.get("llm", "model", _text),
            api_key_env=source.get("llm", "api_key_env", _text, "ANTHROPIC_API_KEY"),
            endpoint=source.get("llm", "endpoint", _optional(_text), None),
            max_tokens=source.get("llm", "max_tokens", _optional(_integer), None),
            temperature=source.get("llm", "temperature", _optional(_number), None),
            timeout_seconds=source.get("llm", "timeout_seconds", _optional(_number), None),
        ),
        runtime=RuntimeSettings(
            log_level=source.get("runtime", "log_level", _text, "INFO"),
        ),
    )


def resolve_env_secret(env_name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Read the secret held in the environment variable named ``env_name``."""

    value = (os.environ if environ is None else environ).get(env_name)
    if value is None:
        raise SettingsError(f"Required secret environment variable '{env_name}' is not set.")
    if not value.strip():
        raise SettingsError(f"Secret environment variable '{env_name}' cannot be empty.")
    return value


def provider_config_from_settings(
    settings: AppSettings,
    environ: Optional[Mapping[str, str]] = None,
) -> ProviderConfig:
    llm = settings.llm
    return ProviderConfig(
        provider=llm.provider,
        model=llm.model,
        api_key=resolve_env_secret(llm.api_key_env, environ),
        endpoint=llm.endpoint,
        max_tokens=llm.max_tokens,
        temperature=llm.temperature,
    )


def settings_summary(settings: AppSettings) -> dict:
    """Settings as plain data; secrets appear only as the variable names holding them."""

    return {"llm": asdict(settings.llm), "runtime": asdict(settings.runtime)}


def _read_config_file(config_path: Optional[Path]) -> Mapping[str, Any]:
    if config_path is None:
        return {}

    path = config_path.expanduser()
    if not path.is_file():
        raise SettingsError(f"Config file does not exist: {path}")

    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Config file is not valid JSON: {path}") from exc

    if not isinstance(loaded, dict):
        raise SettingsError("Config root must be an object.")
    return loaded


def _optional(parse: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def parse_optional(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return parse(value)

    return parse_optional


def _text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TypeError("expected a non-empty string")
    return value.strip()


def _integer(value: Any) -> int:
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError("expected an integer")
    return int(value.strip() if isinstance(value, str) else value)


def _number(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("expected a number")
    return float(value.strip() if isinstance(value, str) else value)
