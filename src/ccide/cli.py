"""CLI for sending a prompt through the configured LLM provider."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Optional, Sequence, TextIO
import argparse
import asyncio
import json
import logging
import sys

from ccide import __version__
from ccide.config.settings import (
    AppSettings,
    SettingsError,
    load_settings,
    provider_config_from_settings,
    settings_summary,
)
from ccide.llm import (
    AiohttpTransport,
    CompletionRequest,
    LLMError,
    LLMServiceRegistry,
    create_service,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ccide LLM client")
    parser.add_argument("prompt", nargs="?", help="User prompt to send.")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to JSON config file. Environment variables override file values.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate settings and print a redacted summary.",
    )
    parser.add_argument("--system", help="System prompt.")
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Print text deltas as they arrive.",
    )
    parser.add_argument("--max-tokens", type=int, help="Override llm.max_tokens.")
    parser.add_argument("--temperature", type=float, help="Override llm.temperature.")
    parser.add_argument(
        "--version",
        action="version",
        version=f"ccide {__version__}",
    )
    return parser


def configure_logging(log_level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(config_path=args.config)
    except SettingsError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.check:
        print(json.dumps(settings_summary(settings), indent=2, sort_keys=True))
        return 0

    if not args.prompt:
        parser.error("a prompt is required unless --check is given")

    configure_logging(settings.runtime.log_level)

    try:
        registry = build_registry(settings)
        request = CompletionRequest.from_prompt(
            args.prompt,
            system_prompt=args.system,
            max_tokens=args.max_tokens,
            temperature=args.temperature,
        )
    except (SettingsError, LLMError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    try:
        asyncio.run(run_prompt(registry, request, stream=args.stream))
    except LLMError as exc:
        print(f"LLM error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    return 0


def build_registry(settings: AppSettings) -> LLMServiceRegistry:
    transport = AiohttpTransport(timeout_seconds=settings.llm.timeout_seconds)
    registry = LLMServiceRegistry(factory=partial(create_service, transport=transport))
    registry.initialize(provider_config_from_settings(settings))
    return registry


async def run_prompt(
    registry: LLMServiceRegistry,
    request: CompletionRequest,
    *,
    stream: bool,
    out: Optional[TextIO] = None,
) -> None:
    if out is None:
        out = sys.stdout
    client = registry.get()
    if stream:
        async for delta in client.stream_request(request):
            out.write(delta)
            out.flush()
        out.write("\n")
        return

    response = await client.send_request(request)
    out.write(response.text + "\n")
