"""Request execution shared by the provider clients."""

from __future__ import annotations

from contextlib import aclosing
from typing import Any, AsyncGenerator, Mapping
import logging

from .errors import InvalidResponseError, ProviderHttpError
from .streaming import MalformedEventPolicy, TextExtractor, decode_event_stream
from .transport import HttpResponse, HttpTransport

_ERROR_BODY_LOG_LIMIT = 500


async def post_json(
    transport: HttpTransport,
    *,
    provider_name: str,
    url: str,
    headers: Mapping[str, str],
    payload: Mapping[str, Any],
    logger: logging.Logger,
) -> Mapping[str, Any]:
    async with transport.post(url, headers=headers, payload=payload) as response:
        await _raise_for_status(response, provider_name=provider_name, logger=logger)
        try:
            parsed = await response.json()
        except ValueError as exc:
            raise InvalidResponseError(f"{provider_name} response was not valid JSON.") from exc

    if not isinstance(parsed, Mapping):
        raise InvalidResponseError(f"{provider_name} response has invalid structure.")
    return parsed


async def stream_text(
    transport: HttpTransport,
    *,
    provider_name: str,
    url: str,
    headers: Mapping[str, str],
    payload: Mapping[str, Any],
    extract_text: TextExtractor,
    malformed: MalformedEventPolicy,
    logger: logging.Logger,
) -> AsyncGenerator[str, None]:
    # Closing this generator early leaves the transport context and aborts
    # the underlying response.
    deltas = 0
    async with transport.post(url, headers=headers, payload=payload) as response:
        await _raise_for_status(response, provider_name=provider_name, logger=logger)
        events = decode_event_stream(
            response.body_reader(),
            extract_text,
            malformed=malformed,
        )
        async with aclosing(events):
            async for text in events:
                deltas += 1
                yield text

    logger.info(
        "llm_stream_complete provider=%s deltas=%s",
        provider_name.lower(),
        deltas,
    )


async def _raise_for_status(
    response: HttpResponse,
    *,
    provider_name: str,
    logger: logging.Logger,
) -> None:
    if 200 <= response.status < 300:
        return

    body = await response.text()
    logger.warning(
        "llm_http_error provider=%s status=%s body=%.*s",
        provider_name.lower(),
        response.status,
        _ERROR_BODY_LOG_LIMIT,
        body,
    )
    raise ProviderHttpError(
        f"{provider_name} API error: {response.status}",
        status=response.status,
        body=body,
    )
