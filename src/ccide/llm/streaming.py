"""Incremental decoder for ``data: <json>`` event streams."""

from __future__ import annotations

from enum import Enum
from typing import Any, AsyncIterator, Callable, Mapping, Optional
import codecs
import json
import logging

from .errors import StreamDecodeError, StreamUnavailableError
from .transport import ChunkReader

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"

TextExtractor = Callable[[Any], Optional[str]]


class MalformedEventPolicy(str, Enum):
    SKIP = "skip"
    RAISE = "raise"


async def decode_event_stream(
    reader: Optional[ChunkReader],
    extract_text: TextExtractor,
    *,
    malformed: MalformedEventPolicy = MalformedEventPolicy.SKIP,
    logger: logging.Logger | None = None,
) -> AsyncIterator[str]:
    """Yield text deltas from a newline-delimited ``data:`` event stream.

    Chunks may split events (or multi-byte characters) anywhere; incomplete
    trailing lines are buffered until the next read. ``data: [DONE]`` ends the
    stream. Bytes left without a trailing newline at end of stream are dropped.

    Undecodable JSON payloads are skipped by default so that one bad event
    does not end an otherwise healthy stream. Pass
    ``malformed=MalformedEventPolicy.RAISE`` to surface them as
    :class:`StreamDecodeError` instead.
    """

    log = logger or logging.getLogger("ccide.llm.streaming")
    if reader is None:
        raise StreamUnavailableError("No response body reader available")

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""
    skipped = 0

    while True:
        chunk = await reader.read()
        if not chunk:
            break

        buffer += decoder.decode(chunk)
        *lines, buffer = buffer.split("\n")

        for line in lines:
            payload = _data_payload(line)
            if payload is None:
                continue

            if payload == DONE_SENTINEL:
                log.debug("llm_stream_done skipped_events=%s", skipped)
                return

            try:
                event = json.loads(payload)
            except json.JSONDecodeError as exc:
                if malformed is MalformedEventPolicy.RAISE:
                    raise StreamDecodeError(
                        f"Stream event is not valid JSON: {exc.msg}", payload=payload
                    ) from exc
                skipped += 1
                log.debug("llm_stream_event_skipped payload=%.200s", payload)
                continue

            text = extract_text(event)
            if text:
                yield text

    buffer += decoder.decode(b"", final=True)
    if buffer.strip():
        log.debug("llm_stream_trailing_bytes_discarded length=%s", len(buffer))
    log.debug("llm_stream_eof skipped_events=%s", skipped)


def _data_payload(line: str) -> Optional[str]:
    line = line.rstrip("\r")
    if not line.startswith(DATA_PREFIX):
        return None
    payload = line[len(DATA_PREFIX):]
    if payload.startswith(" "):
        payload = payload[1:]
    return payload


def extract_anthropic_text(event: Any) -> Optional[str]:
    if not isinstance(event, Mapping) or event.get("type") != "content_block_delta":
        return None
    delta = event.get("delta")
    if not isinstance(delta, Mapping):
        return None
    text = delta.get("text")
    return text if isinstance(text, str) else None


def extract_openai_text(event: Any) -> Optional[str]:
    if not isinstance(event, Mapping):
        return None
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    choice = choices[0]
    if not isinstance(choice, Mapping):
        return None
    delta = choice.get("delta")
    if not isinstance(delta, Mapping):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None
