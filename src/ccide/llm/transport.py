"""HTTP transport used by the provider clients."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Mapping, Optional, Protocol
import asyncio
import logging

import aiohttp

from .errors import NetworkError


class ChunkReader(Protocol):
    async def read(self) -> bytes:
        """Return the next chunk of body bytes, or ``b""`` at end of stream."""
        ...


class HttpResponse(Protocol):
    status: int

    async def text(self) -> str:
        ...

    async def json(self) -> Any:
        ...

    def body_reader(self) -> Optional[ChunkReader]:
        ...


class HttpTransport(Protocol):
    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
    ) -> AsyncContextManager[HttpResponse]:
        ...


_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class _AiohttpChunkReader:
    def __init__(self, content: aiohttp.StreamReader) -> None:
        self._content = content

    async def read(self) -> bytes:
        try:
            return await self._content.readany()
        except _TRANSPORT_ERRORS as exc:
            raise NetworkError(f"Network error while reading stream: {exc}") from exc


class _AiohttpResponse:
    def __init__(self, response: aiohttp.ClientResponse) -> None:
        self._response = response
        self.status = response.status

    async def text(self) -> str:
        try:
            return await self._response.text(errors="replace")
        except _TRANSPORT_ERRORS as exc:
            raise NetworkError(f"Network error while reading response: {exc}") from exc

    async def json(self) -> Any:
        try:
            return await self._response.json(content_type=None)
        except _TRANSPORT_ERRORS as exc:
            raise NetworkError(f"Network error while reading response: {exc}") from exc

    def body_reader(self) -> Optional[ChunkReader]:
        if self.status == 204 or self._response.content_length == 0:
            return None
        return _AiohttpChunkReader(self._response.content)


class AiohttpTransport:
    """One ``aiohttp`` session per exchange; no timeout unless configured."""

    def __init__(
        self,
        *,
        timeout_seconds: Optional[float] = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._logger = logger or logging.getLogger("ccide.llm.transport")

    @asynccontextmanager
    async def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
    ) -> AsyncIterator[HttpResponse]:
        timeout = aiohttp.ClientTimeout(total=self._timeout_seconds)
        session = aiohttp.ClientSession(timeout=timeout)
        try:
            try:
                response = await session.post(url, headers=dict(headers), json=dict(payload))
            except _TRANSPORT_ERRORS as exc:
                self._logger.warning("llm_transport_failure url=%s error=%s", url, exc)
                raise NetworkError(f"Network error: {exc or exc.__class__.__name__}") from exc

            try:
                yield _AiohttpResponse(response)
            finally:
                # Closing drops the connection, aborting any unread body.
                response.close()
        finally:
            await session.close()
