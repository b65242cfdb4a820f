"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

HTTP/REST transport adapter (default).
"""

from __future__ import annotations

import json
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from gitter.exceptions import TransportError
from gitter.logging_config import get_logger
from gitter.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse, SDKStreamResponse

logger = get_logger(__name__)


class HttpAdapter(BaseAdapter):
    """Default HTTP transport using ``httpx.AsyncClient``.

    Every call is a single attempt. There is no retry, and by default no
    timeout: a hung connection hangs the call.

    Any ``httpx`` failure, including undecodable bodies, surfaces as
    :class:`TransportError`.

    Args:
        timeout: Optional timeout in seconds applied to connect and reads.
        transport: Optional ``httpx`` transport (e.g. ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._connected = False

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            )
            self._connected = True
        return self._client

    @staticmethod
    def _content(request: SDKRequest) -> Optional[bytes]:
        if not request.has_body:
            return None
        return json.dumps(request.body).encode("utf-8")

    async def send(self, request: SDKRequest) -> SDKResponse:
        client = self._ensure_client()
        start = time.monotonic()

        try:
            resp = await client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                content=self._content(request),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e
        elapsed = (time.monotonic() - start) * 1000

        return SDKResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=resp.text,
            elapsed_ms=round(elapsed, 2),
        )

    @asynccontextmanager
    async def stream(self, request: SDKRequest) -> AsyncIterator[SDKStreamResponse]:
        client = self._ensure_client()
        try:
            async with client.stream(
                request.method,
                request.url,
                headers=request.headers,
                content=self._content(request),
            ) as resp:
                yield SDKStreamResponse(
                    status_code=resp.status_code,
                    headers=dict(resp.headers),
                    chunks=self._text_chunks(resp),
                )
        except httpx.HTTPError as e:
            raise TransportError(f"stream {request.url} failed: {e}") from e

    @staticmethod
    async def _text_chunks(resp: httpx.Response) -> AsyncIterator[str]:
        async for chunk in resp.aiter_text():
            if chunk:
                yield chunk

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
        self._client = None
        self._connected = False

    def close(self) -> None:
        if self._client:
            # httpx.AsyncClient.aclose() is async; for sync teardown we
            # just drop the reference and let the GC handle the sockets.
            self._client = None
            self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
