"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Mock transport adapter for local testing.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import urlsplit

from gitter.exceptions import TransportError
from gitter.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse, SDKStreamResponse

# A scripted stream item is either a text chunk or an exception raised at that point.
StreamScript = Sequence[Union[str, Exception]]


class MockAdapter(BaseAdapter):
    """In-memory mock adapter for unit tests.

    Requests are matched on ``(method, path)``, where ``path`` is the URL
    path plus its query string, if any.

    Args:
        responses: Mapping from ``(method, path)`` tuples to
            ``SDKResponse`` instances, or to an exception to raise.
        streams: Mapping from stream path to the scripted chunks it
            delivers before the body ends.

    Example::

        adapter = MockAdapter(
            responses={("GET", "/v1/user"): SDKResponse(status_code=200, text="[]")},
            streams={"/v1/rooms/r1/chatMessages": ['{"a":', '1}', " \\n"]},
        )
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], Union[SDKResponse, Exception]]] = None,
        streams: Optional[Dict[str, StreamScript]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], Union[SDKResponse, Exception]] = responses or {}
        self._streams: Dict[str, StreamScript] = streams or {}
        self._sent: List[SDKRequest] = []

    @staticmethod
    def _path(url: str) -> str:
        parts = urlsplit(url)
        return f"{parts.path}?{parts.query}" if parts.query else parts.path

    async def send(self, request: SDKRequest) -> SDKResponse:
        self._sent.append(request)
        key = (request.method.upper(), self._path(request.url))
        if key in self._responses:
            outcome = self._responses[key]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return SDKResponse(
            status_code=404,
            headers={},
            text='{"error": "not mocked"}',
            elapsed_ms=0.0,
        )

    @asynccontextmanager
    async def stream(self, request: SDKRequest) -> AsyncIterator[SDKStreamResponse]:
        self._sent.append(request)
        path = self._path(request.url)
        if path not in self._streams:
            yield SDKStreamResponse(
                status_code=404,
                headers={},
                chunks=_scripted(['{"error": "not mocked"}']),
            )
            return
        yield SDKStreamResponse(status_code=200, headers={}, chunks=_scripted(self._streams[path]))

    def close(self) -> None:
        self._responses.clear()
        self._streams.clear()
        self._sent.clear()

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def sent_requests(self) -> List[SDKRequest]:
        """All requests that have been sent through this adapter."""
        return list(self._sent)


async def _scripted(script: StreamScript) -> AsyncIterator[str]:
    for item in script:
        if isinstance(item, TransportError):
            raise item
        if isinstance(item, Exception):
            raise TransportError(str(item)) from item
        yield item
