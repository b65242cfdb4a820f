"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Streaming event decoder and session.

The streaming endpoint answers a single GET with an unbounded body made of
JSON values and heartbeat filler (``" \\n"``). There is no framing besides
JSON's own grammar, so values are recovered by accumulating text and
decoding from the front of the buffer after every chunk.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import re
from typing import Any, Awaitable, Callable, List, Optional, Union

from gitter.config.settings import DEFAULT_MAX_STREAM_BUFFER
from gitter.exceptions import GitterError, HttpStatusError, StreamBufferOverflowError
from gitter.logging_config import get_logger, log_stream_event
from gitter.sdk.adapters.base import BaseAdapter, SDKRequest
from gitter.sdk.hooks import HookRegistry

logger = get_logger(__name__)

HEARTBEAT = " \n"

_LEADING_WHITESPACE = re.compile(r"[ \t\n\r]*")

EventCallback = Callable[[Any], Union[None, Awaitable[None]]]
StreamErrorCallback = Callable[[Exception], Union[None, Awaitable[None]]]


class StreamDecoder:
    """Incremental decoder turning text chunks into JSON values.

    The buffer only ever holds text of a value that has not decoded yet.
    A chunk that is exactly the heartbeat discards the buffer. Every other
    chunk is appended and as many complete values as possible are decoded
    from the front of the buffer, so several values in one chunk each come
    out separately.

    A value that never becomes valid cannot be told apart from one that
    is still arriving; :meth:`check_capacity` bounds how long that can go on.

    Args:
        max_buffer_size: Characters the buffer may hold without yielding a
            value. ``None`` disables the limit.
    """

    def __init__(self, max_buffer_size: Optional[int] = DEFAULT_MAX_STREAM_BUFFER) -> None:
        self._buffer = ""
        self._max_buffer_size = max_buffer_size
        self._decoder = json.JSONDecoder()

    @property
    def buffer(self) -> str:
        return self._buffer

    def reset(self) -> None:
        self._buffer = ""

    def feed(self, chunk: str) -> List[Any]:
        """Consume one chunk and return the values it completed, in order."""
        if chunk == HEARTBEAT:
            self._buffer = ""
            return []

        self._buffer += chunk
        values: List[Any] = []
        while True:
            start = _LEADING_WHITESPACE.match(self._buffer).end()
            if start == len(self._buffer):
                self._buffer = ""
                break
            try:
                value, end = self._decoder.raw_decode(self._buffer, start)
            except json.JSONDecodeError:
                # Incomplete (or malformed) value, wait for more text.
                self._buffer = self._buffer[start:]
                break
            values.append(value)
            self._buffer = self._buffer[end:]
        return values

    def check_capacity(self) -> None:
        """Raise if the pending text has outgrown the configured limit.

        Raises:
            StreamBufferOverflowError: If the buffer exceeds ``max_buffer_size``.
        """
        if self._max_buffer_size is not None and len(self._buffer) > self._max_buffer_size:
            raise StreamBufferOverflowError(len(self._buffer), self._max_buffer_size)


class StreamSession:
    """One open streaming connection and its decoder.

    Chunks are processed one at a time; ``on_event`` for a value returns
    (or its awaitable completes) before the next chunk is read. Failures
    end the session and are reported through ``on_error``, the hook
    registry and the log. Sessions never reconnect.

    Args:
        adapter: Transport used to open the connection.
        request: The prepared GET request.
        on_event: Called once per decoded value; may be a coroutine function.
        on_error: Optional callback for the error that terminated the session.
        hooks: Hook registry of the owning client.
        max_buffer_size: Accumulation limit, see :class:`StreamDecoder`.
    """

    def __init__(
        self,
        adapter: BaseAdapter,
        request: SDKRequest,
        on_event: EventCallback,
        on_error: Optional[StreamErrorCallback] = None,
        hooks: Optional[HookRegistry] = None,
        max_buffer_size: Optional[int] = DEFAULT_MAX_STREAM_BUFFER,
    ) -> None:
        self._adapter = adapter
        self._request = request
        self._on_event = on_event
        self._on_error = on_error
        self._hooks = hooks or HookRegistry()
        self._decoder = StreamDecoder(max_buffer_size=max_buffer_size)
        self._task: Optional[asyncio.Task] = None
        self.error: Optional[Exception] = None
        self.events_received = 0

    @property
    def url(self) -> str:
        return self._request.url

    @property
    def buffer(self) -> str:
        """Text accumulated since the last decoded value."""
        return self._decoder.buffer

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> StreamSession:
        """Schedule the session on the running event loop."""
        if self._task is not None:
            raise RuntimeError("Stream session already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    async def wait(self) -> None:
        """Wait until the body ends, an error terminates the session, or it is closed."""
        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    def cancel(self) -> None:
        """Request cancellation without waiting for the session to end."""
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def close(self) -> None:
        """Close the connection. Safe to call from inside ``on_event``."""
        if self._task is None or self._task.done():
            return
        self._task.cancel()
        if self._task is asyncio.current_task():
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        path = self._request.url
        try:
            async with self._adapter.stream(self._request) as response:
                if not 200 <= response.status_code < 400:
                    body = await response.read_text()
                    raise HttpStatusError(response.status_code, body)

                log_stream_event(logger, path, "opened", status_code=response.status_code)
                async for chunk in response.chunks:
                    await self._process_chunk(path, chunk)
        except asyncio.CancelledError:
            log_stream_event(logger, path, "closed", reason="cancelled",
                             events=self.events_received)
            raise
        except GitterError as exc:
            self.error = exc
            log_stream_event(logger, path, "error", error=str(exc),
                             error_type=type(exc).__name__)
            self._hooks.fire_error(exc)
            if self._on_error is not None:
                try:
                    await _maybe_await(self._on_error(exc))
                except Exception:
                    logger.error(f"Stream error callback failed on {path}", exc_info=True)
            return

        log_stream_event(logger, path, "closed", reason="eof", events=self.events_received)

    async def _process_chunk(self, path: str, chunk: str) -> None:
        if chunk == HEARTBEAT:
            log_stream_event(logger, path, "heartbeat")

        for value in self._decoder.feed(chunk):
            self.events_received += 1
            log_stream_event(logger, path, "event", sequence=self.events_received)
            self._hooks.fire_stream_event(path, value)
            try:
                await _maybe_await(self._on_event(value))
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error(f"Stream event callback failed on {path}: {exc}", exc_info=True)
                self._hooks.fire_error(exc)

        self._decoder.check_capacity()


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result
