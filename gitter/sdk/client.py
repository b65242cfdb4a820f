"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Gitter SDK Client & Builder.

Provides two entry points to initialize the SDK:
    - ``GitterClient(token=...)`` — quick start with sensible defaults
    - ``GitterBuilder().set_token(...).set_hooks(...).build()`` — advanced config
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Union

from gitter.config.endpoint import (
    DEFAULT_STREAM_HOST,
    EndpointConfiguration,
    resolve_endpoint,
    stream_endpoint,
)
from gitter.config.settings import DEFAULT_MAX_STREAM_BUFFER, ClientConfig, GitterConfig
from gitter.exceptions import DecodeError, HttpStatusError, SDKConfigurationError, TransportError
from gitter.logging_config import get_logger, log_http_request
from gitter.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse
from gitter.sdk.adapters.http import HttpAdapter
from gitter.sdk.hooks import HookRegistry
from gitter.sdk.metrics import RateLimitMetrics
from gitter.sdk.stream import EventCallback, StreamErrorCallback, StreamSession

logger = get_logger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


class GitterClient:
    """SDK client for the Gitter API.

    Quick start::

        async with GitterClient(token="abc123") as client:
            rooms = await client.get("/rooms")
            await client.post("/rooms/r1/chatMessages", body={"text": "hi"})

    Streaming::

        session = await client.stream("/rooms/r1/chatMessages", print)
        await session.wait()

    Every call makes exactly one attempt; nothing is retried and no timeout
    is applied by default.

    Args:
        token: Bearer token sent with every request.
        api_endpoint: Full base URL. Overrides host, port, prefix and version.
        host: API host, defaults to ``api.gitter.im``.
        port: API port, defaults to 443 (TLS only on 443).
        prefix: Use the ``/api/<version>`` path form.
        version: API version segment, defaults to ``v1``.
        stream_host: Host of the streaming endpoint.
        adapter: Optional custom transport adapter.
        max_stream_buffer: Accumulation limit per stream session, ``None`` for unbounded.
        hooks: Pre-populated hook registry; a fresh one is created if omitted.
    """

    def __init__(
        self,
        token: Optional[str],
        api_endpoint: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        prefix: bool = False,
        version: Optional[str] = None,
        stream_host: str = DEFAULT_STREAM_HOST,
        adapter: Optional[BaseAdapter] = None,
        max_stream_buffer: Optional[int] = DEFAULT_MAX_STREAM_BUFFER,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        if not token:
            raise SDKConfigurationError("GitterClient requires a token.")

        self._token = token
        self._endpoint = resolve_endpoint(
            api_endpoint=api_endpoint,
            host=host,
            port=port,
            prefix=prefix,
            version=version,
        )
        self._stream_endpoint = stream_endpoint(self._endpoint.path_prefix, host=stream_host)
        self._max_stream_buffer = max_stream_buffer

        self._hooks = hooks if hooks is not None else HookRegistry()
        self._adapter = adapter or HttpAdapter()
        self._sessions: List[StreamSession] = []

        self.metrics = RateLimitMetrics()
        # Set by callers once they have resolved the authenticated user.
        self.current_user: Optional[Any] = None

        logger.info(
            "GitterClient initialized",
            base_url=self._endpoint.base_url,
            path_prefix=self._endpoint.path_prefix,
        )

    @classmethod
    def from_config(
        cls,
        config: Union[GitterConfig, ClientConfig],
        adapter: Optional[BaseAdapter] = None,
    ) -> GitterClient:
        """Build a client from a loaded configuration.

        Raises:
            SDKConfigurationError: If the configuration carries no token.
        """
        client_config = config.client if isinstance(config, GitterConfig) else config
        return cls(
            token=client_config.token,
            api_endpoint=client_config.api_endpoint or None,
            host=client_config.host or None,
            port=client_config.port,
            prefix=client_config.prefix,
            version=client_config.version or None,
            stream_host=client_config.stream_host or DEFAULT_STREAM_HOST,
            adapter=adapter,
            max_stream_buffer=client_config.max_stream_buffer,
        )

    # -- Endpoint and rate-limit accessors ---------------------------------

    @property
    def endpoint(self) -> EndpointConfiguration:
        return self._endpoint

    @property
    def stream_endpoint(self) -> EndpointConfiguration:
        return self._stream_endpoint

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def rate_limit(self) -> Optional[int]:
        """``x-ratelimit-limit`` of the most recently completed response."""
        return self.metrics.rate_limit

    @property
    def remaining(self) -> Optional[int]:
        """``x-ratelimit-remaining`` of the most recently completed response."""
        return self.metrics.remaining

    @property
    def reset(self) -> Optional[int]:
        """``x-ratelimit-reset`` of the most recently completed response."""
        return self.metrics.reset

    # -- Request executor --------------------------------------------------

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """Send one request and return its decoded JSON body.

        Args:
            method: One of GET, POST, PUT, PATCH, DELETE.
            path: Path relative to the endpoint prefix (e.g. ``"/rooms"``).
            query: Optional query mapping, bracket-encoded.
            body: Optional JSON-serializable payload. ``None`` sends no body.

        Returns:
            The parsed JSON value.

        Raises:
            ValueError: If ``method`` is not supported.
            TransportError: If no response was obtained.
            HttpStatusError: If the status is outside [200, 400).
            DecodeError: If a successful response is not valid JSON.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method '{method}', expected one of {SUPPORTED_METHODS}")

        headers = self._auth_headers()
        if body is not None:
            headers["Content-Type"] = "application/json"

        request = SDKRequest(
            method=method,
            url=self._endpoint.url_for(path, query),
            headers=headers,
            body=body,
        )
        request = self._hooks.fire_before_request(request)
        request_path = self._endpoint.path_for(path, query)
        logger.debug("http rpc", method=method, path=request_path, has_body=request.has_body)

        try:
            response = await self._adapter.send(request)
        except TransportError as exc:
            log_http_request(logger, method, request_path, error=str(exc))
            self._hooks.fire_error(exc)
            raise

        self.metrics.update_from_headers(response.headers)
        self._hooks.fire_after_response(request, response)
        log_http_request(
            logger, method, request_path,
            status_code=response.status_code,
            duration_ms=response.elapsed_ms,
        )

        try:
            return self._decode(response)
        except HttpStatusError as exc:
            logger.debug(f"http rpc error: {exc}")
            self._hooks.fire_error(exc)
            raise

    @staticmethod
    def _decode(response: SDKResponse) -> Any:
        if not 200 <= response.status_code < 400:
            raise HttpStatusError(response.status_code, response.text)
        try:
            return json.loads(response.text)
        except ValueError:
            raise DecodeError(response.status_code) from None

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None, body: Any = None) -> Any:
        """``request("GET", ...)``."""
        return await self.request("GET", path, query=query, body=body)

    async def post(self, path: str, query: Optional[Mapping[str, Any]] = None, body: Any = None) -> Any:
        """``request("POST", ...)``."""
        return await self.request("POST", path, query=query, body=body)

    async def put(self, path: str, query: Optional[Mapping[str, Any]] = None, body: Any = None) -> Any:
        """``request("PUT", ...)``."""
        return await self.request("PUT", path, query=query, body=body)

    async def patch(self, path: str, query: Optional[Mapping[str, Any]] = None, body: Any = None) -> Any:
        """``request("PATCH", ...)``."""
        return await self.request("PATCH", path, query=query, body=body)

    async def delete(self, path: str, query: Optional[Mapping[str, Any]] = None, body: Any = None) -> Any:
        """``request("DELETE", ...)``."""
        return await self.request("DELETE", path, query=query, body=body)

    # -- Streaming ---------------------------------------------------------

    async def stream(
        self,
        path: str,
        on_event: EventCallback,
        on_error: Optional[StreamErrorCallback] = None,
    ) -> StreamSession:
        """Open a streaming session and start delivering events.

        ``on_event`` is invoked once per decoded JSON value, in arrival
        order. Connection failures end the session and go to ``on_error``
        (and the ``on_error`` hooks); the session is not reconnected.

        Returns:
            The running :class:`StreamSession`, usable to ``wait()`` or ``close()``.
        """
        headers = self._auth_headers()
        headers["Content-Type"] = "application/json"

        request = SDKRequest(
            method="GET",
            url=self._stream_endpoint.url_for(path),
            headers=headers,
        )
        request = self._hooks.fire_before_request(request)
        logger.debug("stream", method="GET", path=self._stream_endpoint.path_for(path))

        session = StreamSession(
            adapter=self._adapter,
            request=request,
            on_event=on_event,
            on_error=on_error,
            hooks=self._hooks,
            max_buffer_size=self._max_stream_buffer,
        )
        self._sessions = [s for s in self._sessions if s.is_running]
        self._sessions.append(session)
        return session.start()

    # -- Lifecycle ---------------------------------------------------------

    async def aclose(self) -> None:
        """Close open stream sessions and the transport."""
        for session in self._sessions:
            await session.close()
        self._sessions.clear()
        await self._adapter.aclose()
        logger.info("GitterClient closed")

    def close(self) -> None:
        """Release transport resources without awaiting open connections.

        Running stream sessions are cancelled but not awaited; use
        :meth:`aclose` to wait for them to finish.
        """
        for session in self._sessions:
            session.cancel()
        self._sessions.clear()
        self._adapter.close()
        logger.info("GitterClient closed")

    async def __aenter__(self) -> GitterClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


# ---------------------------------------------------------------------------
# GitterBuilder (advanced initialization)
# ---------------------------------------------------------------------------

class GitterBuilder:
    """Fluent builder for advanced GitterClient configuration.

    Example::

        hooks = HookRegistry()
        hooks.on_before_request(add_user_agent)

        client = (
            GitterBuilder()
            .set_token("abc123")
            .set_api_endpoint("https://gitter.example.com/api/v1")
            .set_hooks(hooks)
            .build()
        )
    """

    def __init__(self) -> None:
        self._token: Optional[str] = None
        self._api_endpoint: Optional[str] = None
        self._host: Optional[str] = None
        self._port: Optional[int] = None
        self._prefix: bool = False
        self._version: Optional[str] = None
        self._stream_host: str = DEFAULT_STREAM_HOST
        self._max_stream_buffer: Optional[int] = DEFAULT_MAX_STREAM_BUFFER
        self._adapter: Optional[BaseAdapter] = None
        self._hooks: Optional[HookRegistry] = None

    def set_token(self, token: str) -> GitterBuilder:
        """Set the bearer token."""
        self._token = token
        return self

    def set_api_endpoint(self, url: str) -> GitterBuilder:
        """Set a full base URL (overrides host, port, prefix and version)."""
        self._api_endpoint = url
        return self

    def set_host(self, host: str) -> GitterBuilder:
        self._host = host
        return self

    def set_port(self, port: int) -> GitterBuilder:
        self._port = port
        return self

    def set_prefix(self, prefix: bool = True) -> GitterBuilder:
        self._prefix = prefix
        return self

    def set_version(self, version: str) -> GitterBuilder:
        self._version = version
        return self

    def set_stream_host(self, host: str) -> GitterBuilder:
        self._stream_host = host
        return self

    def set_max_stream_buffer(self, limit: Optional[int]) -> GitterBuilder:
        """Set the per-session accumulation limit; ``None`` disables it."""
        self._max_stream_buffer = limit
        return self

    def set_transport(self, adapter: BaseAdapter) -> GitterBuilder:
        """Override the default HTTP adapter with a custom transport."""
        self._adapter = adapter
        return self

    def set_hooks(self, hooks: HookRegistry) -> GitterBuilder:
        """Use a pre-populated hook registry instead of an empty one."""
        self._hooks = hooks
        return self

    def build(self) -> GitterClient:
        """Construct the GitterClient and fire its initialize hooks.

        Raises:
            SDKConfigurationError: If no token was set.
        """
        if not self._token:
            raise SDKConfigurationError("GitterBuilder.build() requires set_token().")

        client = GitterClient(
            token=self._token,
            api_endpoint=self._api_endpoint,
            host=self._host,
            port=self._port,
            prefix=self._prefix,
            version=self._version,
            stream_host=self._stream_host,
            adapter=self._adapter,
            max_stream_buffer=self._max_stream_buffer,
            hooks=self._hooks,
        )
        client.hooks.fire_initialize()

        logger.info("GitterBuilder: built client", base_url=client.endpoint.base_url)
        return client
