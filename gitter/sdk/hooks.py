"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

SDK Lifecycle Hook Registry.

Callbacks registered here observe or rewrite what the client sends and
receives. Pass a populated registry to the client (or the builder), or
register on ``client.hooks`` after construction.

Available hooks:
- on_initialize: Fired once when the client finishes setup
- on_before_request: Fired before every outbound request (REST and stream)
- on_after_response: Fired after every REST response, success or failure
- on_stream_event: Fired for every value decoded from a stream
- on_error: Fired on any SDK error
"""

from __future__ import annotations

from typing import Any, Callable, List

from gitter.logging_config import get_logger
from gitter.sdk.adapters.base import SDKRequest, SDKResponse

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Hook callback type aliases
# ---------------------------------------------------------------------------

InitializeCallback = Callable[..., None]
BeforeRequestCallback = Callable[[SDKRequest], SDKRequest]
AfterResponseCallback = Callable[[SDKRequest, SDKResponse], None]
StreamEventCallback = Callable[[str, Any], None]
ErrorCallback = Callable[[Exception], None]


# ---------------------------------------------------------------------------
# HookRegistry
# ---------------------------------------------------------------------------

class HookRegistry:
    """
    Manages lifecycle hooks for the Gitter SDK.

    Callers register callbacks via the ``on_*`` methods.  The SDK engine
    fires hooks at the appropriate points in the request lifecycle.  Multiple
    callbacks per hook are supported and executed in registration order.
    A failing callback is logged and reported to ``on_error``; it never
    aborts the request that fired it.
    """

    def __init__(self) -> None:
        self._initialize_callbacks: List[InitializeCallback] = []
        self._before_request_callbacks: List[BeforeRequestCallback] = []
        self._after_response_callbacks: List[AfterResponseCallback] = []
        self._stream_event_callbacks: List[StreamEventCallback] = []
        self._error_callbacks: List[ErrorCallback] = []

    # -- Registration methods ------------------------------------------------

    def on_initialize(self, callback: InitializeCallback) -> None:
        """Register a callback fired once when the client finishes setup."""
        self._initialize_callbacks.append(callback)
        logger.debug("Registered on_initialize hook")

    def on_before_request(self, callback: BeforeRequestCallback) -> None:
        """Register a callback fired before every outbound request.

        The callback receives the request and **must** return an
        ``SDKRequest`` (possibly modified).
        """
        self._before_request_callbacks.append(callback)
        logger.debug("Registered on_before_request hook")

    def on_after_response(self, callback: AfterResponseCallback) -> None:
        """Register a callback fired after every REST response."""
        self._after_response_callbacks.append(callback)
        logger.debug("Registered on_after_response hook")

    def on_stream_event(self, callback: StreamEventCallback) -> None:
        """Register a callback fired with ``(path, value)`` per decoded stream value."""
        self._stream_event_callbacks.append(callback)
        logger.debug("Registered on_stream_event hook")

    def on_error(self, callback: ErrorCallback) -> None:
        """Register a callback fired on any SDK error."""
        self._error_callbacks.append(callback)
        logger.debug("Registered on_error hook")

    # -- Firing methods (called by the SDK engine) ---------------------------

    def fire_initialize(self, **kwargs: Any) -> None:
        """Fire all registered on_initialize callbacks."""
        for cb in self._initialize_callbacks:
            try:
                cb(**kwargs)
            except Exception as exc:
                logger.error(f"on_initialize hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_before_request(self, request: SDKRequest) -> SDKRequest:
        """Fire all on_before_request callbacks in order.

        Each callback receives the (possibly mutated) request from the
        previous callback, forming a pipeline.
        """
        current = request
        for cb in self._before_request_callbacks:
            try:
                current = cb(current)
            except Exception as exc:
                logger.error(f"on_before_request hook error: {exc}", exc_info=True)
                self.fire_error(exc)
        return current

    def fire_after_response(self, request: SDKRequest, response: SDKResponse) -> None:
        """Fire all on_after_response callbacks."""
        for cb in self._after_response_callbacks:
            try:
                cb(request, response)
            except Exception as exc:
                logger.error(f"on_after_response hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_stream_event(self, path: str, value: Any) -> None:
        """Fire all on_stream_event callbacks."""
        for cb in self._stream_event_callbacks:
            try:
                cb(path, value)
            except Exception as exc:
                logger.error(f"on_stream_event hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_error(self, error: Exception) -> None:
        """Fire all on_error callbacks."""
        for cb in self._error_callbacks:
            try:
                cb(error)
            except Exception:
                # Avoid infinite recursion, just log
                logger.error("on_error hook itself raised an exception", exc_info=True)
