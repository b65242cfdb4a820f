"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Gitter SDK — public API surface.

Quick start::

    from gitter.sdk import GitterClient
    client = GitterClient(token="abc123")

Advanced::

    from gitter.sdk import GitterBuilder
    client = GitterBuilder().set_token("abc123").set_hooks(hooks).build()
"""

from gitter.sdk.client import GitterClient, GitterBuilder, SUPPORTED_METHODS
from gitter.sdk.hooks import HookRegistry
from gitter.sdk.metrics import RateLimitMetrics
from gitter.sdk.query import encode_query
from gitter.sdk.stream import HEARTBEAT, StreamDecoder, StreamSession
from gitter.sdk.adapters import (
    BaseAdapter,
    HttpAdapter,
    MockAdapter,
    SDKRequest,
    SDKResponse,
    SDKStreamResponse,
)
from gitter.exceptions import (
    DecodeError,
    HttpStatusError,
    SDKConfigurationError,
    StreamBufferOverflowError,
    TransportError,
)

__all__ = [
    # client
    "GitterClient",
    "GitterBuilder",
    "SUPPORTED_METHODS",
    # streaming
    "HEARTBEAT",
    "StreamDecoder",
    "StreamSession",
    # infra
    "HookRegistry",
    "RateLimitMetrics",
    "encode_query",
    "BaseAdapter",
    "HttpAdapter",
    "MockAdapter",
    "SDKRequest",
    "SDKResponse",
    "SDKStreamResponse",
    # errors
    "DecodeError",
    "HttpStatusError",
    "SDKConfigurationError",
    "StreamBufferOverflowError",
    "TransportError",
]
