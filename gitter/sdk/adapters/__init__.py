"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

SDK Transport Adapters.
"""

from gitter.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse, SDKStreamResponse
from gitter.sdk.adapters.http import HttpAdapter
from gitter.sdk.adapters.mock import MockAdapter

__all__ = [
    "BaseAdapter",
    "SDKRequest",
    "SDKResponse",
    "SDKStreamResponse",
    "HttpAdapter",
    "MockAdapter",
]
