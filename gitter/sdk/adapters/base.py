"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

SDK Transport Adapter base class and data structures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, AsyncIterator, Dict, Optional


@dataclass
class SDKRequest:
    """Outbound SDK request representation.

    ``url`` is absolute and already carries the encoded query string.
    ``body`` is any JSON-serializable value; ``None`` means no payload.
    """
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    @property
    def has_body(self) -> bool:
        return self.body is not None


@dataclass
class SDKResponse:
    """Inbound SDK response representation, body fully buffered as text."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    elapsed_ms: float = 0.0


@dataclass
class SDKStreamResponse:
    """An open streaming response.

    ``chunks`` yields decoded text in transport order, one item per chunk
    received.
    """
    status_code: int
    headers: Dict[str, str]
    chunks: AsyncIterator[str]

    async def read_text(self) -> str:
        """Drain the remaining chunks into one string."""
        parts = []
        async for chunk in self.chunks:
            parts.append(chunk)
        return "".join(parts)


class BaseAdapter(ABC):
    """Abstract base for all transport adapters."""

    @abstractmethod
    async def send(self, request: SDKRequest) -> SDKResponse:
        """Send a request once and return the fully buffered response.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...

    @abstractmethod
    def stream(self, request: SDKRequest) -> AsyncContextManager[SDKStreamResponse]:
        """Open a long-lived request; the connection lives as long as the context.

        Raises:
            TransportError: On connection failure, including mid-stream.
        """
        ...

    async def aclose(self) -> None:
        """Release adapter resources, awaiting open connections."""
        self.close()

    @abstractmethod
    def close(self) -> None:
        """Release adapter resources."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the adapter is in a usable state."""
        ...
