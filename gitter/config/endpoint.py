"""
Endpoint resolution for the Gitter client.

Derives transport, host, port and path prefix either from an explicit
base URL or from discrete host/port/prefix/version options. The result is
computed once per client and never changes afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from gitter.exceptions import InvalidConfigurationError

DEFAULT_HOST = "api.gitter.im"
DEFAULT_PORT = 443
DEFAULT_VERSION = "v1"
DEFAULT_STREAM_HOST = "stream.gitter.im"


class Transport(str, Enum):
    """Wire transport of an endpoint."""

    PLAINTEXT = "http"
    SECURE = "https"

    @property
    def default_port(self) -> int:
        return 443 if self is Transport.SECURE else 80


@dataclass(frozen=True)
class EndpointConfiguration:
    """Resolved transport, host, port and path prefix of an endpoint."""

    transport: Transport
    host: str
    port: int
    path_prefix: str

    @property
    def base_url(self) -> str:
        """Scheme and authority, with the port omitted when it is the default."""
        if self.port == self.transport.default_port:
            return f"{self.transport.value}://{self.host}"
        return f"{self.transport.value}://{self.host}:{self.port}"

    def path_for(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        """Compose ``path_prefix + path`` plus the encoded query string."""
        # Deferred: gitter.sdk imports this module at load time.
        from gitter.sdk.query import encode_query

        full_path = self.path_prefix + path
        if query:
            full_path = f"{full_path}?{encode_query(query)}"
        return full_path

    def url_for(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        """Absolute URL for ``path`` relative to the prefix."""
        return self.base_url + self.path_for(path, query)


def resolve_endpoint(
    api_endpoint: Optional[str] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    prefix: bool = False,
    version: Optional[str] = None,
) -> EndpointConfiguration:
    """
    Resolve the request endpoint.

    An explicit ``api_endpoint`` wins over every discrete option; its path
    (minus one trailing slash) becomes the prefix verbatim.

    Args:
        api_endpoint: Fully-qualified base URL (e.g. "https://gitter.example/api/v1/")
        host: Host name, defaults to api.gitter.im
        port: Port, defaults to 443. The transport is TLS only on 443.
        prefix: Use the "/api/<version>" prefix form instead of "/<version>"
        version: API version path segment, defaults to "v1"

    Returns:
        EndpointConfiguration: The resolved endpoint

    Raises:
        InvalidConfigurationError: If ``api_endpoint`` is not a well-formed http(s) URL
    """
    if api_endpoint:
        return _resolve_from_url(api_endpoint)

    port = port or DEFAULT_PORT
    return EndpointConfiguration(
        transport=Transport.SECURE if port == 443 else Transport.PLAINTEXT,
        host=host or DEFAULT_HOST,
        port=port,
        path_prefix=("/api/" if prefix else "/") + (version or DEFAULT_VERSION),
    )


def stream_endpoint(path_prefix: str, host: str = DEFAULT_STREAM_HOST) -> EndpointConfiguration:
    """Streaming endpoint: always TLS on 443, sharing the request path prefix."""
    return EndpointConfiguration(
        transport=Transport.SECURE,
        host=host,
        port=443,
        path_prefix=path_prefix,
    )


def _resolve_from_url(api_endpoint: str) -> EndpointConfiguration:
    parsed = urlsplit(api_endpoint)

    try:
        transport = Transport(parsed.scheme.lower())
    except ValueError:
        raise InvalidConfigurationError(
            f"api_endpoint must use http or https, got '{api_endpoint}'"
        )

    if not parsed.hostname:
        raise InvalidConfigurationError(f"api_endpoint has no host: '{api_endpoint}'")

    try:
        port = parsed.port
    except ValueError as e:
        raise InvalidConfigurationError(f"api_endpoint has an invalid port: {e}") from e

    pathname = parsed.path
    if pathname.endswith("/"):
        pathname = pathname[:-1]

    return EndpointConfiguration(
        transport=transport,
        host=parsed.hostname,
        port=port or transport.default_port,
        path_prefix=pathname,
    )
