"""
Exception hierarchy for the Gitter client.

All custom exceptions inherit from GitterError base class.
"""

from typing import Optional


class GitterError(Exception):
    """Base exception for all Gitter client errors."""
    pass


# Configuration Errors
class ConfigurationError(GitterError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


class ConfigurationLoadError(ConfigurationError):
    """Raised when loading configuration fails."""
    pass


# SDK Errors
class SDKError(GitterError):
    """Base exception for SDK-related errors."""
    pass


class SDKConfigurationError(SDKError):
    """Raised when SDK configuration is invalid."""
    pass


class TransportError(SDKError):
    """Raised when no response could be obtained (refused, reset, DNS failure)."""
    pass


class HttpStatusError(SDKError):
    """Raised when the response status falls outside the [200, 400) range.

    Attributes:
        status_code: HTTP status code of the response.
        body_text: Raw, unparsed response body.
    """

    def __init__(self, status_code: int, body_text: Optional[str], message: Optional[str] = None):
        self.status_code = status_code
        self.body_text = body_text
        super().__init__(message if message is not None else f"{status_code}: {body_text}")


class DecodeError(HttpStatusError):
    """Raised when a successful response carries a body that is not valid JSON.

    The raw body is deliberately left out of the message.
    """

    MESSAGE = "unable to parse body"

    def __init__(self, status_code: int):
        super().__init__(status_code, None, f"{status_code}: {self.MESSAGE}")


# Stream Errors
class StreamError(SDKError):
    """Base exception for stream session errors."""
    pass


class StreamBufferOverflowError(StreamError):
    """Raised when the stream accumulation buffer grows past its limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Stream buffer holds {size} characters without a complete value (limit {limit})"
        )
