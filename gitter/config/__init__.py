"""
Configuration management for the Gitter client.

Handles loading and validation of configuration files and endpoint resolution.
"""

from gitter.config.endpoint import (
    EndpointConfiguration,
    Transport,
    resolve_endpoint,
    stream_endpoint,
)
from gitter.config.settings import (
    ClientConfig,
    GitterConfig,
    LoggingConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "ClientConfig",
    "EndpointConfiguration",
    "GitterConfig",
    "LoggingConfig",
    "Transport",
    "get_default_config",
    "get_default_config_path",
    "load_config",
    "resolve_endpoint",
    "stream_endpoint",
]
