"""
Configuration management for the Gitter client.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from gitter.config.endpoint import DEFAULT_STREAM_HOST
from gitter.exceptions import ConfigurationLoadError, InvalidConfigurationError
from gitter.logging_config import get_logger

logger = get_logger(__name__)

# 1 MiB of text without a complete JSON value terminates a stream session.
DEFAULT_MAX_STREAM_BUFFER = 1024 * 1024

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${GITTER_TOKEN}" -> value of GITTER_TOKEN env var
        "${GITTER_HOST:api.gitter.im}" -> value of GITTER_HOST or "api.gitter.im" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class ClientConfig:
    """Connection settings of a client."""

    token: str = ""
    api_endpoint: str = ""
    host: str = ""
    port: Optional[int] = None
    prefix: bool = False
    version: str = ""
    stream_host: str = DEFAULT_STREAM_HOST
    max_stream_buffer: Optional[int] = DEFAULT_MAX_STREAM_BUFFER


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_format: bool = True


@dataclass
class GitterConfig:
    """Main Gitter client configuration."""

    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.gitter/config.yaml")


def get_default_config() -> GitterConfig:
    """
    Get default configuration with sensible defaults.

    The token is taken from the GITTER_TOKEN environment variable when set.

    Returns:
        GitterConfig: Default configuration object
    """
    return GitterConfig(
        client=ClientConfig(token=os.environ.get("GITTER_TOKEN", "")),
        logging=LoggingConfig(),
    )


def load_config(config_path: Optional[str] = None) -> GitterConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises ConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        GitterConfig: Loaded and validated configuration

    Raises:
        ConfigurationLoadError: If the file exists but cannot be read
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(config_path)

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise ConfigurationLoadError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': top level must be a mapping"
        )

    config_data = _expand_env_vars(config_data)
    logger.debug("Expanded environment variables in configuration")

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _build_config_from_dict(config_data: Dict[str, Any]) -> GitterConfig:
    """
    Build GitterConfig from dictionary loaded from YAML.

    Merges user configuration with defaults. Values that arrive as strings
    after environment expansion (ports, flags) are coerced.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        GitterConfig: Configuration object

    Raises:
        InvalidConfigurationError: If a value has the wrong type
    """
    default_config = get_default_config()

    client_data = _section(config_data, 'client')
    client = ClientConfig(
        token=str(client_data.get('token') or default_config.client.token),
        api_endpoint=str(client_data.get('api_endpoint') or ""),
        host=str(client_data.get('host') or ""),
        port=_coerce_int('client.port', client_data.get('port')),
        prefix=_coerce_bool('client.prefix', client_data.get('prefix', False)),
        version=str(client_data.get('version') or ""),
        stream_host=str(client_data.get('stream_host') or default_config.client.stream_host),
        max_stream_buffer=_coerce_int(
            'client.max_stream_buffer',
            client_data.get('max_stream_buffer', default_config.client.max_stream_buffer),
        ),
    )

    logging_data = _section(config_data, 'logging')
    logging = LoggingConfig(
        level=str(logging_data.get('level', default_config.logging.level)).upper(),
        file=os.path.expanduser(str(logging_data.get('file') or "")),
        json_format=_coerce_bool(
            'logging.json_format',
            logging_data.get('json_format', default_config.logging.json_format),
        ),
    )

    return GitterConfig(client=client, logging=logging)


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config_data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidConfigurationError(
            f"'{name}' must be a mapping, got {type(value).__name__}"
        )
    return value


def _coerce_int(name: str, value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "yes", "1", "on"):
        return True
    if isinstance(value, str) and value.lower() in ("false", "no", "0", "off", ""):
        return False
    raise InvalidConfigurationError(f"{name} must be a boolean, got {value!r}")


def _validate_config(config: GitterConfig) -> None:
    """
    Validate configuration values.

    Endpoint options are not range-checked here; a malformed host or
    version simply produces a malformed path prefix.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if config.logging.level not in _VALID_LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging.level must be one of {list(_VALID_LOG_LEVELS)}, "
            f"got '{config.logging.level}'"
        )

    if config.client.max_stream_buffer is not None and config.client.max_stream_buffer < 1:
        raise InvalidConfigurationError(
            f"max_stream_buffer must be at least 1, got {config.client.max_stream_buffer}"
        )
