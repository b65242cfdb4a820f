"""
Unit tests for configuration management.

Tests configuration loading, environment expansion and validation.
"""

import pytest

from gitter.config.settings import (
    DEFAULT_MAX_STREAM_BUFFER,
    ClientConfig,
    GitterConfig,
    LoggingConfig,
    _validate_config,
    get_default_config,
    load_config,
)
from gitter.exceptions import InvalidConfigurationError


class TestConfigurationDataclasses:
    """Test configuration dataclass structures."""

    def test_client_config_defaults(self):
        config = ClientConfig()
        assert config.token == ""
        assert config.api_endpoint == ""
        assert config.port is None
        assert config.prefix is False
        assert config.stream_host == "stream.gitter.im"
        assert config.max_stream_buffer == DEFAULT_MAX_STREAM_BUFFER

    def test_logging_config_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.json_format is True

    def test_default_config_reads_token_from_env(self, monkeypatch):
        monkeypatch.setenv("GITTER_TOKEN", "env-token")
        assert get_default_config().client.token == "env-token"


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, temp_dir, monkeypatch):
        monkeypatch.delenv("GITTER_TOKEN", raising=False)
        config = load_config(str(temp_dir / "absent.yaml"))
        assert config == GitterConfig()

    def test_empty_file_returns_defaults(self, make_config_yaml, monkeypatch):
        monkeypatch.delenv("GITTER_TOKEN", raising=False)
        config = load_config(str(make_config_yaml("")))
        assert config == GitterConfig()

    def test_full_file(self, make_config_yaml):
        path = make_config_yaml(
            "client:\n"
            "  token: abc\n"
            "  host: localhost\n"
            "  port: 5000\n"
            "  prefix: true\n"
            "  version: v2\n"
            "  stream_host: stream.local\n"
            "  max_stream_buffer: 4096\n"
            "logging:\n"
            "  level: debug\n"
            "  json_format: false\n"
        )
        config = load_config(str(path))
        assert config.client == ClientConfig(
            token="abc",
            host="localhost",
            port=5000,
            prefix=True,
            version="v2",
            stream_host="stream.local",
            max_stream_buffer=4096,
        )
        assert config.logging.level == "DEBUG"
        assert config.logging.json_format is False

    def test_env_var_expansion(self, make_config_yaml, monkeypatch):
        monkeypatch.setenv("MY_GITTER_TOKEN", "from-env")
        monkeypatch.delenv("MY_GITTER_PORT", raising=False)
        path = make_config_yaml(
            "client:\n"
            "  token: ${MY_GITTER_TOKEN}\n"
            "  port: ${MY_GITTER_PORT:8080}\n"
        )
        config = load_config(str(path))
        assert config.client.token == "from-env"
        assert config.client.port == 8080

    def test_null_buffer_limit_disables_it(self, make_config_yaml):
        path = make_config_yaml("client:\n  max_stream_buffer: null\n")
        assert load_config(str(path)).client.max_stream_buffer is None

    def test_malformed_yaml_raises(self, make_config_yaml):
        path = make_config_yaml("client: [unterminated\n")
        with pytest.raises(InvalidConfigurationError, match="Failed to parse YAML"):
            load_config(str(path))

    def test_non_mapping_raises(self, make_config_yaml):
        path = make_config_yaml("- just\n- a list\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))

    @pytest.mark.parametrize("content, section", [
        ("client: just-a-string\n", "client"),
        ("logging:\n  - DEBUG\n", "logging"),
    ])
    def test_non_mapping_section_raises(self, make_config_yaml, content, section):
        path = make_config_yaml(content)
        with pytest.raises(InvalidConfigurationError, match=f"'{section}' must be a mapping"):
            load_config(str(path))

    def test_non_integer_port_raises(self, make_config_yaml):
        path = make_config_yaml("client:\n  port: https\n")
        with pytest.raises(InvalidConfigurationError, match="client.port"):
            load_config(str(path))

    def test_non_boolean_prefix_raises(self, make_config_yaml):
        path = make_config_yaml("client:\n  prefix: maybe\n")
        with pytest.raises(InvalidConfigurationError, match="client.prefix"):
            load_config(str(path))


class TestValidateConfig:
    def test_invalid_log_level(self):
        config = GitterConfig(logging=LoggingConfig(level="LOUD"))
        with pytest.raises(InvalidConfigurationError, match="logging.level"):
            _validate_config(config)

    def test_buffer_limit_must_be_positive(self):
        config = GitterConfig(client=ClientConfig(max_stream_buffer=0))
        with pytest.raises(InvalidConfigurationError, match="max_stream_buffer"):
            _validate_config(config)
