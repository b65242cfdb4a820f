"""
Pytest configuration and shared fixtures for Gitter client tests.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, Optional

import pytest

from gitter.sdk.adapters.base import SDKResponse
from gitter.sdk.adapters.mock import MockAdapter
from gitter.sdk.client import GitterClient


TEST_TOKEN = "test-token-123"


def json_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> SDKResponse:
    """
    Build a buffered SDKResponse carrying ``body`` serialized as JSON.

    Args:
        status_code: HTTP status code.
        body: JSON-serializable body.
        headers: Response headers.

    Returns:
        SDKResponse with the JSON text.
    """
    return SDKResponse(
        status_code=status_code,
        headers=headers or {},
        text=json.dumps(body),
        elapsed_ms=1.0,
    )


def rate_limit_headers(limit: int, remaining: int, reset: int) -> Dict[str, str]:
    """Rate-limit response headers as sent by the API."""
    return {
        "x-ratelimit-limit": str(limit),
        "x-ratelimit-remaining": str(remaining),
        "x-ratelimit-reset": str(reset),
    }


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_config_yaml(temp_dir: Path):
    """
    Factory fixture writing a config file and returning its path.

    Usage:
        def test_something(make_config_yaml):
            path = make_config_yaml("client:\\n  token: abc\\n")
    """
    def _make_config(content: str, name: str = "config.yaml") -> Path:
        config_path = temp_dir / name
        config_path.write_text(content)
        return config_path

    return _make_config


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """An empty MockAdapter; tests register responses on ``_responses``/``_streams``."""
    return MockAdapter()


@pytest.fixture
def client(mock_adapter: MockAdapter) -> GitterClient:
    """Client with default endpoint resolution bound to ``mock_adapter``."""
    return GitterClient(token=TEST_TOKEN, adapter=mock_adapter)
