"""Tests for credential endpoint rate limiting (src/taskflow/core/rate_limit.py)."""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request

from src.taskflow.core.rate_limit import create_limiter, get_rate_limit_key

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_request() -> MagicMock:
    request = MagicMock(spec=Request)
    request.headers = {"X-Forwarded-For": "10.0.0.1"}
    request.client = MagicMock()
    request.client.host = "192.168.1.100"
    return request


def test_key_is_client_ip_only(mock_request):
    assert get_rate_limit_key(mock_request) == "192.168.1.100"


def test_limiter_disabled_in_testing():
    assert create_limiter().enabled is False


def test_limiter_enabled_outside_testing():
    settings = MagicMock()
    settings.app_env = "development"
    settings.redis_url = None

    with patch("src.taskflow.core.rate_limit.get_settings", return_value=settings):
        limiter = create_limiter()

    assert limiter.enabled is True
