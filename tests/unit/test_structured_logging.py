"""Tests for structured logging context and credential redaction."""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.taskflow.core.config import get_settings
from src.taskflow.core.exceptions import ValidationError
from src.taskflow.core.logging import (
    bind_request_context,
    bind_user_context,
    clear_request_context,
    sanitize,
)
from src.taskflow.schemas.auth import RegisterRequest
from src.taskflow.services.account_service import AccountService

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Route structlog output into a CapturingLogger for the duration of a test."""
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


def test_bind_request_context(capturing_logger):
    bind_request_context("test-request-123")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"


def test_bind_request_context_with_none(capturing_logger):
    bind_request_context(None)
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_bind_user_context_omits_email_by_default(capturing_logger):
    user_id = uuid4()

    bind_user_context(user_id, "a@example.com")
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["user_id"] == str(user_id)
    assert "user_email" not in kwargs


def test_bind_user_context_with_email_logging(capturing_logger, monkeypatch):
    monkeypatch.setattr(get_settings(), "log_user_emails", True)

    bind_user_context(uuid4(), "a@example.com")
    structlog.get_logger().info("test message")

    assert capturing_logger.calls[0].kwargs["user_email"] == "a@example.com"


def test_clear_request_context(capturing_logger):
    bind_request_context("test-request-123")
    clear_request_context()
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_sanitize_strips_password_fields():
    data = {
        "email": "a@example.com",
        "password": "P@ss1",
        "password_confirmation": "P@ss1",
        "passwordConfirmation": "P@ss1",
    }

    assert sanitize(data) == {"email": "a@example.com"}


async def test_registration_logs_never_contain_passwords(capturing_logger):
    user_repo = MagicMock()
    user_repo.exists_by_email = AsyncMock(return_value=False)
    service = AccountService(user_repo, AsyncMock(), AsyncMock())
    data = RegisterRequest.model_validate(
        {
            "firstname": "James",
            "lastname": "Smith",
            "email": "james.smith@example.com",
            "password": "S3cret!value",
            "passwordConfirmation": "S3cret!other",
        }
    )

    with (
        patch("src.taskflow.services.account_service.send_verification_email"),
        pytest.raises(ValidationError),
    ):
        await service.register_user(data)

    assert capturing_logger.calls
    for call in capturing_logger.calls:
        assert "S3cret" not in repr(call.kwargs)
