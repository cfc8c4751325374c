"""Tests for structured logging context."""

from uuid import uuid4

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.tracker.core.logging import (
    bind_actor_context,
    bind_request_context,
    clear_request_context,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Create a capturing logger for tests."""
    cap_logger = CapturingLogger()

    # Save original configuration to restore later
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
    """Test binding request_id to log context."""
    request_id = "test-request-123"

    bind_request_context(request_id)
    logger = structlog.get_logger()
    logger.info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == request_id


def test_bind_request_context_with_none(capturing_logger):
    """Test that None request_id is not bound."""
    bind_request_context(None)
    logger = structlog.get_logger()
    logger.info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert "request_id" not in entries[0].kwargs


def test_bind_actor_context(capturing_logger):
    """Org and user ids are bound as strings, with the super admin flag."""
    org_id = uuid4()
    user_id = uuid4()

    bind_actor_context(org_id, user_id)
    logger = structlog.get_logger()
    logger.info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["org_id"] == str(org_id)
    assert entries[0].kwargs["user_id"] == str(user_id)
    assert entries[0].kwargs["super_admin"] is False


def test_bind_actor_context_without_user_ids(capturing_logger, monkeypatch):
    """User ids stay out of the log context when log_user_ids is off."""
    from unittest.mock import MagicMock

    from src.tracker.core import config

    mock_settings = MagicMock()
    mock_settings.log_user_ids = False
    monkeypatch.setattr(config, "get_settings", lambda: mock_settings)

    org_id = uuid4()
    bind_actor_context(org_id, uuid4(), is_super_admin=True)
    logger = structlog.get_logger()
    logger.info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["org_id"] == str(org_id)
    assert entries[0].kwargs["super_admin"] is True
    assert "user_id" not in entries[0].kwargs


def test_clear_request_context(capturing_logger):
    """Test clearing request context."""
    bind_request_context("test-request-123")
    bind_actor_context(uuid4(), uuid4())

    clear_request_context()

    logger = structlog.get_logger()
    logger.info("test message")
    entries = capturing_logger.calls
    assert len(entries) == 1
    assert "request_id" not in entries[0].kwargs
    assert "user_id" not in entries[0].kwargs
    assert "org_id" not in entries[0].kwargs


def test_context_accumulation(capturing_logger):
    """Test that context accumulates across multiple bind calls."""
    request_id = "test-request-123"
    org_id = uuid4()
    user_id = uuid4()

    bind_request_context(request_id)
    bind_actor_context(org_id, user_id)

    logger = structlog.get_logger()
    logger.info("test message")
    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == request_id
    assert entries[0].kwargs["user_id"] == str(user_id)
    assert entries[0].kwargs["org_id"] == str(org_id)
