"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Point the app at an in-memory SQLite database before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator

import pytest
import structlog

from src.tracker.core.config import get_settings
from src.tracker.core.logging import clear_request_context

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clean_log_context() -> Generator[None]:
    """Keep structlog context vars from leaking between tests."""
    clear_request_context()
    yield
    clear_request_context()


@pytest.fixture
def captured_logs() -> Generator[list[dict]]:
    """Capture structlog events emitted during the test as plain dicts."""
    with structlog.testing.capture_logs() as logs:
        yield logs
