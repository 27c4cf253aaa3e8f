"""Pytest fixtures for text-to-calendar tests."""

from datetime import datetime

import pytest

from src.config.settings import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(
        environment="development",
        log_level="DEBUG",
    )


@pytest.fixture
def fixed_now() -> datetime:
    """Friday 2025-01-10 10:00 local time."""
    return datetime(2025, 1, 10, 10, 0)
