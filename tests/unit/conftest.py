"""Pytest configuration for unit tests."""

from typing import Generator

import pytest

from simpledata.core.config import get_settings


@pytest.fixture
def fresh_settings() -> Generator[None, None, None]:
    """Clear the cached settings before and after a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
