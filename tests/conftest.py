"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring a SQLAlchemy engine (deselect with '-m \"not db\"')"
    )


@pytest.fixture(autouse=True)
def reset_cached_config():
    """Drop the web layer's cached config and services between tests.

    Tests that patch environment variables would otherwise see whatever
    the first caller loaded.
    """
    from web.backend.config import get_app_context, get_config

    get_config.cache_clear()
    get_app_context.cache_clear()
    yield
    get_config.cache_clear()
    get_app_context.cache_clear()
