#!/usr/bin/env python3
"""
Configuration management for the careerlog web application.
"""

from pathlib import Path
from functools import lru_cache

from core.app_context import AppContext
from core.config_loader import AppConfig, load_config


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads from config.yaml at the project root (defaults when absent) and
    applies environment variable overrides.

    Returns:
        AppConfig: The application configuration.
    """
    return load_config(str(get_project_root() / 'config.yaml'))


@lru_cache()
def get_app_context() -> AppContext:
    """Process-wide wired services; one rate limiter for every request."""
    return AppContext.build(get_config())


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent
