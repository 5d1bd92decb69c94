#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run without external services: repository and accessor tests use
an in-memory SQLite engine, everything else uses the in-memory table double
in tests/mocks or plain mocks.

    # Run all tests
    uv run python -m pytest tests/ -v

    # Skip the SQLite-backed tests
    uv run python -m pytest tests/ -v -m "not db"

    # Using unittest
    uv run python -m unittest discover tests -v
"""
