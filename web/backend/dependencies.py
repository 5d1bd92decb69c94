#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from typing import Generator

from fastapi import Depends, Request

from core.app_context import AppContext
from core.config_loader import AppConfig
from database.repository import CatalogRepository
from database.uow import catalog_uow
from .config import get_app_context, get_config
from .exceptions import UnauthenticatedException


def get_repo() -> Generator[CatalogRepository, None, None]:
    """
    FastAPI dependency that yields a CatalogRepository in one transaction.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(repo: CatalogRepository = Depends(get_repo)):
            ...

    Commits when the request succeeds, rolls back when it raises.
    """
    with catalog_uow() as repo:
        yield repo


def get_current_user(
    request: Request,
    repo: CatalogRepository = Depends(get_repo),
    config: AppConfig = Depends(get_config),
) -> dict:
    """
    Resolve the caller's internal user row.

    The upstream identity provider passes a stable subject id in the
    configured header; the first request from a subject creates its row.

    Raises:
        UnauthenticatedException: If the header is missing or blank.
    """
    external_id = request.headers.get(config.auth.user_header, '').strip()
    if not external_id:
        raise UnauthenticatedException("Unauthorized")
    return repo.users.get_or_create(external_id)


def get_context() -> AppContext:
    return get_app_context()
