"""Shared FastAPI app wiring for router tests."""

from unittest.mock import MagicMock

from fastapi import FastAPI, HTTPException

from core.config_loader import AppConfig
from database.repository import CatalogRepository
from etl.resume.exceptions import ResumeProcessingError
from tests.mocks.fake_tables import InMemoryTableAccessor
from web.backend.config import get_config
from web.backend.dependencies import get_context, get_repo
from web.backend.exceptions import (
    ServiceException,
    general_exception_handler,
    http_exception_handler,
    resume_processing_exception_handler,
    service_exception_handler,
)
from web.backend.routers import catalog_router, upload_router
from web.backend.routers.upload import add_rate_limit_handlers, limiter

AUTH_HEADER = "X-Auth-Subject"


def build_test_app():
    """App with the real routers and handlers over an in-memory catalog.

    Returns:
        (app, repo, ctx)
    """
    limiter.enabled = False

    app = FastAPI()
    add_rate_limit_handlers(app)
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(ResumeProcessingError, resume_processing_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    app.include_router(upload_router)
    app.include_router(catalog_router)

    repo = CatalogRepository(InMemoryTableAccessor())
    config = AppConfig()
    ctx = MagicMock()
    ctx.config = config

    app.dependency_overrides[get_repo] = lambda: repo
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_context] = lambda: ctx
    return app, repo, ctx
