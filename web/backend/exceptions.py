#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from etl.resume.exceptions import (
    ConfigurationError,
    ExtractionError,
    ModelCallError,
    ParseFailure,
    ResumeProcessingError,
)

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class UploadRejected(ServiceException):
    """Raised when an upload fails the size or type checks."""
    pass


class NotFoundException(ServiceException):
    """Raised when a catalog row is missing or owned by someone else."""
    pass


class UnauthenticatedException(ServiceException):
    """Raised when the request carries no user identity."""
    pass


def _error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "type": error_type
        }
    )


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, NotFoundException):
        status_code = 404
    elif isinstance(exc, UploadRejected):
        status_code = 400
    elif isinstance(exc, UnauthenticatedException):
        status_code = 401

    if status_code == 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc}")

    return _error_response(status_code, str(exc), exc.__class__.__name__)


async def resume_processing_exception_handler(
    request: Request,
    exc: ResumeProcessingError
) -> JSONResponse:
    """
    Handle failures of the resume pipeline.

    Unreadable documents and unusable model output are the caller's
    problem (422); a missing model credential or a failing model are ours.
    """
    status_code = 500
    if isinstance(exc, (ExtractionError, ParseFailure)):
        status_code = 422
    elif isinstance(exc, ConfigurationError):
        status_code = 503
    elif isinstance(exc, ModelCallError):
        status_code = 502

    logger.error(f"Resume processing failed in {request.url.path}: {exc}")
    return _error_response(status_code, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
