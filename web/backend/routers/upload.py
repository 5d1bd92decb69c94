#!/usr/bin/env python3
"""
Resume upload endpoint - parse a resume and import it into the catalog.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.app_context import AppContext
from database.repository import CatalogRepository
from ..dependencies import get_context, get_current_user, get_repo
from ..exceptions import UploadRejected
from ..models.responses import UploadResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api", tags=["upload"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": str(exc), "type": "RateLimitExceeded"}
    )


def validate_upload(filename: str, content_type: str, size: int, ctx: AppContext) -> None:
    """
    Enforce the upload size limit and the type allow-list.

    Raises:
        UploadRejected: On a missing file, empty file, oversized file or
            a type outside the allow-list.
    """
    upload_config = ctx.config.upload
    if not filename:
        raise UploadRejected("No file provided")

    if size == 0:
        raise UploadRejected("Empty file")

    if size > upload_config.max_size_bytes:
        limit_mb = upload_config.max_size_bytes // (1024 * 1024)
        raise UploadRejected(f"File too large. Maximum size is {limit_mb}MB.")

    extension = Path(filename).suffix.lower()
    mime = (content_type or '').split(';')[0].strip().lower()
    if extension not in upload_config.allowed_extensions and mime not in upload_config.allowed_mime_types:
        raise UploadRejected("Invalid file type. Please upload a PDF or Word document.")


@router.post("/upload", response_model=UploadResponse)
@limiter.limit("5/minute")
def upload_resume_endpoint(
    request: Request,
    file: UploadFile = File(...),
    user: dict = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_repo),
    ctx: AppContext = Depends(get_context),
):
    """
    Upload a PDF or Word resume and import its work history.

    The file is processed in memory - never written to disk. Jobs and
    bullet points the model returns in an unusable shape are dropped and
    only counted in rejected_count.
    """
    # Read one byte past the limit so oversized files are detected without
    # buffering them whole
    content = file.file.read(ctx.config.upload.max_size_bytes + 1)
    validate_upload(file.filename or '', file.content_type or '', len(content), ctx)

    logger.info(f"Processing resume upload {file.filename!r} ({len(content)} bytes) for user {user['id']}")
    summary = ctx.import_service.process_upload(
        repo,
        user['external_id'],
        content,
        file.filename,
        file.content_type,
    )

    return UploadResponse(success=True, **summary.to_dict())
