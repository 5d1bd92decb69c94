#!/usr/bin/env python3
"""
careerlog API - FastAPI Application

Catalog of a user's work history plus resume upload that fills it.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from database.database import configure_database
from etl.resume.exceptions import ResumeProcessingError
from .config import get_config
from .exceptions import (
    ServiceException,
    service_exception_handler,
    resume_processing_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import upload_router, catalog_router
from .routers.upload import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load configuration
config = get_config()
configure_database(config.database.url)

# Create FastAPI app
app = FastAPI(
    title="careerlog API",
    description="API for cataloguing work history and importing resumes",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure rate limiting
add_rate_limit_handlers(app)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(ResumeProcessingError, resume_processing_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(upload_router)
app.include_router(catalog_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "careerlog-web"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting careerlog API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
