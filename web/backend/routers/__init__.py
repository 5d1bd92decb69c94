"""API route handlers."""

from .upload import router as upload_router
from .catalog import router as catalog_router
