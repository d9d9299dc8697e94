# routers/error_handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logging

from core.errors import (
    DiscoveryError,
    EntryLimitExceeded,
    SitemapError,
    SizeLimitExceeded,
)

logger = logging.getLogger("sitemap.errors")

STATUS_BY_ERROR = (
    (DiscoveryError, status.HTTP_404_NOT_FOUND),
    (EntryLimitExceeded, status.HTTP_507_INSUFFICIENT_STORAGE),
    (SizeLimitExceeded, status.HTTP_507_INSUFFICIENT_STORAGE),
)


def status_for(exc: SitemapError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


# ---------------------------------------------------------
# SitemapError and subclasses
# ---------------------------------------------------------
async def sitemap_exception_handler(request: Request, exc: SitemapError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"⚠️ Sitemap error on {request.url.path}: {exc}", exc_info=exc)
    else:
        logger.info(f"Sitemap request failed on {request.url.path}: {exc}")

    return JSONResponse({"detail": str(exc)}, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SitemapError, sitemap_exception_handler)
