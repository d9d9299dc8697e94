# main.py
# ──────────────────────────────────────────────────────────────────────────────
# FastAPI app serving the generated sitemaps.
#   uvicorn main:app
# ──────────────────────────────────────────────────────────────────────────────
import os

from fastapi import FastAPI

from logging_setup import setup_logging, get_app_logger
from routers.error_handlers import register_error_handlers
from routers.sitemap_routes import router as sitemap_router

logger = get_app_logger("app")


def create_app(configure_logging: bool = True) -> FastAPI:
    if configure_logging:
        setup_logging(log_level=os.getenv("LOG_LEVEL", "INFO"))

    app = FastAPI(
        title="Sitemap Files",
        docs_url=None,        # disable default /docs
        redoc_url=None,       # disable default /redoc
        openapi_url=None      # disable default /openapi.json
    )
    app.include_router(sitemap_router)
    register_error_handlers(app)

    logger.info("Sitemap server ready")
    return app


app = create_app(configure_logging=os.getenv("SITEMAP_CONFIGURE_LOGGING", "1") == "1")
