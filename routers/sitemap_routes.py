# routers/sitemap_routes.py
# ---------------------------------------------------------------
# Serves the generated sitemap files and rebuilds the index.
# Files are produced offline (sitemap_tool.py) into SITEMAP_DIR.
# ---------------------------------------------------------------

import logging
import os
import secrets
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import FileResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from config_paths import INDEX_FILE_NAME, SITEMAP_DIR
from core.index_file import SitemapIndexFile
from core.url_resolver import RouteUrlResolver

logger = logging.getLogger("sitemap.routes")
router = APIRouter()
security = HTTPBasic()

MEDIA_TYPES = {
    ".xml": "application/xml",
    ".gzip": "application/gzip",
}


def get_sitemap_dir() -> Path:
    return SITEMAP_DIR


# ---------------------------------------------------------------
# Admin credentials
# ---------------------------------------------------------------
def verify_admin_credentials(credentials: HTTPBasicCredentials = Depends(security)):
    correct_username = os.getenv("SITEMAP_ADMIN_USER", "admin")
    correct_password = os.getenv("SITEMAP_ADMIN_PASS")
    if not correct_password:
        logger.warning("❌ Sitemap rebuild refused: SITEMAP_ADMIN_PASS is not set")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized",
            headers={"WWW-Authenticate": "Basic"},
        )
    is_user = secrets.compare_digest(credentials.username, correct_username)
    is_pass = secrets.compare_digest(credentials.password, correct_password)
    if not (is_user and is_pass):
        logger.warning(f"❌ Unauthorized sitemap rebuild attempt: {credentials.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


def _serve(directory: Path, file_name: str) -> FileResponse:
    path = directory / file_name
    media_type = MEDIA_TYPES.get(path.suffix)
    if media_type is None or Path(file_name).name != file_name or not path.is_file():
        raise HTTPException(status_code=404, detail="Sitemap not found")
    return FileResponse(path, media_type=media_type)


# ---------------------------------------------------------------
# Routes
# ---------------------------------------------------------------
@router.get("/sitemap.xml", response_class=FileResponse, include_in_schema=False)
def sitemap_index(directory: Path = Depends(get_sitemap_dir)):
    """Serve the sitemap index."""
    return _serve(directory, INDEX_FILE_NAME)


@router.get("/sitemap/{file_name}", response_class=FileResponse, include_in_schema=False, name="sitemap_file")
def sitemap_file(file_name: str, directory: Path = Depends(get_sitemap_dir)):
    """Serve one generated sitemap file."""
    return _serve(directory, file_name)


@router.post("/sitemap/index", include_in_schema=False)
def rebuild_index(
    request: Request,
    directory: Path = Depends(get_sitemap_dir),
    username: str = Depends(verify_admin_credentials),
):
    """Regenerate sitemap_index.xml from the files in the sitemap directory."""
    index = SitemapIndexFile(
        base_path=directory,
        url_resolver=RouteUrlResolver(request.app, str(request.base_url)),
    )
    count = index.write_up()
    logger.info(f"Sitemap index rebuilt by {username}: {count} sitemaps")
    return {"sitemaps": count, "file": index.settings.file_name}
