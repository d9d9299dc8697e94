# config_paths.py
# -----------------------------------------------------
# Shared filesystem paths and URLs used across the project.
# Safe to import from core/helpers/routers (no circular imports).
# Every value can be overridden through the environment.
# -----------------------------------------------------

import os
from pathlib import Path

# Base and directories
BASE_DIR: Path = Path(__file__).resolve().parent
STATIC_DIR: Path = Path(os.getenv("SITEMAP_STATIC_DIR", BASE_DIR / "static"))
SITEMAP_DIR: Path = Path(os.getenv("SITEMAP_DIR", STATIC_DIR / "sitemap"))
LOG_DIR: Path = Path(os.getenv("SITEMAP_LOG_DIR", BASE_DIR / "logs"))

# Public URL of the site the sitemaps describe, e.g. https://example.com
SITEMAP_BASE_URL: str = os.getenv("SITEMAP_BASE_URL", "")

# File names
SITEMAP_FILE_NAME = "sitemap.xml"
INDEX_FILE_NAME = "sitemap_index.xml"
