# core/settings.py
# -----------------------------------------------------
# Per-file configuration for the streaming sitemap writer.
# A sitemap and an index differ only in these values.
# -----------------------------------------------------

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
from xml.sax.saxutils import quoteattr

from pydantic import BaseModel, ConfigDict, Field

from config_paths import SITEMAP_DIR, SITEMAP_FILE_NAME

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"
VIDEO_NS = "http://www.google.com/schemas/sitemap-video/1.1"

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'

# Protocol limits (sitemaps.org)
MAX_ENTRIES = 50000
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB


class RootTag(BaseModel):
    """XML root element wrapped around all entries of a file."""

    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., min_length=1)
    attributes: Dict[str, str] = Field(default_factory=dict)

    def open_tag(self) -> str:
        attrs = "".join(f" {name}={quoteattr(value)}" for name, value in self.attributes.items())
        return f"<{self.tag}{attrs}>"

    def close_tag(self) -> str:
        return f"</{self.tag}>"


class FileSettings(BaseModel):
    """Where a sitemap file lives, how big it may grow and how it is enveloped."""

    model_config = ConfigDict(validate_assignment=True)

    file_name: str = Field(SITEMAP_FILE_NAME, min_length=1)
    base_path: Path = SITEMAP_DIR
    max_entries: int = Field(MAX_ENTRIES, gt=0)
    max_file_size: int = Field(MAX_FILE_SIZE, gt=0)
    file_permissions: int = 0o777
    header: str = XML_HEADER
    footer: str = ""
    root_tag: Optional[RootTag] = None

    @property
    def full_file_name(self) -> Path:
        return self.base_path / self.file_name

    def envelope(self) -> str:
        """Content of a file that was opened and closed without entries."""
        open_tag = self.root_tag.open_tag() if self.root_tag else ""
        close_tag = self.root_tag.close_tag() if self.root_tag else ""
        return f"{self.header}{open_tag}{close_tag}{self.footer}"
