# core/index_file.py
"""
Sitemap index file.

Lists the sitemap files found in a directory:

    from core.index_file import SitemapIndexFile

    index = SitemapIndexFile(base_path="static/sitemap", file_base_url="https://example.com/sitemap")
    index.write_up()

When the source sitemaps live in another directory use write_up_from_path().
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from config_paths import INDEX_FILE_NAME, SITEMAP_BASE_URL
from core.base_file import StreamingFile
from core.errors import DiscoveryError, SitemapError
from core.settings import SITEMAP_NS, FileSettings, RootTag
from core.url_resolver import UrlResolver
from helpers.sitemap_utils import DateLike, encode_sitemap

logger = logging.getLogger("sitemap.index_file")


class SitemapIndexFile(StreamingFile):
    """Writes <sitemap> blocks into a <sitemapindex> document."""

    SOURCE_PATTERNS = ("*.xml", "*.gzip")

    def __init__(
        self,
        settings: Optional[FileSettings] = None,
        *,
        file_base_url: Optional[str] = None,
        url_resolver: Optional[UrlResolver] = None,
        **overrides,
    ):
        super().__init__(settings, **overrides)
        self._file_base_url = file_base_url or ""
        self.url_resolver = url_resolver

    @classmethod
    def default_settings(cls) -> FileSettings:
        return FileSettings(
            file_name=INDEX_FILE_NAME,
            root_tag=RootTag(tag="sitemapindex", attributes={"xmlns": SITEMAP_NS}),
        )

    @property
    def file_base_url(self) -> str:
        """Base URL of the directory holding the sitemap files."""
        if not self._file_base_url:
            self._file_base_url = self.default_file_base_url()
        return self._file_base_url

    @file_base_url.setter
    def file_base_url(self, value: str) -> None:
        self._file_base_url = value

    def default_file_base_url(self) -> str:
        """<site>/sitemap, where <site> comes from the URL resolver or SITEMAP_BASE_URL."""
        if self.url_resolver is not None:
            site = self.url_resolver.base_url
        elif SITEMAP_BASE_URL:
            site = SITEMAP_BASE_URL
        else:
            raise SitemapError("file_base_url is not set and neither a URL resolver nor SITEMAP_BASE_URL is configured")
        return site.rstrip("/") + "/sitemap"

    def write_sitemap(self, url: str, last_modified: Optional[DateLike] = None) -> int:
        """Write one <sitemap> block. Returns the number of bytes written."""
        self.increment_entries_count()
        return self.write(encode_sitemap(url, last_modified))

    def find_source_files(self, path: Union[str, Path]) -> List[Path]:
        """Sitemap files directly under path, without this index itself, sorted by name."""
        path = Path(path)
        own_file = self.full_file_name.resolve()
        found = {
            file
            for pattern in self.SOURCE_PATTERNS
            for file in path.glob(pattern)
            if file.is_file() and file.resolve() != own_file
        }
        return sorted(found, key=lambda f: f.name)

    def write_up_from_path(self, path: Union[str, Path]) -> int:
        """
        Fill the index with the sitemap files found in path and close it.
        Returns the amount of sitemaps written.
        """
        path = Path(path)
        if not path.is_dir():
            raise DiscoveryError(f'Unable to find site map files under the path "{path}"')

        files = self.find_source_files(path)
        if not files:
            raise DiscoveryError(f'Unable to find site map files under the path "{path}"')
        return self.write_up_from_files(files)

    def write_up_from_files(self, files: Iterable[Path]) -> int:
        """Fill the index with exactly the given sitemap files and close it."""
        base_url = self.file_base_url.rstrip("/")
        count = 0
        for file in files:
            self.write_sitemap(f"{base_url}/{file.name}", int(file.stat().st_mtime))
            count += 1

        self.close()
        logger.info(f"🗺️ Wrote {count} sitemaps to index {self.full_file_name}")
        return count

    def write_up(self) -> int:
        """Fill the index from its own directory (sources and index side by side)."""
        return self.write_up_from_path(self.settings.base_path)
