# core/sitemap_file.py
"""
URL sitemap file.

    from core.sitemap_file import SitemapFile

    with SitemapFile(base_path="static/sitemap") as sitemap:
        sitemap.write_url("https://example.com/")
        sitemap.write_url(("product", {"product_id": 7}), {"priority": 0.4})
        sitemap.write_url("https://example.com/about", {
            "last_modified": "2012-06-28",
            "change_frequency": ChangeFrequency.DAILY,
            "priority": 0.7,
        })
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from core.base_file import StreamingFile
from core.errors import RouteResolutionError
from core.settings import IMAGE_NS, SITEMAP_NS, VIDEO_NS, FileSettings, RootTag
from core.url_resolver import RouteSpec, UrlResolver
from helpers.sitemap_utils import ChangeFrequency, UrlOptions, encode_url, validate_entry

logger = logging.getLogger("sitemap.sitemap_file")

__all__ = ["ChangeFrequency", "SitemapFile"]


class SitemapFile(StreamingFile):
    """Writes <url> blocks into a <urlset> document."""

    def __init__(
        self,
        settings: Optional[FileSettings] = None,
        *,
        default_options: Optional[Mapping[str, Any]] = None,
        url_resolver: Optional[UrlResolver] = None,
        **overrides,
    ):
        super().__init__(settings, **overrides)
        self.default_options: Dict[str, Any] = dict(default_options or {})
        self.url_resolver = url_resolver
        # fail on bad defaults now rather than on the first write
        validate_entry(UrlOptions, self.default_options, "default options")

    @classmethod
    def default_settings(cls) -> FileSettings:
        return FileSettings(
            root_tag=RootTag(
                tag="urlset",
                attributes={"xmlns": SITEMAP_NS, "xmlns:image": IMAGE_NS, "xmlns:video": VIDEO_NS},
            ),
        )

    def resolve_url(self, route: RouteSpec) -> str:
        if self.url_resolver is None:
            raise RouteResolutionError(f"No URL resolver configured to resolve route {route!r}")
        return self.url_resolver.create_absolute_url(route)

    def write_url(
        self,
        url: Union[str, RouteSpec],
        options: Union[UrlOptions, Mapping[str, Any], None] = None,
        extra_content: Optional[str] = None,
    ) -> int:
        """
        Write one <url> block. Returns the number of bytes written.

        url: absolute page URL, or a route spec resolved through url_resolver.
        options: last_modified, change_frequency, priority, images, videos;
            merged over default_options.
        extra_content: raw XML appended inside the block.
        """
        if not isinstance(url, str):
            url = self.resolve_url(url)

        self.increment_entries_count()

        if isinstance(options, UrlOptions):
            options = options.model_dump(exclude_unset=True)
        merged = {**self.default_options, **(options or {})}
        xml_code = encode_url(url, merged, extra_content)

        return self.write(xml_code)
