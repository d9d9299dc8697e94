# core/errors.py
# -----------------------------------------------------
# Exceptions raised while generating sitemap files.
# Everything derives from SitemapError so callers (and the
# FastAPI handlers) can catch the whole family at once.
# -----------------------------------------------------

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional


class SitemapError(Exception):
    """Base class for sitemap generation failures."""


class PathError(SitemapError):
    """Target directory is missing, cannot be created or is not writable."""


class SitemapIOError(SitemapError, OSError):
    """Opening or writing the sitemap file failed."""


class EntryLimitExceeded(SitemapError):
    """An entry was refused because the file already holds max_entries entries."""


class SizeLimitExceeded(SitemapError):
    """The closed file is larger than max_file_size.

    Raised after the file has been fully written, so the oversized file
    exists on disk when this surfaces.
    """

    def __init__(self, path: Path, limit: int, actual_size: int):
        self.path = path
        self.limit = limit
        self.actual_size = actual_size
        super().__init__(
            f'File "{path}" has exceeded the size limit of "{limit}": actual file size: "{actual_size}".'
        )


class InvalidOptionError(SitemapError, ValueError):
    """Entry options contain keys that are not recognized."""

    def __init__(self, options: Iterable[str], message: Optional[str] = None):
        self.options: List[str] = list(options)
        super().__init__(message or "Unrecognized options: " + ", ".join(self.options))


class EntryValidationError(SitemapError, ValueError):
    """Entry data is missing a required field or holds an invalid value."""


class DiscoveryError(SitemapError):
    """No sitemap files were found to populate an index file."""


class RouteResolutionError(SitemapError):
    """A route specification could not be turned into an absolute URL."""
