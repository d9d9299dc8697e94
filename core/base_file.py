# core/base_file.py
# ---------------------------------------------------------------
# Bounded streaming writer shared by sitemap and index files.
# Opens the target lazily, wraps entries in the configured
# header / root tag / footer and enforces the protocol limits.
# ---------------------------------------------------------------

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional

from core.errors import (
    EntryLimitExceeded,
    PathError,
    SitemapError,
    SitemapIOError,
    SizeLimitExceeded,
)
from core.settings import FileSettings

logger = logging.getLogger("sitemap.base_file")


class FileState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class StreamingFile:
    """
    Streams XML entries into a single file without keeping them in memory.

    Lifecycle: CLOSED -> open() -> OPEN -> close() -> CLOSED.
    write() opens the file on first use; close() writes the closing
    envelope, releases the handle and validates the size on disk.
    Use as a context manager to guarantee the file is terminated:

        with StreamingFile(base_path=tmp, file_name="feed.xml") as f:
            f.write("<entry/>")

    Not thread-safe: one instance owns one file handle.
    """

    def __init__(self, settings: Optional[FileSettings] = None, **overrides):
        base = settings if settings is not None else self.default_settings()
        if overrides:
            base = FileSettings(**{**base.model_dump(), **overrides})
        self.settings: FileSettings = base
        self._handle: Optional[BinaryIO] = None
        self._entries_count = 0
        self._bytes_written = 0

    @classmethod
    def default_settings(cls) -> FileSettings:
        return FileSettings()

    def __enter__(self) -> "StreamingFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self):
        if getattr(self, "_handle", None) is None:
            return
        try:
            self.close()
        except SitemapError as e:
            logger.warning(f"Error while closing {self.full_file_name} on teardown: {e}")

    # ---------------------------------------------------------------
    # State
    # ---------------------------------------------------------------
    @property
    def state(self) -> FileState:
        return FileState.OPEN if self._handle is not None else FileState.CLOSED

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def entries_count(self) -> int:
        """Count of entries written into the current file."""
        return self._entries_count

    @property
    def bytes_written(self) -> int:
        """Bytes written since the file was last opened, envelope included."""
        return self._bytes_written

    @property
    def is_entries_limit_reached(self) -> bool:
        return self._entries_count >= self.settings.max_entries

    @property
    def full_file_name(self) -> Path:
        return self.settings.full_file_name

    def increment_entries_count(self) -> int:
        """
        Reserve a slot for one more entry.
        Must be called before the entry is written, so an entry over the
        limit never reaches the file. Returns the new count.
        """
        new_count = self._entries_count + 1
        if new_count > self.settings.max_entries:
            raise EntryLimitExceeded(
                f'Entries count exceeds limit of "{self.settings.max_entries}" at file "{self.full_file_name}".'
            )
        self._entries_count = new_count
        return new_count

    # ---------------------------------------------------------------
    # Filesystem
    # ---------------------------------------------------------------
    def resolve_path(self, path: Path) -> Path:
        """Make sure the directory exists and is writable."""
        try:
            path.mkdir(mode=self.settings.file_permissions, parents=True, exist_ok=True)
        except OSError as e:
            raise PathError(f"Unable to resolve path: '{path}'!") from e

        if not path.is_dir():
            raise PathError(f"Unable to resolve path: '{path}'!")
        if not os.access(path, os.W_OK):
            raise PathError(f"Path: '{path}' should be writable!")
        return path

    def open(self) -> bool:
        """Open the file for writing and write the opening envelope. No-op if already open."""
        if self._handle is not None:
            return True

        path = self.full_file_name
        self.resolve_path(path.parent)
        try:
            self._handle = open(path, "wb+")
        except OSError as e:
            raise SitemapIOError(f'Unable to create/open file "{path}".') from e

        self._bytes_written = 0
        logger.debug(f"📂 Opened sitemap file {path}")

        try:
            self._write_raw(self.settings.header)
            if self.settings.root_tag is not None:
                self._write_raw(self.settings.root_tag.open_tag())
        except SitemapError:
            self._release()
            raise
        return True

    def write(self, content: str) -> int:
        """Append content to the file, opening it first if needed. Returns bytes written."""
        self.open()
        return self._write_raw(content)

    def close(self) -> bool:
        """
        Write the closing envelope and release the file. No-op if not open.
        Raises SizeLimitExceeded when the finished file is larger than
        max_file_size; the file stays on disk in that case.
        """
        if self._handle is None:
            return True

        path = self.full_file_name
        try:
            if self.settings.root_tag is not None:
                self._write_raw(self.settings.root_tag.close_tag())
            self._write_raw(self.settings.footer)
            try:
                self._handle.flush()
            except OSError as e:
                raise SitemapIOError(f'Unable to write file "{path}".') from e
        finally:
            self._release()
            self._entries_count = 0

        file_size = path.stat().st_size
        logger.debug(f"Closed sitemap file {path} ({file_size} bytes)")
        if file_size > self.settings.max_file_size:
            logger.warning(f"⚠️ Sitemap file {path} exceeds {self.settings.max_file_size} bytes")
            raise SizeLimitExceeded(path, self.settings.max_file_size, file_size)
        return True

    def _write_raw(self, content: str) -> int:
        data = content.encode("utf-8")
        try:
            written = self._handle.write(data)
        except OSError as e:
            raise SitemapIOError(f'Unable to write file "{self.full_file_name}".') from e
        self._bytes_written += written
        return written

    def _release(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.close()
        except OSError as e:
            raise SitemapIOError(f'Unable to close file "{self.full_file_name}".') from e
