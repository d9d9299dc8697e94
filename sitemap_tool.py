# sitemap_tool.py
"""
Command line sitemap generator.

    python sitemap_tool.py --base https://example.com --index / /about /privacy

Writes sitemap.xml (rolling over to sitemap-1.xml, sitemap-2.xml, ... when
--max-entries is reached) and optionally a sitemap_index.xml next to them.
"""
from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from config_paths import LOG_DIR, SITEMAP_BASE_URL, SITEMAP_DIR, SITEMAP_FILE_NAME
from core.errors import SitemapError, SitemapIOError
from core.index_file import SitemapIndexFile
from core.settings import MAX_ENTRIES
from core.sitemap_file import ChangeFrequency, SitemapFile
from logging_setup import setup_logging

logger = logging.getLogger("sitemap.tool")


def _numbered(file_name: str, number: int) -> str:
    path = Path(file_name)
    return f"{path.stem}-{number}{path.suffix}"


def remove_previous_outputs(out_dir: Path, file_name: str) -> List[Path]:
    """Delete file_name and its numbered parts left in out_dir by an earlier run."""
    out_dir, path = Path(out_dir), Path(file_name)
    if not out_dir.is_dir():
        return []

    removed: List[Path] = []
    for candidate in sorted(out_dir.glob(f"{path.stem}*{path.suffix}")):
        number = candidate.stem[len(path.stem) + 1:]
        is_part = candidate.stem.startswith(f"{path.stem}-") and number.isdigit()
        if (candidate.name == path.name or is_part) and candidate.is_file():
            try:
                candidate.unlink()
            except OSError as e:
                raise SitemapIOError(f'Unable to remove previous sitemap "{candidate}".') from e
            removed.append(candidate)
    if removed:
        logger.debug(f"🧹 Removed {len(removed)} previous sitemap file(s) from {out_dir}")
    return removed


def write_sitemaps(
    urls: Iterable[str],
    out_dir: Path,
    file_name: str = SITEMAP_FILE_NAME,
    max_entries: int = MAX_ENTRIES,
    default_options: Optional[Dict[str, Any]] = None,
) -> List[Path]:
    """
    Write urls into as many sitemap files as max_entries requires.
    A single file keeps file_name; several files are numbered from 1.
    Files left over from an earlier run with the same file_name are removed.
    Returns the written paths in order.
    """
    urls = list(urls)
    remove_previous_outputs(out_dir, file_name)
    chunks = [urls[i:i + max_entries] for i in range(0, len(urls), max_entries)] or [[]]
    written: List[Path] = []

    for number, chunk in enumerate(chunks, 1):
        name = file_name if len(chunks) == 1 else _numbered(file_name, number)
        with SitemapFile(
            base_path=out_dir,
            file_name=name,
            max_entries=max_entries,
            default_options=default_options,
        ) as sitemap:
            sitemap.open()
            for url in chunk:
                sitemap.write_url(url)
            logger.debug(f"📄 {sitemap.full_file_name}: {sitemap.entries_count} URLs")
        written.append(sitemap.full_file_name)

    return written


def write_index(out_dir: Path, base: str, files: Iterable[Path]) -> int:
    """Index the given sitemap files, served under <base>/sitemap/."""
    index = SitemapIndexFile(base_path=out_dir, file_base_url=f"{base}/sitemap")
    return index.write_up_from_files(files)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generate sitemap.xml")
    p.add_argument("--base", default=SITEMAP_BASE_URL,
                   help="e.g. https://example.com (default: $SITEMAP_BASE_URL)")
    p.add_argument("--out-dir", type=Path, default=SITEMAP_DIR)
    p.add_argument("--file-name", default=SITEMAP_FILE_NAME)
    p.add_argument("--max-entries", type=int, default=MAX_ENTRIES)
    p.add_argument("--changefreq", default=ChangeFrequency.WEEKLY.value,
                   choices=[f.value for f in ChangeFrequency])
    p.add_argument("--priority", type=float, default=0.5)
    p.add_argument("--index", action="store_true", help="also write sitemap_index.xml")
    p.add_argument("--log-level", default="INFO")
    p.add_argument("--log-dir", type=Path, default=LOG_DIR)
    p.add_argument("paths", nargs="+", help="e.g. / /about /privacy")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_entries < 1:
        parser.error("--max-entries must be positive")
    if not args.base:
        parser.error("--base is required when SITEMAP_BASE_URL is not set")
    setup_logging(log_level=args.log_level, log_dir=args.log_dir)

    base = args.base.rstrip("/")
    options = {
        "last_modified": datetime.now(timezone.utc).date(),
        "change_frequency": args.changefreq,
        "priority": args.priority,
    }

    try:
        files = write_sitemaps(
            (base + path for path in args.paths),
            args.out_dir,
            file_name=args.file_name,
            max_entries=args.max_entries,
            default_options=options,
        )
        logger.info(f"Wrote {len(files)} sitemap file(s) to {args.out_dir}")
        if args.index:
            count = write_index(args.out_dir, base, files)
            logger.info(f"Wrote index with {count} sitemaps")
    except SitemapError as e:
        logger.error(f"Sitemap generation failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
