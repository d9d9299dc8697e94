# logging_setup.py
from __future__ import annotations
import logging
import logging.config
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config_paths import LOG_DIR

PLAIN_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | str = LOG_DIR,
    log_file_name: str = "sitemap.log",
    file_max_bytes: int = 5 * 1024 * 1024,  # 5MB
    file_backup_count: int = 3,
) -> Path:
    """
    Configure logging for the sitemap tools and the FastAPI app:
    - colored console (colorlog)
    - rotating log file
    - quiet noisy libraries
    Returns the path of the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / log_file_name

    formatters = {
        "plain": {
            "format": PLAIN_FORMAT,
            "datefmt": DATE_FORMAT,
        },
        "color": {
            "()": "colorlog.ColoredFormatter",
            "format": "%(log_color)s%(levelname)-8s%(reset)s | %(asctime)s | %(name)s | %(message)s",
            "datefmt": DATE_FORMAT,
            "log_colors": {
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        },
    }

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": "color",
        },
        "file": {
            "()": RotatingFileHandler,
            "level": log_level,
            "filename": str(log_file),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
            "formatter": "plain",
        },
    }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            # sitemap.base_file, sitemap.index_file, sitemap.routes ...
            "sitemap": {
                "level": log_level,
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "uvicorn.error": {
                "level": "ERROR",
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "uvicorn.access": {"level": "WARNING"},
            "asyncio": {"level": "WARNING"},
            "httpx": {"level": "WARNING"},
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    })

    logging.getLogger("sitemap").debug("Logging configured ✅")
    return log_file


def get_app_logger(name: str = "sitemap") -> logging.Logger:
    """Return a logger under the sitemap namespace."""
    if name != "sitemap" and not name.startswith("sitemap."):
        name = f"sitemap.{name}"
    return logging.getLogger(name)
