import logging
import os

# main.py builds the app at import time; keep it from touching the real log dir
os.environ.setdefault("SITEMAP_CONFIGURE_LOGGING", "0")

import pytest


@pytest.fixture
def sitemap_dir(tmp_path):
    """Directory the sitemap files are written to (not created up front)."""
    return tmp_path / "sitemap"


@pytest.fixture
def restore_logging():
    """Undo the dictConfig applied by setup_logging()."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    app_logger = logging.getLogger("sitemap")
    for logger in (app_logger, root):
        for handler in logger.handlers[:]:
            if handler not in saved_handlers:
                logger.removeHandler(handler)
                handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
