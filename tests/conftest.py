"""Test bootstrap.

Ensures `src/` is importable and keeps logs and config out of the repository.
"""

from __future__ import annotations

import contextlib
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _drop_handlers(logger_mod):
    for handler in list(logger_mod.app_logger.handlers):
        logger_mod.app_logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()


def pytest_configure():
    """Redirect session logging to a temporary folder before test collection."""
    from iiif_presentation_core import logger as logger_mod

    session_logs_dir = Path(tempfile.mkdtemp(prefix="iiif-fragments-pytest-")) / "logs"
    session_logs_dir.mkdir(parents=True, exist_ok=True)
    logger_mod.LOG_BASE_DIR = session_logs_dir
    _drop_handlers(logger_mod)


@pytest.fixture(autouse=True)
def _redirect_test_logging(monkeypatch, tmp_path, cm):
    """Send each test's log file to its own tmp folder."""
    from iiif_presentation_core import logger as logger_mod

    test_logs_dir = tmp_path / "logs"
    test_logs_dir.mkdir(parents=True, exist_ok=True)
    _drop_handlers(logger_mod)
    monkeypatch.setattr(logger_mod, "LOG_BASE_DIR", test_logs_dir)
    logger_mod.setup_logging(cm)
    yield
    _drop_handlers(logger_mod)


@pytest.fixture
def cm(tmp_path):
    """A ConfigManager backed by a throwaway config.json."""
    from iiif_presentation_core.config_manager import ConfigManager

    return ConfigManager.load(path=tmp_path / "config.json")


@pytest.fixture
def context(cm):
    """Build context with a predictable base url and no overrides."""
    from iiif_presentation_core.context import BuildContext

    cm.set_setting("iiif.base_url", "https://repo.example.org")
    return BuildContext.from_config(cm)
