import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

# Overrides the configured logs dir when set (tests, embedding applications).
LOG_BASE_DIR: Path | None = None

CONSOLE_FORMAT = logging.Formatter("%(levelname)s | %(name)s | %(message)s")

FILE_FORMAT = logging.Formatter(
    "%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app_logger = logging.getLogger("iiif_presentation")


def setup_logging(cm=None):
    """Attach console and daily-rotated file handlers to the 'iiif_presentation' logger.

    Library modules only create child loggers; entry points call this once,
    with the `ConfigManager` they run with (the global one by default).
    """
    if cm is None:
        from .config_manager import get_config_manager

        cm = get_config_manager()

    level_name = str(cm.get_setting("logging.level", "INFO") or "INFO").upper()
    effective_level = getattr(logging, level_name, logging.INFO)
    app_logger.setLevel(effective_level)

    if app_logger.handlers:
        for h in app_logger.handlers:
            h.setLevel(effective_level)
        return

    # stderr keeps stdout clean for JSON output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(CONSOLE_FORMAT)
    console_handler.setLevel(effective_level)
    app_logger.addHandler(console_handler)

    try:
        logs_dir = LOG_BASE_DIR or cm.get_logs_dir()
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            logs_dir / "fragments.log", when="midnight", interval=1, backupCount=30, encoding="utf-8"
        )
    except OSError as e:
        app_logger.warning("File logging disabled: %s", e)
        return

    file_handler.setFormatter(FILE_FORMAT)
    file_handler.setLevel(effective_level)
    app_logger.addHandler(file_handler)
    app_logger.debug("Logging initialized (Level: %s) -> %s", level_name, logs_dir)


def get_logger(name: str):
    """Get a logger within the 'iiif_presentation' namespace."""
    if name != "iiif_presentation" and not name.startswith("iiif_presentation."):
        name = f"iiif_presentation.{name}"
    return logging.getLogger(name)


def get_resource_logger(resource_id) -> logging.Logger:
    """Get a logger instance scoped to one repository resource."""
    safe_id = "".join(c for c in str(resource_id) if c.isalnum() or c in ("-", "_"))[:50]
    return get_logger(f"resource.{safe_id or 'unknown'}")
