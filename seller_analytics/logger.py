import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from . import settings

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level_name: str) -> int:
    """Maps a level name such as 'debug' to its logging constant, INFO when unknown."""
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def _report_file_handler(log_dir: Path, level: int) -> RotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / settings.LOG_FILENAME,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(
    name: Optional[str] = None,
    log_level: Optional[int] = None,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Attaches console and rotating-file output for a report run.

    Defaults come from settings (LOG_LEVEL, BASE_DIR / "logs"). Calling it again
    only updates the level; a logger that already has handlers keeps them.
    """
    level = log_level if log_level is not None else resolve_level(settings.LOG_LEVEL)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    logger.addHandler(_report_file_handler(log_dir or settings.BASE_DIR / "logs", level))
    return logger
