#!/usr/bin/env python3
"""
Logging utilities for formatdetect
"""

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
THREAD_SAFE_FORMAT = "%(asctime)s - %(name)s - [%(threadName)s] - %(levelname)s - %(message)s"

# Loggers that become noisy when hundreds of inputs are detected at once
BATCH_QUIET_LOGGERS = (
    "formatdetect.core",
    "formatdetect.catalog",
    "formatdetect.utils",
)

_saved_levels: dict[str, int] = {}


def _has_open_handlers(logger: logging.Logger) -> bool:
    for handler in logger.handlers:
        stream = getattr(handler, "stream", None)
        if stream is not None and getattr(stream, "closed", False):
            return False
    return bool(logger.handlers)


def setup_logger(
    name: str = "formatdetect",
    level: int = logging.INFO,
    thread_safe: bool = True,
    log_dir: str | Path | None = None,
) -> logging.Logger:
    """Setup logger with console and optional file handlers"""

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if _has_open_handlers(logger):
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(THREAD_SAFE_FORMAT if thread_safe else DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        try:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path / "formatdetect.log")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not create log file in {log_dir}: {e}")

    return logger


def get_logger(name: str = "formatdetect") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def configure_batch_logging() -> None:
    """Raise per-component loggers to WARNING while a batch is running"""
    for name in BATCH_QUIET_LOGGERS:
        logger = logging.getLogger(name)
        _saved_levels.setdefault(name, logger.level)
        logger.setLevel(logging.WARNING)


def reset_logging_levels() -> None:
    """Restore the levels saved by configure_batch_logging"""
    for name, level in list(_saved_levels.items()):
        logging.getLogger(name).setLevel(level)
    _saved_levels.clear()
