#!/usr/bin/env python3
"""
formatdetect Utilities
"""

from .logger import configure_batch_logging, get_logger, reset_logging_levels, setup_logger

__all__ = [
    "get_logger",
    "setup_logger",
    "configure_batch_logging",
    "reset_logging_levels",
]
