#!/usr/bin/env python3
"""
formatdetect Core Module

Detection window calculation, signature matching, input adapters and the
blocking and async batch detectors.

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .async_detector import AsyncFormatDetector
from .base import FormatDetectorBase
from .detector import FormatDetector
from .extensions import check_extension
from .matcher import match_formats
from .window import DetectionWindow, compute_detection_window

__all__ = [
    "AsyncFormatDetector",
    "DetectionWindow",
    "FormatDetector",
    "FormatDetectorBase",
    "check_extension",
    "compute_detection_window",
    "match_formats",
]
