#!/usr/bin/env python3
"""
formatdetect - File format detection by fixed-offset byte signatures
Blocking and async detectors over files, open resources and buffers

Author: Marc Rivero (@seifreed)
License: GPL-3.0
"""

from .__version__ import __author__, __author_email__, __license__, __version__

__description__ = "File format detection by fixed-offset byte signatures"

from .catalog import FormatCatalog, load_catalog_from_file, load_catalog_from_json, load_default_catalog
from .core import AsyncFormatDetector, DetectionWindow, FormatDetector, compute_detection_window, match_formats
from .domain import BufferInput, DetectionPolicy, FormatDefinition, PathInput, ResourceInput, Signature
from .exceptions import *  # noqa: F403
from .exceptions import __all__ as _exception_names

__all__ = [
    "AsyncFormatDetector",
    "BufferInput",
    "DetectionPolicy",
    "DetectionWindow",
    "FormatCatalog",
    "FormatDefinition",
    "FormatDetector",
    "PathInput",
    "ResourceInput",
    "Signature",
    "compute_detection_window",
    "load_catalog_from_file",
    "load_catalog_from_json",
    "load_default_catalog",
    "match_formats",
    *_exception_names,
    "__version__",
    "__author__",
    "__author_email__",
    "__license__",
    "__description__",
]
