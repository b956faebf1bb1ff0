#!/usr/bin/env python3
"""
formatdetect Exceptions - Error taxonomy for format detection

Every error raised by the detector derives from FormatDetectionError and
also from the closest builtin exception, so callers may catch either.

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""


class FormatDetectionError(Exception):
    """Base class for all formatdetect errors"""


class ConfigurationError(FormatDetectionError, ValueError):
    """Catalog is empty or invalid; the detector cannot be built"""


class CatalogValidationError(ConfigurationError):
    """A serialized catalog record failed schema validation"""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class DetectionArgumentError(FormatDetectionError, ValueError):
    """Missing or empty path, resource or buffer argument"""


class InputNotFoundError(FormatDetectionError, FileNotFoundError):
    """Input path does not exist or is not a regular file"""


class UnsupportedResourceError(FormatDetectionError, OSError):
    """Resource is not readable, or not seekable while positioned off zero"""


class DuplicateInputError(FormatDetectionError, ValueError):
    """A batch of paths contains the same path twice (case-insensitive)"""


class InternalConsistencyError(FormatDetectionError, RuntimeError):
    """A signature offset falls before the detection window start"""


class UnsupportedInputError(FormatDetectionError, TypeError):
    """An input descriptor is not a path, resource or buffer input"""


class DetectionCancelledError(FormatDetectionError):
    """The cancellation signal was observed before a read or at a join barrier"""


__all__ = [
    "FormatDetectionError",
    "ConfigurationError",
    "CatalogValidationError",
    "DetectionArgumentError",
    "InputNotFoundError",
    "UnsupportedResourceError",
    "DuplicateInputError",
    "InternalConsistencyError",
    "UnsupportedInputError",
    "DetectionCancelledError",
]
