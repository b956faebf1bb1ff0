#!/usr/bin/env python3
"""Compare a file suffix with the extensions of its detected formats."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ..domain.formats import FormatDefinition


def normalize_extension(extension: str) -> str:
    """Lowercase an extension and strip leading dots"""
    return extension.strip().lstrip(".").lower()


def check_extension(file_path: str | os.PathLike, formats: Iterable[FormatDefinition]) -> bool | None:
    """
    Check whether a file's suffix belongs to any detected format.

    Args:
        file_path: File whose name is checked
        formats: Formats detected for the file's content

    Returns:
        True if the suffix is one of the detected formats' extensions,
        False if it is not, None if nothing was detected
    """
    formats = list(formats)
    if not formats:
        return None

    suffix = normalize_extension(Path(file_path).suffix)
    return any(
        suffix == normalize_extension(extension)
        for fmt in formats
        for extension in fmt.extensions
    )
