#!/usr/bin/env python3
"""
formatdetect Detection Window - minimal byte range covering a catalog

The window is derived once per catalog when a detector is built. Every
signature byte range [offset, offset + len(pattern)) falls inside
[min_offset, min_offset + length).

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..domain.formats import FormatDefinition
from ..exceptions import ConfigurationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DetectionWindow:
    """
    Byte range a source must provide for every signature to be testable.

    Attributes:
        min_offset: Smallest signature offset in the catalog
        length: Bytes needed from min_offset to cover the furthest signature end
    """

    min_offset: int
    length: int

    @property
    def reach(self) -> int:
        """Absolute offset one past the last byte any signature inspects."""
        return self.min_offset + self.length


def compute_detection_window(formats: Sequence[FormatDefinition]) -> DetectionWindow:
    """
    Compute the detection window for a catalog.

    The reach scans every signature, not only those sharing the largest
    offset, so a long pattern at a lower offset is never truncated.

    Args:
        formats: Non-empty ordered catalog

    Returns:
        DetectionWindow covering all signatures

    Raises:
        ConfigurationError: If the catalog or any format's signature list is empty
    """
    if not formats:
        raise ConfigurationError("Formats for detection should not be empty")

    signatures = []
    for fmt in formats:
        if not fmt.signatures:
            raise ConfigurationError(f"Format {fmt.name!r} has no signatures")
        signatures.extend(fmt.signatures)

    min_offset = min(signature.offset for signature in signatures)
    reach = max(signature.end for signature in signatures)

    window = DetectionWindow(min_offset=min_offset, length=reach - min_offset)
    logger.debug(
        f"Detection window for {len(formats)} formats: "
        f"offset={window.min_offset} length={window.length}"
    )
    return window


__all__ = ["DetectionWindow", "compute_detection_window"]
