#!/usr/bin/env python3
"""
formatdetect Detector Base - catalog, window and buffer detection

Holds the state shared by the blocking and async detectors: the immutable
catalog, its detection window computed once at construction, and the
worker bound. Neither changes for the lifetime of a detector, so any
number of concurrent units read them without locking.

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from ..domain.formats import DetectionPolicy, FormatDefinition
from ..domain.inputs import BufferInput
from ..exceptions import DetectionArgumentError
from ..utils.logger import get_logger
from .matcher import BytesLike, match_formats
from .readers import buffer_window
from .window import DetectionWindow, compute_detection_window
from .workers import resolve_worker_count

logger = get_logger(__name__)


class FormatDetectorBase:
    """
    Immutable detector configuration plus buffer detection.

    Attributes:
        formats: Catalog in declared order
        window: Detection window derived from the catalog
        max_workers: Bound on concurrent units per batch
    """

    def __init__(self, formats: Sequence[FormatDefinition], max_workers: int | None = None):
        """
        Build a detector for a validated catalog.

        Args:
            formats: Non-empty ordered catalog
            max_workers: Bound on concurrent units per batch (default: CPU-derived)

        Raises:
            ConfigurationError: If the catalog is empty
        """
        self._formats: tuple[FormatDefinition, ...] = tuple(formats or ())
        self._window = compute_detection_window(self._formats)
        self._max_workers = resolve_worker_count(max_workers)
        logger.debug(
            f"{type(self).__name__} ready: {len(self._formats)} formats, "
            f"window={self._window}, max_workers={self._max_workers}"
        )

    @property
    def formats(self) -> tuple[FormatDefinition, ...]:
        return self._formats

    @property
    def window(self) -> DetectionWindow:
        return self._window

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def _match(self, window_bytes: BytesLike, policy: DetectionPolicy) -> list[FormatDefinition]:
        return match_formats(window_bytes, self._formats, self._window, policy)

    def _detect_buffer(
        self,
        buffer: bytes | bytearray | memoryview | None,
        policy: DetectionPolicy,
    ) -> list[FormatDefinition]:
        return self._match(buffer_window(buffer, self._window), policy)

    def _detect_buffer_input(
        self, buffer_input: BufferInput | None
    ) -> tuple[uuid.UUID, list[FormatDefinition]]:
        if buffer_input is None:
            raise DetectionArgumentError("buffer input must not be None")
        return buffer_input.id, self._detect_buffer(buffer_input.buffer, buffer_input.policy)
