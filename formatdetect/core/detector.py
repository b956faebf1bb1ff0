#!/usr/bin/env python3
"""
formatdetect Blocking Detector - thread-pool batch orchestration

Each unit of work in a batch runs on a bounded ThreadPoolExecutor; the
caller blocks on a single wait-all barrier and the identifier-keyed result
is assembled only after every unit has finished. No ordering is
guaranteed among units.

Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import BinaryIO, TypeVar

from ..domain.formats import DetectionPolicy, FormatDefinition
from ..domain.inputs import BufferInput, InputDescriptor, PathInput, ResourceInput
from ..exceptions import DetectionArgumentError, UnsupportedInputError
from ..utils.logger import get_logger
from .base import FormatDetectorBase
from .batching import (
    DetectionResult,
    ensure_distinct_resources,
    ensure_unique_paths,
    merge_results,
    partition_inputs,
    require_inputs,
)
from .readers import read_path_window, read_resource_window

logger = get_logger(__name__)

T = TypeVar("T")
Pair = tuple[uuid.UUID, list[FormatDefinition]]

# One worker per source kind in a mixed batch
MIXED_BATCH_WORKERS = 3


def _join(futures: Sequence[Future[T]]) -> list[T]:
    """Wait for every future, then return results in submission order.

    The first failure in submission order is re-raised once all units
    have finished.
    """
    wait(futures)
    return [future.result() for future in futures]


class FormatDetector(FormatDetectorBase):
    """Blocking detector over paths, open resources and buffers."""

    # Single-source operations

    def detect_from_path(
        self,
        file_path: str | os.PathLike,
        policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH,
    ) -> list[FormatDefinition]:
        """
        Detect the formats of a file on disk. The file is always closed.

        Args:
            file_path: Path of the file to inspect
            policy: Matching policy

        Returns:
            Matching formats in catalog order
        """
        return self._match(read_path_window(file_path, self.window), policy)

    def detect_from_resource(
        self,
        resource: BinaryIO,
        close_resource: bool = False,
        policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH,
    ) -> list[FormatDefinition]:
        """
        Detect the formats of an open binary resource.

        The resource is read from its absolute start. It is closed afterwards
        only when close_resource is set.
        """
        return self._match(read_resource_window(resource, self.window, close_resource), policy)

    def detect_from_buffer(
        self,
        buffer: bytes | bytearray | memoryview,
        policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH,
    ) -> list[FormatDefinition]:
        """Detect the formats of an in-memory buffer."""
        return self._detect_buffer(buffer, policy)

    # Single-item units

    def detect_one_path(self, path_input: PathInput) -> Pair:
        if path_input is None:
            raise DetectionArgumentError("path input must not be None")
        return path_input.id, self.detect_from_path(path_input.path, path_input.policy)

    def detect_one_resource(self, resource_input: ResourceInput) -> Pair:
        if resource_input is None:
            raise DetectionArgumentError("resource input must not be None")
        result = self.detect_from_resource(
            resource_input.resource, resource_input.close_resource, resource_input.policy
        )
        return resource_input.id, result

    def detect_one_buffer(self, buffer_input: BufferInput) -> Pair:
        return self._detect_buffer_input(buffer_input)

    def detect_one_mixed(self, descriptor: InputDescriptor) -> Pair:
        """Dispatch a single descriptor to the unit for its source kind."""
        match descriptor:
            case PathInput():
                return self.detect_one_path(descriptor)
            case ResourceInput():
                return self.detect_one_resource(descriptor)
            case BufferInput():
                return self.detect_one_buffer(descriptor)
            case _:
                raise UnsupportedInputError(
                    f"Cannot detect a supported input object type: {type(descriptor).__name__}"
                )

    # Batches

    def detect_many_paths(self, path_inputs: Sequence[PathInput]) -> DetectionResult:
        """
        Detect a batch of files concurrently.

        Raises:
            DuplicateInputError: If two entries name the same file
                (case-insensitive); raised before any file is opened
        """
        require_inputs(path_inputs, "path inputs")
        ensure_unique_paths(path_inputs)
        return self._run_batch(self.detect_one_path, path_inputs)

    def detect_many_resources(self, resource_inputs: Sequence[ResourceInput]) -> DetectionResult:
        require_inputs(resource_inputs, "resource inputs")
        ensure_distinct_resources(resource_inputs)
        return self._run_batch(self.detect_one_resource, resource_inputs)

    def detect_many_buffers(self, buffer_inputs: Sequence[BufferInput]) -> DetectionResult:
        require_inputs(buffer_inputs, "buffer inputs")
        return self._run_batch(self.detect_one_buffer, buffer_inputs)

    def detect_many_mixed(self, descriptors: Sequence[InputDescriptor]) -> DetectionResult:
        """
        Detect a heterogeneous batch.

        The collection is split by source kind and the non-empty partitions
        run concurrently as single-kind batches. Validation of every
        partition happens before any of them starts.
        """
        require_inputs(descriptors, "input descriptors")
        partitions = partition_inputs(descriptors)
        ensure_unique_paths(partitions.paths)
        ensure_distinct_resources(partitions.resources)

        sub_batches: list[Callable[[], DetectionResult]] = []
        if partitions.paths:
            sub_batches.append(lambda: self._run_batch(self.detect_one_path, partitions.paths))
        if partitions.resources:
            sub_batches.append(
                lambda: self._run_batch(self.detect_one_resource, partitions.resources)
            )
        if partitions.buffers:
            sub_batches.append(lambda: self._run_batch(self.detect_one_buffer, partitions.buffers))

        if not sub_batches:
            return {}

        # Sub-batches own their pools, so they never wait on each other's workers
        with ThreadPoolExecutor(
            max_workers=MIXED_BATCH_WORKERS, thread_name_prefix="formatdetect-mixed"
        ) as executor:
            futures = [executor.submit(sub_batch) for sub_batch in sub_batches]
            results = _join(futures)

        return merge_results(*results)

    def _run_batch(self, unit: Callable[[T], Pair], items: Sequence[T]) -> DetectionResult:
        if not items:
            return {}

        workers = min(self.max_workers, len(items))
        logger.debug(f"Dispatching {len(items)} units on {workers} workers")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="formatdetect") as executor:
            futures = [executor.submit(unit, item) for item in items]
            try:
                pairs = _join(futures)
            except Exception as e:
                logger.debug(f"Batch failed: {type(e).__name__}: {e}")
                raise

        return dict(pairs)


__all__ = ["FormatDetector"]
