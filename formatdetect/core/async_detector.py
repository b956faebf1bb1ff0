#!/usr/bin/env python3
"""
formatdetect Async Detector - suspendable batch orchestration

Same operation set and error semantics as FormatDetector. Each item is one
coroutine; blocking reads run in worker threads through asyncio.to_thread
and an asyncio.Semaphore bounds how many run at once.

Every operation takes an optional cancellation signal (an asyncio.Event).
It is observed in two places only: right before a unit starts reading its
source, and while the caller waits at a join barrier. A unit that already
started reading is allowed to finish; the caller then gets
DetectionCancelledError instead of a result.

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import asyncio
import os
import uuid
from collections.abc import Awaitable, Callable, Coroutine, Sequence
from typing import Any, BinaryIO, TypeVar

from ..domain.formats import DetectionPolicy, FormatDefinition
from ..domain.inputs import BufferInput, InputDescriptor, PathInput, ResourceInput
from ..exceptions import DetectionArgumentError, DetectionCancelledError, UnsupportedInputError
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
from .readers import check_path_argument, read_path_window, read_resource_window

logger = get_logger(__name__)

T = TypeVar("T")
Pair = tuple[uuid.UUID, list[FormatDefinition]]


def _raise_if_cancelled(cancel_event: asyncio.Event | None, what: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.info(f"Detection cancelled before {what}")
        raise DetectionCancelledError(f"Detection cancelled before {what}")


async def _join(
    coros: Sequence[Coroutine[Any, Any, T]],
    cancel_event: asyncio.Event | None,
) -> list[T]:
    """
    Run coroutines concurrently and wait for all of them.

    Units always settle before this returns or raises. If the cancellation
    signal fires while waiting, DetectionCancelledError is raised once the
    in-flight units have finished; otherwise the first failure in input
    order is re-raised.
    """
    gathered = asyncio.gather(*coros, return_exceptions=True)
    cancelled_at_barrier = False

    if cancel_event is not None:
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({gathered, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            gathered.cancel()
            raise
        finally:
            waiter.cancel()
        cancelled_at_barrier = gathered not in done

    results = await gathered

    if cancelled_at_barrier:
        logger.info("Detection cancelled while waiting at join barrier")
        raise DetectionCancelledError("Detection cancelled while waiting for batch units")

    for result in results:
        if isinstance(result, BaseException):
            logger.debug(f"Batch failed: {type(result).__name__}: {result}")
            raise result
    return list(results)


class AsyncFormatDetector(FormatDetectorBase):
    """Async detector over paths, open resources and buffers."""

    # Single-source operations

    async def detect_from_path(
        self,
        file_path: str | os.PathLike,
        policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> list[FormatDefinition]:
        """Detect the formats of a file on disk. The file is always closed."""
        check_path_argument(file_path)
        _raise_if_cancelled(cancel_event, f"reading {file_path}")
        window_bytes = await asyncio.to_thread(read_path_window, file_path, self.window)
        return self._match(window_bytes, policy)

    async def detect_from_resource(
        self,
        resource: BinaryIO,
        close_resource: bool = False,
        policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> list[FormatDefinition]:
        """Detect the formats of an open binary resource, read from its absolute start."""
        if resource is None:
            raise DetectionArgumentError("resource must not be None")
        try:
            _raise_if_cancelled(cancel_event, "reading resource")
        except DetectionCancelledError:
            if close_resource:
                resource.close()
            raise
        window_bytes = await asyncio.to_thread(
            read_resource_window, resource, self.window, close_resource
        )
        return self._match(window_bytes, policy)

    async def detect_from_buffer(
        self,
        buffer: bytes | bytearray | memoryview,
        policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> list[FormatDefinition]:
        _raise_if_cancelled(cancel_event, "matching buffer")
        return self._detect_buffer(buffer, policy)

    # Single-item units

    async def detect_one_path(
        self, path_input: PathInput, *, cancel_event: asyncio.Event | None = None
    ) -> Pair:
        if path_input is None:
            raise DetectionArgumentError("path input must not be None")
        result = await self.detect_from_path(
            path_input.path, path_input.policy, cancel_event=cancel_event
        )
        return path_input.id, result

    async def detect_one_resource(
        self, resource_input: ResourceInput, *, cancel_event: asyncio.Event | None = None
    ) -> Pair:
        if resource_input is None:
            raise DetectionArgumentError("resource input must not be None")
        result = await self.detect_from_resource(
            resource_input.resource,
            resource_input.close_resource,
            resource_input.policy,
            cancel_event=cancel_event,
        )
        return resource_input.id, result

    async def detect_one_buffer(
        self, buffer_input: BufferInput, *, cancel_event: asyncio.Event | None = None
    ) -> Pair:
        _raise_if_cancelled(cancel_event, "matching buffer")
        return self._detect_buffer_input(buffer_input)

    async def detect_one_mixed(
        self, descriptor: InputDescriptor, *, cancel_event: asyncio.Event | None = None
    ) -> Pair:
        """Dispatch a single descriptor to the unit for its source kind."""
        match descriptor:
            case PathInput():
                return await self.detect_one_path(descriptor, cancel_event=cancel_event)
            case ResourceInput():
                return await self.detect_one_resource(descriptor, cancel_event=cancel_event)
            case BufferInput():
                return await self.detect_one_buffer(descriptor, cancel_event=cancel_event)
            case _:
                raise UnsupportedInputError(
                    f"Cannot detect a supported input object type: {type(descriptor).__name__}"
                )

    # Batches

    async def detect_many_paths(
        self, path_inputs: Sequence[PathInput], *, cancel_event: asyncio.Event | None = None
    ) -> DetectionResult:
        """
        Detect a batch of files concurrently.

        Raises:
            DuplicateInputError: If two entries name the same file
                (case-insensitive); raised before any file is opened
            DetectionCancelledError: If the cancellation signal is observed
        """
        require_inputs(path_inputs, "path inputs")
        ensure_unique_paths(path_inputs)
        return await self._run_batch(self.detect_one_path, path_inputs, cancel_event)

    async def detect_many_resources(
        self,
        resource_inputs: Sequence[ResourceInput],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        require_inputs(resource_inputs, "resource inputs")
        ensure_distinct_resources(resource_inputs)
        return await self._run_batch(self.detect_one_resource, resource_inputs, cancel_event)

    async def detect_many_buffers(
        self, buffer_inputs: Sequence[BufferInput], *, cancel_event: asyncio.Event | None = None
    ) -> DetectionResult:
        require_inputs(buffer_inputs, "buffer inputs")
        return await self._run_batch(self.detect_one_buffer, buffer_inputs, cancel_event)

    async def detect_many_mixed(
        self,
        descriptors: Sequence[InputDescriptor],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        """Detect a heterogeneous batch; partitions run concurrently after validation."""
        require_inputs(descriptors, "input descriptors")
        partitions = partition_inputs(descriptors)
        ensure_unique_paths(partitions.paths)
        ensure_distinct_resources(partitions.resources)

        sub_batches = []
        if partitions.paths:
            sub_batches.append(
                self._run_batch(self.detect_one_path, partitions.paths, cancel_event)
            )
        if partitions.resources:
            sub_batches.append(
                self._run_batch(self.detect_one_resource, partitions.resources, cancel_event)
            )
        if partitions.buffers:
            sub_batches.append(
                self._run_batch(self.detect_one_buffer, partitions.buffers, cancel_event)
            )

        if not sub_batches:
            return {}

        results = await _join(sub_batches, cancel_event)
        return merge_results(*results)

    async def _run_batch(
        self,
        unit: Callable[..., Awaitable[Pair]],
        items: Sequence[T],
        cancel_event: asyncio.Event | None,
    ) -> DetectionResult:
        if not items:
            return {}

        semaphore = asyncio.Semaphore(min(self.max_workers, len(items)))

        async def bounded(item: T) -> Pair:
            async with semaphore:
                return await unit(item, cancel_event=cancel_event)

        logger.debug(f"Dispatching {len(items)} async units, at most {self.max_workers} at once")
        pairs = await _join([bounded(item) for item in items], cancel_event)
        return dict(pairs)


__all__ = ["AsyncFormatDetector"]
