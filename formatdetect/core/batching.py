#!/usr/bin/env python3
"""Batch helpers shared by the blocking and async detectors."""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from ..domain.formats import FormatDefinition
from ..domain.inputs import BufferInput, InputDescriptor, PathInput, ResourceInput
from ..exceptions import DetectionArgumentError, DuplicateInputError, UnsupportedInputError

DetectionResult = dict[uuid.UUID, list[FormatDefinition]]


@dataclass
class InputPartitions:
    """Mixed inputs split by source kind, each keeping input order."""

    paths: list[PathInput] = field(default_factory=list)
    resources: list[ResourceInput] = field(default_factory=list)
    buffers: list[BufferInput] = field(default_factory=list)


def require_inputs(inputs: Sequence | None, name: str) -> None:
    if inputs is None:
        raise DetectionArgumentError(f"{name} must not be None")


def partition_inputs(descriptors: Iterable[InputDescriptor]) -> InputPartitions:
    """Split a mixed collection into its three kind partitions"""
    partitions = InputPartitions()
    for descriptor in descriptors:
        match descriptor:
            case PathInput():
                partitions.paths.append(descriptor)
            case ResourceInput():
                partitions.resources.append(descriptor)
            case BufferInput():
                partitions.buffers.append(descriptor)
            case _:
                raise UnsupportedInputError(
                    f"Cannot detect a supported input object type: {type(descriptor).__name__}"
                )
    return partitions


def path_key(file_path: str) -> str:
    """Comparison key under which two paths count as the same file"""
    return os.path.abspath(file_path).casefold()


def ensure_unique_paths(path_inputs: Sequence[PathInput]) -> None:
    """
    Reject a path batch that names the same file twice.

    Runs before any file is opened so a rejected batch performs no I/O.

    Raises:
        DuplicateInputError: If two entries resolve to the same path
    """
    seen: dict[str, str] = {}
    for item in path_inputs:
        key = path_key(item.path)
        if key in seen:
            raise DuplicateInputError(
                f"Enumeration of file paths contains duplicates: {seen[key]!r} and {item.path!r}"
            )
        seen[key] = item.path


def ensure_distinct_resources(resource_inputs: Sequence[ResourceInput]) -> None:
    """
    Reject a resource batch that hands the same open handle to two units.

    Raises:
        DuplicateInputError: If one resource object appears twice
    """
    seen: set[int] = set()
    for item in resource_inputs:
        handle_id = id(item.resource)
        if handle_id in seen:
            raise DuplicateInputError("Enumeration of resources contains the same handle twice")
        seen.add(handle_id)


def merge_results(*results: Mapping[uuid.UUID, list[FormatDefinition]]) -> DetectionResult:
    """Merge per-kind result maps; identifiers are unique across a batch"""
    merged: DetectionResult = {}
    for result in results:
        merged.update(result)
    return merged


__all__ = [
    "DetectionResult",
    "InputPartitions",
    "ensure_distinct_resources",
    "ensure_unique_paths",
    "merge_results",
    "partition_inputs",
    "path_key",
    "require_inputs",
]
