#!/usr/bin/env python3
"""
Input descriptors for batch detection.

An input descriptor is a tagged reference to one of the three supported
source kinds. Each carries a unique identifier assigned at construction
and the detection policy to apply to it.

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, TypeAlias

from ..exceptions import DetectionArgumentError, InputNotFoundError
from .formats import DetectionPolicy


@dataclass(frozen=True)
class PathInput:
    """File on disk; the detector opens and always closes it."""

    path: str
    policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        if self.path is None or not str(self.path).strip():
            raise DetectionArgumentError("path must not be empty")
        # Accept Path objects but keep the stored value a plain string
        object.__setattr__(self, "path", str(self.path))
        if not Path(self.path).is_file():
            raise InputNotFoundError(f"File was not found: {self.path}")


@dataclass(frozen=True)
class ResourceInput:
    """Open binary resource owned by the caller."""

    resource: BinaryIO
    policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH
    close_resource: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        if self.resource is None:
            raise DetectionArgumentError("resource must not be None")


@dataclass(frozen=True)
class BufferInput:
    """In-memory bytes owned by the caller."""

    buffer: bytes | bytearray | memoryview
    policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        if self.buffer is None or len(self.buffer) == 0:
            raise DetectionArgumentError("buffer must not be empty")


InputDescriptor: TypeAlias = PathInput | ResourceInput | BufferInput
