#!/usr/bin/env python3
"""
formatdetect Input Adapters - turn paths, open resources and buffers into windows

All three source kinds produce the bytes of the detection window, read
from the absolute start of the source regardless of its current
position, so signature offsets keep their meaning. Short sources are not
an error; the matcher treats the truncated window as a miss.

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

import io
import os
from pathlib import Path
from typing import BinaryIO

from ..exceptions import DetectionArgumentError, InputNotFoundError, UnsupportedResourceError
from ..utils.logger import get_logger
from .window import DetectionWindow

logger = get_logger(__name__)


def check_path_argument(file_path: str | os.PathLike | None) -> None:
    """Reject a missing or blank path without touching the filesystem."""
    if file_path is None or not str(file_path).strip():
        raise DetectionArgumentError("file path must not be empty")


def validate_path(file_path: str | os.PathLike | None) -> Path:
    """
    Validate a path input before opening it.

    Args:
        file_path: Path to the file to inspect

    Returns:
        Path object for the file

    Raises:
        DetectionArgumentError: If the path is missing or blank
        InputNotFoundError: If the path does not name an existing regular file
    """
    check_path_argument(file_path)

    path = Path(file_path)
    if not path.exists():
        raise InputNotFoundError(f"File was not found: {file_path}")
    if not path.is_file():
        raise InputNotFoundError(f"Path is not a file: {file_path}")
    return path


def _is_seekable(resource: BinaryIO) -> bool:
    seekable = getattr(resource, "seekable", None)
    try:
        return bool(seekable()) if seekable is not None else False
    except (OSError, ValueError):
        return False


def validate_resource(resource: BinaryIO | None) -> None:
    """
    Validate an open resource before reading.

    Emptiness is not probed here; it shows up as an empty read.

    Raises:
        DetectionArgumentError: If the resource is None
        UnsupportedResourceError: If it is closed, text-mode, unreadable, or
            positioned off zero without seek support
    """
    if resource is None:
        raise DetectionArgumentError("resource must not be None")

    if getattr(resource, "closed", False):
        raise UnsupportedResourceError("Resource cannot be processed because it is closed")

    if isinstance(resource, io.TextIOBase):
        raise UnsupportedResourceError(
            "Resource cannot be processed because it is opened in text mode"
        )

    readable = getattr(resource, "readable", None)
    if readable is None or not readable():
        raise UnsupportedResourceError(
            "Resource cannot be processed because it does not support reading"
        )

    if _is_seekable(resource):
        return

    try:
        position = resource.tell()
    except (OSError, ValueError) as e:
        raise UnsupportedResourceError(
            "Resource cannot be processed because its position is unknown "
            "and it does not support seek"
        ) from e

    if position != 0:
        raise UnsupportedResourceError(
            "Resource cannot be processed because position is not on zero index "
            "and it does not support seek"
        )


def _read_up_to(resource: BinaryIO, count: int) -> bytes:
    """Read until count bytes are collected or the resource is exhausted"""
    chunks = []
    remaining = count
    while remaining > 0:
        chunk = resource.read(remaining)
        if not chunk:
            break
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            raise UnsupportedResourceError(
                f"Resource cannot be processed because read returned {type(chunk).__name__}, "
                "not bytes"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _read_seekable_window(resource: BinaryIO, window: DetectionWindow) -> bytes:
    """Seek straight to min_offset and read only the window."""
    resource.seek(window.min_offset)
    data = _read_up_to(resource, window.length)
    if not data and window.min_offset > 0:
        # Shorter than min_offset is a miss; only zero length is an error
        resource.seek(0)
        if _read_up_to(resource, 1):
            return data
    if not data:
        raise DetectionArgumentError("resource must not be empty")
    return data


def _read_forward_window(resource: BinaryIO, window: DetectionWindow) -> bytes:
    """Read up to reach from position zero and drop the bytes before min_offset."""
    data = _read_up_to(resource, window.reach)
    if not data:
        raise DetectionArgumentError("resource must not be empty")
    return data[window.min_offset :]


def read_resource_window(
    resource: BinaryIO,
    window: DetectionWindow,
    close_resource: bool = False,
) -> memoryview:
    """
    Read the detection window from an open resource.

    Args:
        resource: Readable binary resource
        window: Detection window of the catalog
        close_resource: Close the resource once the window is read

    Returns:
        Window bytes starting at absolute offset window.min_offset
    """
    try:
        validate_resource(resource)

        if _is_seekable(resource):
            data = _read_seekable_window(resource, window)
        else:
            data = _read_forward_window(resource, window)

        if len(data) < window.length:
            logger.debug(f"Short read: {len(data)} of {window.length} window bytes")

        return memoryview(data)
    finally:
        if close_resource and resource is not None:
            resource.close()


def read_path_window(file_path: str | os.PathLike, window: DetectionWindow) -> memoryview:
    """
    Read the detection window from a file on disk. The file is always closed.

    Raises:
        DetectionArgumentError: If the path is blank or the file is empty
        InputNotFoundError: If the file does not exist
    """
    path = validate_path(file_path)
    with open(path, "rb") as handle:
        return read_resource_window(handle, window)


def buffer_window(buffer: bytes | bytearray | memoryview | None, window: DetectionWindow) -> memoryview:
    """
    View the detection window of an in-memory buffer without copying it.

    Buffers exported with a wider item format (array('H'), typed memoryviews)
    are viewed as raw bytes so offsets stay byte offsets.

    Raises:
        DetectionArgumentError: If the buffer is None or empty
    """
    if buffer is None:
        raise DetectionArgumentError("buffer must not be empty")
    view = memoryview(buffer).cast("B")
    if view.nbytes == 0:
        raise DetectionArgumentError("buffer must not be empty")
    return view[window.min_offset : window.reach]


__all__ = [
    "buffer_window",
    "check_path_argument",
    "read_path_window",
    "read_resource_window",
    "validate_path",
    "validate_resource",
]
