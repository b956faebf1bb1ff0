from __future__ import annotations

import io
from array import array

import pytest

from formatdetect.core.readers import (
    buffer_window,
    read_path_window,
    read_resource_window,
    validate_path,
    validate_resource,
)
from formatdetect.core.window import DetectionWindow
from formatdetect.exceptions import (
    DetectionArgumentError,
    InputNotFoundError,
    UnsupportedResourceError,
)

WINDOW = DetectionWindow(min_offset=0, length=4)


class _ForwardOnly(io.RawIOBase):
    """Readable stream without seek support."""

    def __init__(self, data: bytes, position: int = 0, tell_fails: bool = False):
        self._data = data
        self._pos = position
        self._tell_fails = tell_fails

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def tell(self) -> int:
        if self._tell_fails:
            raise OSError("tell not supported")
        return self._pos

    def readinto(self, buffer) -> int:
        chunk = self._data[self._pos : self._pos + len(buffer)]
        buffer[: len(chunk)] = chunk
        self._pos += len(chunk)
        return len(chunk)


class _Trickle(io.RawIOBase):
    """Returns at most one byte per read call."""

    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def tell(self) -> int:
        return self._pos

    def readinto(self, buffer) -> int:
        if self._pos >= len(self._data) or not len(buffer):
            return 0
        buffer[0] = self._data[self._pos]
        self._pos += 1
        return 1


def test_validate_path_rejects_blank_and_missing(tmp_path):
    with pytest.raises(DetectionArgumentError):
        validate_path("")
    with pytest.raises(DetectionArgumentError):
        validate_path("   ")
    with pytest.raises(InputNotFoundError):
        validate_path(tmp_path / "missing.bin")
    with pytest.raises(InputNotFoundError):
        validate_path(tmp_path)


def test_input_not_found_is_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        validate_path(tmp_path / "missing.bin")


def test_read_path_window_reads_from_start(write_bytes):
    path = write_bytes("sample.bin", b"ABCDEFGH")
    assert bytes(read_path_window(path, WINDOW)) == b"ABCD"


def test_read_path_window_rejects_empty_file(write_bytes):
    path = write_bytes("empty.bin", b"")
    with pytest.raises(DetectionArgumentError):
        read_path_window(path, WINDOW)


def test_read_path_window_short_file_returns_short_window(write_bytes):
    path = write_bytes("short.bin", b"AB")
    assert bytes(read_path_window(path, WINDOW)) == b"AB"


def test_window_slice_starts_at_min_offset(write_bytes):
    window = DetectionWindow(min_offset=2, length=3)
    path = write_bytes("offset.bin", b"0123456789")
    assert bytes(read_path_window(path, window)) == b"234"
    assert bytes(buffer_window(b"0123456789", window)) == b"234"
    assert bytes(read_resource_window(io.BytesIO(b"0123456789"), window)) == b"234"


def test_resource_is_read_from_absolute_start():
    resource = io.BytesIO(b"ABCDEFGH")
    resource.seek(5)
    assert bytes(read_resource_window(resource, WINDOW)) == b"ABCD"
    assert not resource.closed


def test_resource_closed_only_when_requested():
    resource = io.BytesIO(b"ABCDEFGH")
    read_resource_window(resource, WINDOW, close_resource=True)
    assert resource.closed


def test_resource_closed_on_failure_when_requested():
    resource = io.BytesIO(b"")
    with pytest.raises(DetectionArgumentError):
        read_resource_window(resource, WINDOW, close_resource=True)
    assert resource.closed


def test_closed_resource_is_unsupported():
    resource = io.BytesIO(b"ABCD")
    resource.close()
    with pytest.raises(UnsupportedResourceError):
        validate_resource(resource)


def test_unreadable_resource_is_unsupported(tmp_path):
    with open(tmp_path / "out.bin", "wb") as handle:
        with pytest.raises(UnsupportedResourceError):
            validate_resource(handle)


def test_none_resource_is_argument_error():
    with pytest.raises(DetectionArgumentError):
        validate_resource(None)


def test_empty_seekable_resource_is_argument_error():
    with pytest.raises(DetectionArgumentError):
        read_resource_window(io.BytesIO(), WINDOW)


def test_text_mode_resource_is_unsupported(write_bytes):
    path = write_bytes("text.txt", b"%PDF-1.7 plain text")
    with open(path, "r") as handle:
        with pytest.raises(UnsupportedResourceError, match="text mode"):
            read_resource_window(handle, WINDOW)


def test_resource_returning_str_is_unsupported():
    class _StrReader(_ForwardOnly):
        def read(self, size=-1):
            return "ABCD"

    with pytest.raises(UnsupportedResourceError, match="not bytes"):
        read_resource_window(_StrReader(b""), WINDOW)


class _Recording(io.BytesIO):
    """BytesIO that records seek calls and read sizes."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.seeks = []
        self.reads = []

    def seek(self, offset, whence=io.SEEK_SET):
        self.seeks.append((offset, whence))
        return super().seek(offset, whence)

    def read(self, size=-1):
        self.reads.append(size)
        return super().read(size)


def test_seekable_resource_is_never_sized_by_seeking_to_end():
    resource = _Recording(b"ABCDEFGH")
    validate_resource(resource)
    read_resource_window(resource, WINDOW)
    assert all(whence != io.SEEK_END for _, whence in resource.seeks)


def test_seekable_resource_reads_only_the_window():
    window = DetectionWindow(min_offset=4, length=2)
    resource = _Recording(b"0123456789")
    assert bytes(read_resource_window(resource, window)) == b"45"
    assert resource.seeks[0] == (4, io.SEEK_SET)
    assert sum(resource.reads) == 2


def test_resource_shorter_than_min_offset_is_short_not_empty():
    window = DetectionWindow(min_offset=4, length=2)
    assert bytes(read_resource_window(io.BytesIO(b"01"), window)) == b""
    with pytest.raises(DetectionArgumentError):
        read_resource_window(io.BytesIO(b""), window)


def test_validate_keeps_resource_position():
    resource = io.BytesIO(b"ABCDEFGH")
    resource.seek(3)
    validate_resource(resource)
    assert resource.tell() == 3


def test_non_seekable_resource_at_zero_is_read():
    assert bytes(read_resource_window(_ForwardOnly(b"ABCDEF"), WINDOW)) == b"ABCD"


def test_non_seekable_resource_off_zero_is_unsupported():
    with pytest.raises(UnsupportedResourceError, match="not on zero index"):
        read_resource_window(_ForwardOnly(b"ABCDEF", position=2), WINDOW)


def test_non_seekable_resource_with_unknown_position_is_unsupported():
    with pytest.raises(UnsupportedResourceError, match="position is unknown"):
        read_resource_window(_ForwardOnly(b"ABCDEF", tell_fails=True), WINDOW)


def test_partial_reads_are_collected_up_to_window():
    assert bytes(read_resource_window(_Trickle(b"ABCDEF"), WINDOW)) == b"ABCD"


def test_buffer_window_does_not_copy():
    data = bytearray(b"ABCDEFGH")
    view = buffer_window(data, WINDOW)
    data[0] = ord("Z")
    assert bytes(view) == b"ZBCD"


def test_buffer_window_views_wide_item_buffers_as_bytes():
    data = array("H")
    data.frombytes(b"ABCDEFGH")
    view = buffer_window(memoryview(data), WINDOW)
    assert view.format == "B"
    assert bytes(view) == b"ABCD"


def test_buffer_window_rejects_empty_and_none():
    with pytest.raises(DetectionArgumentError):
        buffer_window(b"", WINDOW)
    with pytest.raises(DetectionArgumentError):
        buffer_window(None, WINDOW)
