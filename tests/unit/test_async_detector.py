from __future__ import annotations

import asyncio
import io
import threading

import pytest

from formatdetect.core.async_detector import AsyncFormatDetector
from formatdetect.domain.formats import DetectionPolicy
from formatdetect.domain.inputs import BufferInput, PathInput, ResourceInput
from formatdetect.exceptions import (
    DetectionArgumentError,
    DetectionCancelledError,
    DuplicateInputError,
    InputNotFoundError,
    UnsupportedInputError,
    UnsupportedResourceError,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
ZIP = b"PK\x03\x04" + b"\x00" * 12


class _GatedResource(io.BytesIO):
    """BytesIO whose reads block until released from the test."""

    def __init__(self, data: bytes, release: threading.Event):
        super().__init__(data)
        self.release = release
        self.read_started = threading.Event()
        self.reads_finished = 0

    def read(self, size=-1):
        self.read_started.set()
        self.release.wait(timeout=5)
        data = super().read(size)
        self.reads_finished += 1
        return data


def _names(formats):
    return [fmt.name for fmt in formats]


@pytest.fixture
def async_detector(sample_formats) -> AsyncFormatDetector:
    return AsyncFormatDetector(sample_formats, max_workers=4)


def test_async_single_operations(async_detector, write_bytes):
    path = write_bytes("a.png", PNG)

    async def scenario():
        from_path = await async_detector.detect_from_path(path)
        from_resource = await async_detector.detect_from_resource(io.BytesIO(ZIP))
        from_buffer = await async_detector.detect_from_buffer(PNG, DetectionPolicy.ALL_MATCHES)
        return from_path, from_resource, from_buffer

    from_path, from_resource, from_buffer = asyncio.run(scenario())
    assert _names(from_path) == ["Png"]
    assert _names(from_resource) == ["Zip"]
    assert _names(from_buffer) == ["Png"]


def test_async_matches_blocking_results(async_detector, detector):
    for data in (PNG, ZIP, b"\x00" * 4):
        assert asyncio.run(async_detector.detect_from_buffer(data)) == detector.detect_from_buffer(data)


def test_async_errors_match_blocking(async_detector, tmp_path):
    with pytest.raises(InputNotFoundError):
        asyncio.run(async_detector.detect_from_path(tmp_path / "missing.bin"))
    with pytest.raises(DetectionArgumentError):
        asyncio.run(async_detector.detect_from_buffer(b""))
    with pytest.raises(DetectionArgumentError):
        asyncio.run(async_detector.detect_from_resource(None))


def test_async_detect_one_mixed(async_detector, write_bytes):
    path_input = PathInput(str(write_bytes("b.zip", ZIP)))
    resource_input = ResourceInput(io.BytesIO(PNG), close_resource=True)

    async def scenario():
        return (
            await async_detector.detect_one_mixed(path_input),
            await async_detector.detect_one_mixed(resource_input),
            await async_detector.detect_one_mixed(BufferInput(ZIP)),
        )

    by_path, by_resource, by_buffer = asyncio.run(scenario())
    assert by_path[0] == path_input.id
    assert _names(by_path[1]) == ["Zip"]
    assert _names(by_resource[1]) == ["Png"]
    assert resource_input.resource.closed
    assert _names(by_buffer[1]) == ["Zip"]

    with pytest.raises(UnsupportedInputError):
        asyncio.run(async_detector.detect_one_mixed(object()))


def test_async_detect_many_paths(async_detector, write_bytes):
    inputs = [PathInput(str(write_bytes(f"p{i}.bin", PNG if i % 2 else ZIP))) for i in range(10)]
    result = asyncio.run(async_detector.detect_many_paths(inputs))
    assert len(result) == 10
    assert _names(result[inputs[0].id]) == ["Zip"]
    assert _names(result[inputs[1].id]) == ["Png"]


def test_async_duplicate_paths_rejected(async_detector, write_bytes):
    path = str(write_bytes("same.png", PNG))
    with pytest.raises(DuplicateInputError):
        asyncio.run(async_detector.detect_many_paths([PathInput(path), PathInput(path)]))


def test_async_detect_many_mixed(async_detector, write_bytes):
    path_input = PathInput(str(write_bytes("c.png", PNG)))
    resource_input = ResourceInput(io.BytesIO(ZIP))
    buffer_input = BufferInput(PNG)

    result = asyncio.run(
        async_detector.detect_many_mixed([path_input, resource_input, buffer_input])
    )
    assert set(result) == {path_input.id, resource_input.id, buffer_input.id}
    assert _names(result[resource_input.id]) == ["Zip"]
    assert asyncio.run(async_detector.detect_many_mixed([])) == {}


def test_async_batch_failure_propagates(async_detector):
    closed = io.BytesIO(PNG)
    closed.close()
    inputs = [ResourceInput(io.BytesIO(ZIP)), ResourceInput(closed)]
    with pytest.raises(UnsupportedResourceError):
        asyncio.run(async_detector.detect_many_resources(inputs))


def test_unset_cancel_event_behaves_like_none(async_detector):
    async def scenario():
        cancel = asyncio.Event()
        return await async_detector.detect_many_buffers([BufferInput(PNG)], cancel_event=cancel)

    result = asyncio.run(scenario())
    assert [_names(formats) for formats in result.values()] == [["Png"]]


def test_cancel_before_read(async_detector, write_bytes):
    path = write_bytes("d.png", PNG)

    async def scenario():
        cancel = asyncio.Event()
        cancel.set()
        await async_detector.detect_from_path(path, cancel_event=cancel)

    with pytest.raises(DetectionCancelledError):
        asyncio.run(scenario())


def test_cancel_before_batch_starts(async_detector):
    async def scenario():
        cancel = asyncio.Event()
        cancel.set()
        inputs = [ResourceInput(io.BytesIO(PNG)) for _ in range(3)]
        await async_detector.detect_many_resources(inputs, cancel_event=cancel)

    with pytest.raises(DetectionCancelledError):
        asyncio.run(scenario())


def test_cancel_before_batch_closes_owned_resources(async_detector):
    owned = [ResourceInput(io.BytesIO(PNG), close_resource=True) for _ in range(3)]
    borrowed = ResourceInput(io.BytesIO(ZIP))

    async def scenario():
        cancel = asyncio.Event()
        cancel.set()
        await async_detector.detect_many_resources([*owned, borrowed], cancel_event=cancel)

    with pytest.raises(DetectionCancelledError):
        asyncio.run(scenario())
    assert all(item.resource.closed for item in owned)
    assert not borrowed.resource.closed


def test_path_validation_runs_off_the_event_loop(async_detector, write_bytes, monkeypatch):
    from formatdetect.core import readers

    path = write_bytes("e.png", PNG)
    seen = []
    original = readers.validate_path

    def recording_validate(file_path):
        seen.append(threading.get_ident())
        return original(file_path)

    monkeypatch.setattr(readers, "validate_path", recording_validate)

    async def scenario():
        return threading.get_ident(), await async_detector.detect_from_path(path)

    loop_thread, result = asyncio.run(scenario())
    assert _names(result) == ["Png"]
    assert len(seen) == 1
    assert seen[0] != loop_thread

    with pytest.raises(DetectionArgumentError):
        asyncio.run(async_detector.detect_from_path("  "))


def test_cancel_at_join_barrier_lets_started_read_finish(async_detector):
    release = threading.Event()
    resource = _GatedResource(PNG, release)

    async def scenario():
        cancel = asyncio.Event()
        task = asyncio.create_task(
            async_detector.detect_many_resources([ResourceInput(resource)], cancel_event=cancel)
        )
        while not resource.read_started.is_set():
            await asyncio.sleep(0.01)
        cancel.set()
        await asyncio.sleep(0.05)
        release.set()
        await task

    with pytest.raises(DetectionCancelledError):
        asyncio.run(scenario())
    assert resource.reads_finished >= 1
