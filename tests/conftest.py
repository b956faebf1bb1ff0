"""Pytest configuration for shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from formatdetect.core.detector import FormatDetector
from formatdetect.domain.formats import FormatDefinition, Signature

PNG_HEADER = b"\x89PNG\r\n\x1a\n"
ZIP_HEADER = b"PK\x03\x04"
MP3_HEADER = b"ID3"


def make_format(name: str, category: str, extensions, *signatures: tuple[int, bytes]):
    return FormatDefinition(
        name=name,
        category=category,
        extensions=frozenset(extensions),
        signatures=tuple(Signature(offset, pattern) for offset, pattern in signatures),
    )


def wav_bytes(size: int = 44) -> bytes:
    data = bytearray(size)
    data[0:4] = b"RIFF"
    data[8:12] = b"WAVE"
    return bytes(data)


@pytest.fixture
def format_factory():
    return make_format


@pytest.fixture
def wav_sample() -> bytes:
    return wav_bytes()


@pytest.fixture
def png_format() -> FormatDefinition:
    return make_format("Png", "Image", ["png"], (0, PNG_HEADER))


@pytest.fixture
def zip_format() -> FormatDefinition:
    return make_format("Zip", "Archive", ["zip"], (0, ZIP_HEADER))


@pytest.fixture
def mp3_format() -> FormatDefinition:
    return make_format("Mp3", "Audio", ["mp3"], (0, MP3_HEADER))


@pytest.fixture
def wav_format() -> FormatDefinition:
    return make_format("Wav", "Audio", ["wav"], (0, b"RIFF"), (8, b"WAVE"))


@pytest.fixture
def sample_formats(png_format, zip_format, mp3_format, wav_format) -> list[FormatDefinition]:
    return [png_format, zip_format, mp3_format, wav_format]


@pytest.fixture
def detector(sample_formats) -> FormatDetector:
    return FormatDetector(sample_formats, max_workers=4)


@pytest.fixture(autouse=True)
def clear_worker_cap(monkeypatch) -> None:
    """Worker counts in tests never depend on the caller's environment."""
    monkeypatch.delenv("FORMATDETECT_MAX_WORKERS", raising=False)


@pytest.fixture
def write_bytes(tmp_path: Path):
    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write
