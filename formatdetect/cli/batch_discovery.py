#!/usr/bin/env python3
"""
formatdetect CLI Batch Discovery Module

Finds the files a batch run should inspect.
"""

from __future__ import annotations

from pathlib import Path

from ..core.extensions import normalize_extension


def _iter_files(directory: Path, recursive: bool) -> list[Path]:
    candidates = directory.rglob("*") if recursive else directory.glob("*")
    return [path for path in candidates if path.is_file()]


def find_files_by_extensions(batch_path: Path, extensions: str, recursive: bool) -> list[Path]:
    """Find files by specified extensions (case-insensitive)"""
    wanted = {normalize_extension(ext) for ext in extensions.split(",") if ext.strip()}
    return [
        path
        for path in _iter_files(batch_path, recursive)
        if normalize_extension(path.suffix) in wanted
    ]


def find_files_to_process(
    batch_path: str | Path,
    extensions: str | None = None,
    recursive: bool = False,
) -> list[Path]:
    """
    Collect non-empty regular files under a directory, sorted by path.

    Args:
        batch_path: Directory to scan
        extensions: Optional comma-separated extensions filter
        recursive: Descend into subdirectories

    Returns:
        Files to inspect; empty files are skipped
    """
    directory = Path(batch_path)
    if extensions:
        files = find_files_by_extensions(directory, extensions, recursive)
    else:
        files = _iter_files(directory, recursive)
    return sorted(path for path in files if path.stat().st_size > 0)


__all__ = ["find_files_by_extensions", "find_files_to_process"]
