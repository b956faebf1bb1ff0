#!/usr/bin/env python3
"""
formatdetect CLI Detection Runner

Builds a detector from configuration and runs it over the selected files.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeRemainingColumn

from ..catalog.loader import load_catalog_from_file, load_default_catalog
from ..config import Config
from ..core.batching import ensure_unique_paths
from ..core.detector import FormatDetector
from ..core.extensions import check_extension
from ..domain.formats import DetectionPolicy, FormatDefinition
from ..domain.inputs import PathInput
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class FileReport:
    """Detection outcome for one file"""

    path: Path
    formats: list[FormatDefinition] = field(default_factory=list)
    extension_match: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": str(self.path),
            "formats": [fmt.to_dict() for fmt in self.formats],
            "extension_match": self.extension_match,
        }


def build_detector(
    config: Config,
    catalog_path: str | None = None,
    threads: int | None = None,
) -> FormatDetector:
    """Detector over the requested catalog: explicit path, configured path, or bundled"""
    catalog_path = catalog_path or config.get_catalog_path()
    if catalog_path:
        formats = load_catalog_from_file(catalog_path)
    else:
        formats = load_default_catalog()
    return FormatDetector(formats, max_workers=config.effective_max_workers(threads))


def _chunks(items: Sequence[PathInput], size: int) -> list[Sequence[PathInput]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def run_detection(
    detector: FormatDetector,
    files: Sequence[str | Path],
    policy: DetectionPolicy = DetectionPolicy.FIRST_MATCH,
    console: Console | None = None,
) -> list[FileReport]:
    """
    Detect every file and report in input order.

    With a console, progress is shown and files are submitted one
    worker-sized chunk at a time so the bar can advance.
    """
    inputs = [PathInput(str(path), policy) for path in files]
    ensure_unique_paths(inputs)

    results: dict = {}
    if console is None:
        results = detector.detect_many_paths(inputs)
    else:
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Detecting formats...", total=len(inputs))
            for chunk in _chunks(inputs, detector.max_workers):
                results.update(detector.detect_many_paths(chunk))
                progress.advance(task, len(chunk))

    reports = []
    for item in inputs:
        formats = results[item.id]
        reports.append(FileReport(Path(item.path), formats, check_extension(item.path, formats)))

    logger.debug(f"Detected formats for {len(reports)} files")
    return reports


__all__ = ["FileReport", "build_detector", "run_detection"]
