#!/usr/bin/env python3
"""
formatdetect CLI Display Module

Rich tables, JSON output and the banner for detection results.

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

import json
import sys
import traceback
from collections.abc import Sequence
from typing import IO, Any, cast

import pyfiglet
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .runner import FileReport


class _StdoutProxy:
    def write(self, data: str) -> int:
        return sys.stdout.write(data)

    def flush(self) -> None:
        sys.stdout.flush()

    def isatty(self) -> bool:
        return sys.stdout.isatty()

    @property
    def encoding(self) -> str:
        return getattr(sys.stdout, "encoding", "utf-8")

    @property
    def errors(self) -> str:
        return getattr(sys.stdout, "errors", "strict")


console = Console(file=cast(IO[str], _StdoutProxy()))

UNKNOWN_FORMAT = "[dim]unknown[/dim]"
EXTENSION_OK = "[green]✓ match[/green]"
EXTENSION_MISMATCH = "[red]✗ mismatch[/red]"
EXTENSION_NA = "[dim]-[/dim]"


def print_banner() -> None:
    """Print formatdetect banner"""
    banner = pyfiglet.figlet_format("formatdetect", font="slant")
    console.print(f"[bold blue]{banner}[/bold blue]")
    console.print("[bold]File format detection by byte signatures[/bold]\n")


def display_validation_errors(validation_errors: list[str]) -> None:
    """Display validation errors"""
    for error in validation_errors:
        console.print(f"[red]Error: {escape(error)}[/red]")


def _extension_cell(extension_match: bool | None) -> str:
    if extension_match is None:
        return EXTENSION_NA
    return EXTENSION_OK if extension_match else EXTENSION_MISMATCH


def create_results_table(reports: Sequence[FileReport]) -> Table:
    """One row per input with its detected formats"""
    table = Table(title="Detection Results", show_header=True, expand=True)
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Format", style="bold")
    table.add_column("Category", style="magenta")
    table.add_column("Extension", justify="center")

    for report in reports:
        if report.formats:
            names = ", ".join(fmt.name for fmt in report.formats)
            categories = ", ".join(dict.fromkeys(fmt.category for fmt in report.formats))
        else:
            names, categories = UNKNOWN_FORMAT, ""
        table.add_row(
            escape(str(report.path)), names, categories, _extension_cell(report.extension_match)
        )

    return table


def display_results(reports: Sequence[FileReport], elapsed_time: float | None = None) -> None:
    console.print(create_results_table(reports))

    detected = sum(1 for report in reports if report.formats)
    mismatched = sum(1 for report in reports if report.extension_match is False)
    console.print(f"[green]Detected: {detected}/{len(reports)} files[/green]")
    if mismatched:
        console.print(f"[yellow]Extension mismatches: {mismatched}[/yellow]")
    if elapsed_time is not None:
        console.print(f"[blue]Time: {elapsed_time:.2f}s[/blue]")


def results_to_json(reports: Sequence[FileReport], indent: int = 2) -> str:
    payload: list[dict[str, Any]] = [report.to_dict() for report in reports]
    return json.dumps(payload, indent=indent or None)


def display_json(reports: Sequence[FileReport], indent: int = 2) -> None:
    # Plain print keeps the JSON free of rich markup and wrapping
    print(results_to_json(reports, indent))


def display_no_files_message(extensions: str | None) -> None:
    if extensions:
        console.print(f"[yellow]No files found with extensions: {extensions}[/yellow]")
    else:
        console.print("[yellow]No files found in the directory[/yellow]")


def handle_main_error(e: Exception, verbose: bool) -> None:
    """Print the error and exit with status 1"""
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    if verbose:
        traceback.print_exc()
    sys.exit(1)


__all__ = [
    "console",
    "create_results_table",
    "display_json",
    "display_no_files_message",
    "display_results",
    "display_validation_errors",
    "handle_main_error",
    "print_banner",
    "results_to_json",
]
