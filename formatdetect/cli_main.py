#!/usr/bin/env python3
"""
formatdetect CLI - Command Line Interface

This module provides the Click-based CLI entry point for formatdetect.

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

import logging
import sys
import time
from dataclasses import dataclass
from typing import Any

import click

from .__version__ import __version__
from .cli.batch_discovery import find_files_to_process
from .cli.display import (
    console,
    display_json,
    display_no_files_message,
    display_results,
    display_validation_errors,
    handle_main_error,
    print_banner,
)
from .cli.runner import FileReport, build_detector, run_detection
from .cli.validators import validate_input_mode, validate_inputs
from .config import Config
from .domain.formats import DetectionPolicy
from .utils.logger import configure_batch_logging, reset_logging_levels, setup_logger

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_EXTENSION_MISMATCH = 2


@dataclass
class CLIArgs:
    paths: tuple[str, ...]
    catalog: str | None
    all_matches: bool
    batch: str | None
    recursive: bool
    extensions: str | None
    threads: int | None
    output_json: bool
    strict: bool
    config: str | None
    verbose: bool
    quiet: bool
    version: bool


def main(**kwargs: Any):
    """
    formatdetect - Detect file formats from fixed-offset byte signatures.
    """
    args = CLIArgs(**kwargs)
    try:
        run_cli(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Detection interrupted by user[/yellow]")
        sys.exit(EXIT_ERROR)
    except Exception as e:
        handle_main_error(e, args.verbose)


@click.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--catalog", type=click.Path(), help="JSON format catalog (default: bundled)")
@click.option(
    "--all", "all_matches", is_flag=True, help="Report every matching format, not only the first"
)
@click.option("--batch", "--directory", type=click.Path(), help="Detect all files in directory")
@click.option("-r", "--recursive", is_flag=True, help="Descend into subdirectories in batch mode")
@click.option(
    "--extensions",
    help="File extensions to process in batch mode (comma-separated). Default: all files",
)
@click.option(
    "--threads",
    default=None,
    type=click.IntRange(1, 64),
    help="Number of parallel workers (1-64, default: derived from CPU count)",
)
@click.option("-j", "--json", "output_json", is_flag=True, help="Output results as JSON")
@click.option(
    "--strict", is_flag=True, help="Exit with status 2 when a file suffix disagrees with its format"
)
@click.option("--config", help="Custom config file path")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--quiet", is_flag=True, help="Suppress non-critical output")
@click.option("--version", is_flag=True, help="Show version information and exit")
def cli(**kwargs: Any):
    """Click-based CLI entry point."""
    main(**kwargs)


def run_cli(args: CLIArgs) -> None:
    """Primary CLI workflow separated for clarity and testability."""
    if args.version:
        console.print(f"formatdetect {__version__}")
        sys.exit(EXIT_OK)

    validation_errors = validate_input_mode(args.paths, args.batch)
    validation_errors.extend(
        validate_inputs(args.paths, args.batch, args.catalog, args.config, args.extensions)
    )
    if validation_errors:
        display_validation_errors(validation_errors)
        sys.exit(EXIT_ERROR)

    config = Config(args.config)
    _setup_logging(config, args.verbose, args.quiet)

    show_decorations = not args.output_json and not args.quiet
    if show_decorations:
        print_banner()

    files = list(args.paths)
    if args.batch:
        discovered = find_files_to_process(args.batch, args.extensions, args.recursive)
        files = [str(path) for path in discovered]
        if not files:
            if not args.quiet:
                display_no_files_message(args.extensions)
            sys.exit(EXIT_OK)

    policy = config.typed_config.detection.policy
    if args.all_matches:
        policy = DetectionPolicy.ALL_MATCHES
    detector = build_detector(config, args.catalog, args.threads)

    reports = _detect(detector, files, policy, args, config, show_decorations)

    if args.output_json:
        display_json(reports, config.typed_config.output.json_indent)
    elif not args.quiet:
        display_results(reports)

    sys.exit(_exit_code(reports, args.strict))


def _setup_logging(config: Config, verbose: bool, quiet: bool) -> None:
    logging_config = config.typed_config.logging
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging_config.numeric_level
    setup_logger(level=level, log_dir=logging_config.log_dir)


def _detect(detector, files, policy, args: CLIArgs, config: Config, show_decorations: bool):
    quiet_batch = len(files) > 1 and not args.verbose
    show_progress = show_decorations and len(files) > 1 and config.typed_config.output.show_progress

    if quiet_batch:
        configure_batch_logging()
    try:
        start_time = time.time()
        reports = run_detection(
            detector, files, policy, console=console if show_progress else None
        )
        if args.verbose:
            console.print(f"[blue]Detection took {time.time() - start_time:.2f}s[/blue]")
        return reports
    finally:
        if quiet_batch:
            reset_logging_levels()


def _exit_code(reports: list[FileReport], strict: bool) -> int:
    if strict and any(report.extension_match is False for report in reports):
        return EXIT_EXTENSION_MISMATCH
    return EXIT_OK


if __name__ == "__main__":
    cli()
