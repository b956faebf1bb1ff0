#!/usr/bin/env python3
"""
formatdetect CLI Input Validation Module

Collects every problem with the command-line inputs before any detection
runs, so they can be reported together.
"""

from pathlib import Path


def validate_inputs(
    paths: tuple[str, ...],
    batch: str | None,
    catalog: str | None,
    config: str | None,
    extensions: str | None,
) -> list[str]:
    """
    Validate all user inputs.

    Returns:
        List of validation error messages (empty if all valid)
    """
    errors: list[str] = []

    for path in paths:
        errors.extend(validate_file_input(path))
    errors.extend(validate_batch_input(batch))
    errors.extend(validate_json_file_input(catalog, "Catalog"))
    errors.extend(validate_json_file_input(config, "Config"))
    errors.extend(validate_extensions_input(extensions))

    return errors


def validate_file_input(filename: str) -> list[str]:
    errors: list[str] = []
    file_path = Path(filename)
    if not file_path.exists():
        errors.append(f"File does not exist: {filename}")
    elif not file_path.is_file():
        errors.append(f"Path is not a regular file: {filename}")
    elif file_path.stat().st_size == 0:
        errors.append(f"File is empty: {filename}")
    return errors


def validate_batch_input(batch: str | None) -> list[str]:
    errors: list[str] = []
    if batch:
        batch_path = Path(batch)
        if not batch_path.exists():
            errors.append(f"Batch directory does not exist: {batch}")
        elif not batch_path.is_dir():
            errors.append(f"Batch path is not a directory: {batch}")
    return errors


def validate_json_file_input(path: str | None, label: str) -> list[str]:
    errors: list[str] = []
    if path:
        json_path = Path(path)
        if not json_path.exists():
            errors.append(f"{label} file does not exist: {path}")
        elif not json_path.is_file():
            errors.append(f"{label} path is not a file: {path}")
        elif json_path.suffix.lower() != ".json":
            errors.append(f"{label} file must be JSON: {path}")
    return errors


def validate_extensions_input(extensions: str | None) -> list[str]:
    """
    Validate file extensions input.

    Args:
        extensions: Comma-separated file extensions

    Returns:
        List of validation error messages (empty if valid)
    """
    errors: list[str] = []
    if extensions:
        ext_list = [ext.strip() for ext in extensions.split(",")]
        for ext in ext_list:
            if not ext.replace(".", "").replace("_", "").replace("-", "").isalnum():
                errors.append(f"Invalid file extension: {ext}")
            if len(ext) > 10:
                errors.append(f"File extension too long: {ext}")
    return errors


def validate_input_mode(paths: tuple[str, ...], batch: str | None) -> list[str]:
    """Either file paths or a batch directory, not both"""
    if not paths and not batch:
        return ["Must provide either file paths or a --batch directory"]
    if paths and batch:
        return ["Cannot use both file paths and --batch mode simultaneously"]
    return []
