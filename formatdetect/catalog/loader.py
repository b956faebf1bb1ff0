#!/usr/bin/env python3
"""
Format Catalog Loader

Parses JSON catalogs into validated, immutable FormatDefinition lists.
Validation happens per record so a failure names the offending index.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..domain.formats import FormatDefinition, Signature
from ..exceptions import CatalogValidationError, ConfigurationError
from ..utils.logger import get_logger
from .schemas import HEX_PATTERN_RE, FormatSchema

logger = get_logger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "default_formats.json"


def parse_hex_pattern(hex_pattern: str) -> bytes:
    """
    Convert a hyphen-separated hex string to bytes.

    Example:
        >>> parse_hex_pattern("49-44-33")
        b'ID3'
    """
    cleaned = hex_pattern.strip() if hex_pattern else ""
    if not HEX_PATTERN_RE.match(cleaned):
        raise ConfigurationError(f"Invalid hex pattern: {hex_pattern!r}")
    return bytes.fromhex(cleaned.replace("-", ""))


def format_hex_pattern(pattern: bytes) -> str:
    """Inverse of parse_hex_pattern, upper-case octets"""
    return "-".join(f"{byte:02X}" for byte in pattern)


def _to_definition(schema: FormatSchema) -> FormatDefinition:
    return FormatDefinition(
        name=schema.name,
        category=schema.category,
        extensions=frozenset(schema.extensions),
        signatures=tuple(
            Signature(offset=sig.offset, pattern=parse_hex_pattern(sig.pattern))
            for sig in schema.signatures
        ),
    )


def load_catalog_from_records(records: Any) -> list[FormatDefinition]:
    """
    Validate already-decoded catalog records.

    Args:
        records: A list of format records (dicts)

    Returns:
        Formats in declared order

    Raises:
        ConfigurationError: If the payload is not a non-empty list
        CatalogValidationError: If a record is invalid
    """
    if not isinstance(records, list):
        raise ConfigurationError("Format catalog must be a JSON array of format records")
    if not records:
        raise ConfigurationError("Format catalog should not be empty")

    formats = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise CatalogValidationError(
                f"Wrong file format for element with index {index}: expected an object",
                index=index,
            )
        try:
            formats.append(_to_definition(FormatSchema.model_validate(record)))
        except ValidationError as e:
            raise CatalogValidationError(
                f"Wrong file format for element with index {index}: {e}", index=index
            ) from e

    logger.debug(f"Loaded {len(formats)} formats")
    return formats


def load_catalog_from_json(content: str) -> list[FormatDefinition]:
    """
    Load a catalog from JSON text.

    Raises:
        ConfigurationError: If the text is not valid JSON or the catalog is empty
        CatalogValidationError: If a record is invalid
    """
    try:
        records = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Format catalog is not valid JSON: {e}") from e
    return load_catalog_from_records(records)


def load_catalog_from_file(path: str | os.PathLike) -> list[FormatDefinition]:
    """
    Load a catalog from a JSON file.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read format catalog {path}: {e}") from e

    logger.debug(f"Loading format catalog from {path}")
    return load_catalog_from_json(content)


def load_default_catalog() -> list[FormatDefinition]:
    """Load the catalog bundled with the package"""
    return load_catalog_from_file(DEFAULT_CATALOG_PATH)


__all__ = [
    "DEFAULT_CATALOG_PATH",
    "format_hex_pattern",
    "load_catalog_from_file",
    "load_catalog_from_json",
    "load_catalog_from_records",
    "load_default_catalog",
    "parse_hex_pattern",
]
