#!/usr/bin/env python3
"""
formatdetect Catalog Module

Copyright (C) 2025 Marc Rivero Lopez
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .accessors import FormatCatalog
from .loader import (
    DEFAULT_CATALOG_PATH,
    format_hex_pattern,
    load_catalog_from_file,
    load_catalog_from_json,
    load_catalog_from_records,
    load_default_catalog,
    parse_hex_pattern,
)
from .schemas import FormatSchema, SignatureSchema

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "FormatCatalog",
    "FormatSchema",
    "SignatureSchema",
    "format_hex_pattern",
    "load_catalog_from_file",
    "load_catalog_from_json",
    "load_catalog_from_records",
    "load_default_catalog",
    "parse_hex_pattern",
]
