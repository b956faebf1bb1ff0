#!/usr/bin/env python3
"""
Format Catalog Schemas

Pydantic models for serialized format catalogs. Records use the keys
name, category, extensions and signatures ({offset, pattern}); the
PascalCase keys of older catalogs (Name, Type, Extensions,
FormatSignatures, Offset, Hex) are accepted as aliases.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

HEX_PATTERN_RE = re.compile(r"^[0-9A-Fa-f]{2}(-[0-9A-Fa-f]{2})*$")


class SignatureSchema(BaseModel):
    """
    One byte pattern at a fixed offset.

    Attributes:
        offset: Absolute offset of the first pattern byte
        pattern: Hyphen-separated hexadecimal octets, e.g. "89-50-4E-47"

    Example:
        >>> SignatureSchema(offset=0, pattern="89-50-4e-47").pattern
        '89-50-4E-47'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    offset: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("offset", "Offset"),
        description="Absolute offset of the pattern",
    )

    pattern: str = Field(
        ...,
        validation_alias=AliasChoices("pattern", "hex", "Hex"),
        description="Hyphen-separated hexadecimal octets",
    )

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Only hex digits and the dash separator are allowed"""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("pattern should not be null or empty for file signature")
        if not HEX_PATTERN_RE.match(cleaned):
            raise ValueError(f"pattern must be hyphen-separated hex octets, got {v!r}")
        return cleaned.upper()


class FormatSchema(BaseModel):
    """
    One catalog record.

    Attributes:
        name: Format name, unique within a catalog by convention
        category: Broad family such as "Audio" or "Image"
        extensions: File extensions associated with the format
        signatures: All of these must match for the format to match
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., validation_alias=AliasChoices("name", "Name"))

    category: str = Field(..., validation_alias=AliasChoices("category", "type", "Type"))

    extensions: list[str] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("extensions", "Extensions"),
    )

    signatures: list[SignatureSchema] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("signatures", "FormatSignatures", "formatSignatures"),
    )

    @field_validator("name", "category")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("property should not be null or empty for file format")
        return v.strip()

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lowercase extensions without leading dots; blanks are rejected"""
        normalized = []
        for extension in v:
            cleaned = extension.strip().lstrip(".").lower() if extension else ""
            if not cleaned:
                raise ValueError("extensions should not contain empty entries")
            normalized.append(cleaned)
        return normalized
