#!/usr/bin/env python3
"""Typed models for format catalogs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DetectionPolicy(Enum):
    """Whether detection stops at the first matching format or collects all"""

    FIRST_MATCH = "first_match"
    ALL_MATCHES = "all_matches"


@dataclass(frozen=True)
class Signature:
    """Byte pattern expected at a fixed absolute offset."""

    offset: int
    pattern: bytes

    @property
    def end(self) -> int:
        """Absolute offset one past the last pattern byte."""
        return self.offset + len(self.pattern)

    @property
    def hex(self) -> str:
        return "-".join(f"{byte:02X}" for byte in self.pattern)


@dataclass(frozen=True)
class FormatDefinition:
    """A catalog entry; matches only when every signature matches."""

    name: str
    category: str
    extensions: frozenset[str]
    signatures: tuple[Signature, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        first = self.signatures[0].hex if self.signatures else ""
        return f"{self.name} - {{{first}}}"

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "category": self.category,
            "extensions": sorted(self.extensions),
            "signatures": [
                {"offset": signature.offset, "pattern": signature.hex}
                for signature in self.signatures
            ],
        }
