#!/usr/bin/env python3
"""
Named access to a loaded format catalog.

FormatCatalog keeps catalog order and offers case-insensitive lookup by
name, either as an item (catalog["Mp3"]) or an attribute (catalog.mp3).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from ..core.extensions import normalize_extension
from ..domain.formats import FormatDefinition
from ..exceptions import ConfigurationError
from .loader import load_catalog_from_file, load_default_catalog


def _key(name: str) -> str:
    return name.strip().casefold()


class FormatCatalog(Sequence[FormatDefinition]):
    """Ordered, read-only collection of formats with lookups by name, category and extension."""

    def __init__(self, formats: Iterable[FormatDefinition]):
        self._formats: tuple[FormatDefinition, ...] = tuple(formats)
        self._by_name: dict[str, FormatDefinition] = {}
        for fmt in self._formats:
            # First declaration wins, as in catalog-order matching
            self._by_name.setdefault(_key(fmt.name), fmt)

    @classmethod
    def default(cls) -> FormatCatalog:
        return cls(load_default_catalog())

    @classmethod
    def from_file(cls, path) -> FormatCatalog:
        return cls(load_catalog_from_file(path))

    @overload
    def __getitem__(self, key: int) -> FormatDefinition: ...

    @overload
    def __getitem__(self, key: slice) -> tuple[FormatDefinition, ...]: ...

    @overload
    def __getitem__(self, key: str) -> FormatDefinition: ...

    def __getitem__(self, key):
        if isinstance(key, str):
            try:
                return self._by_name[_key(key)]
            except KeyError:
                raise KeyError(f"Unknown format: {key}") from None
        return self._formats[key]

    def __getattr__(self, name: str) -> FormatDefinition:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._by_name[_key(name)]
        except KeyError:
            raise AttributeError(f"{type(self).__name__} has no format named {name!r}") from None

    def __len__(self) -> int:
        return len(self._formats)

    def __iter__(self) -> Iterator[FormatDefinition]:
        return iter(self._formats)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return _key(item) in self._by_name
        return item in self._formats

    def __repr__(self) -> str:
        return f"FormatCatalog({[fmt.name for fmt in self._formats]!r})"

    @property
    def formats(self) -> tuple[FormatDefinition, ...]:
        return self._formats

    def get(self, name: str, default: FormatDefinition | None = None) -> FormatDefinition | None:
        return self._by_name.get(_key(name), default)

    def names(self) -> list[str]:
        return [fmt.name for fmt in self._formats]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order"""
        seen: dict[str, str] = {}
        for fmt in self._formats:
            seen.setdefault(_key(fmt.category), fmt.category)
        return list(seen.values())

    def by_category(self, category: str) -> list[FormatDefinition]:
        wanted = _key(category)
        return [fmt for fmt in self._formats if _key(fmt.category) == wanted]

    def by_extension(self, extension: str) -> list[FormatDefinition]:
        wanted = normalize_extension(extension)
        return [
            fmt
            for fmt in self._formats
            if any(normalize_extension(ext) == wanted for ext in fmt.extensions)
        ]

    def select(self, *names: str) -> FormatCatalog:
        """
        Build a sub-catalog from the given names, in the order given.

        Raises:
            ConfigurationError: If no names are given or a name is unknown
        """
        if not names:
            raise ConfigurationError("select() needs at least one format name")

        missing = [name for name in names if _key(name) not in self._by_name]
        if missing:
            raise ConfigurationError(f"Unknown formats: {', '.join(missing)}")
        return FormatCatalog(self._by_name[_key(name)] for name in names)


__all__ = ["FormatCatalog"]
