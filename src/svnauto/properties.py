"""Multi-value svn properties treated as ordered sets.

Properties such as ``svn:ignore`` hold one value per line. ``PropertyValues`` reads the
current value, changes it and writes it back. Nothing locks the property in between, so
two callers changing the same property on the same path concurrently race and the last
write wins; callers that need atomicity must serialize their changes per path.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Protocol

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class PropertyStore(Protocol):
    def has_property(self, path: str | Path, name: str) -> bool: ...

    def get_property(self, path: str | Path, name: str) -> str: ...

    def set_property(self, path: str | Path, name: str, value: str) -> None: ...

    def delete_property(self, path: str | Path, name: str) -> None: ...


def split_values(raw: str) -> list[str]:
    """Split a raw property value into its non-empty lines."""

    return [segment for segment in _LINE_BREAK.split(raw) if segment]


def join_values(values: Iterable[str]) -> str:
    return "\n".join(values)


def _check_value(value: str) -> None:
    if not value or _LINE_BREAK.search(value):
        raise ValueError(f"Property set values must be non-empty single lines, got {value!r}")


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        _check_value(value)
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


class PropertyValues:
    """Idempotent set operations over newline-separated property values."""

    def __init__(self, store: PropertyStore) -> None:
        self.store = store

    def get_values(self, path: str | Path, name: str) -> list[str]:
        if not self.store.has_property(path, name):
            return []
        return split_values(self.store.get_property(path, name))

    def has_value(self, path: str | Path, name: str, value: str) -> bool:
        return value in self.get_values(path, name)

    def add_value(self, path: str | Path, name: str, value: str) -> None:
        _check_value(value)
        values = self.get_values(path, name)
        if value in values:
            return
        values.append(value)
        self.store.set_property(path, name, join_values(values))

    def remove_value(self, path: str | Path, name: str, value: str) -> None:
        values = self.get_values(path, name)
        if value not in values:
            return
        remaining = [item for item in values if item != value]
        self.set_values(path, name, remaining)

    def set_values(self, path: str | Path, name: str, values: Iterable[str]) -> None:
        """Replace the property with ``values``; an empty collection deletes it."""

        unique = _unique(values)
        if not unique:
            self.store.delete_property(path, name)
            return
        self.store.set_property(path, name, join_values(unique))
