"""Fluent construction of svn command lines."""

from __future__ import annotations

import os
from pathlib import Path


class ArgumentsBuilder:
    """Collects a verb, options and positional values into an argv list.

    Options are emitted in the order they were added, followed by the positional values.
    A ``--`` separator precedes the values when one of them starts with a dash.
    """

    def __init__(self, verb: str | None = None) -> None:
        self._verb = verb
        self._options: list[str] = []
        self._values: list[str] = []

    def flag_short(self, name: str) -> "ArgumentsBuilder":
        self._options.append(f"-{name}")
        return self

    def flag(self, name: str) -> "ArgumentsBuilder":
        self._options.append(f"--{name}")
        return self

    def option(self, name: str, value: str) -> "ArgumentsBuilder":
        self._options.extend([f"--{name}", value])
        return self

    def option_short(self, name: str, value: str) -> "ArgumentsBuilder":
        self._options.extend([f"-{name}", value])
        return self

    def value(self, value: str | os.PathLike[str]) -> "ArgumentsBuilder":
        self._values.append(os.fspath(value))
        return self

    # svn specific shorthands

    def verbose(self) -> "ArgumentsBuilder":
        return self.flag_short("v")

    def depth(self, depth: str) -> "ArgumentsBuilder":
        return self.option("depth", depth)

    def for_instance_only(self) -> "ArgumentsBuilder":
        """Restrict the command to the target itself, without children."""

        return self.depth("empty")

    def xml(self) -> "ArgumentsBuilder":
        return self.flag("xml")

    def message(self, text: str) -> "ArgumentsBuilder":
        return self.option_short("m", text)

    def build(self) -> list[str]:
        argv: list[str] = []
        if self._verb:
            argv.append(self._verb)
        argv.extend(self._options)
        if any(value.startswith("-") for value in self._values):
            argv.append("--")
        argv.extend(self._values)
        return argv


def normalize_path(path: str | Path) -> str:
    """Return ``path`` as an absolute string without trailing separators.

    File and directory paths then render identically in commands and in svn messages.
    """

    # abspath normalizes away trailing separators.
    return os.path.abspath(os.fspath(path) or os.curdir)
