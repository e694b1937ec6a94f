"""Output buffering and line-level parsers for svn command output."""

from __future__ import annotations

import io
import re
from typing import Iterable

from .errors import OutputMismatchError, StatusParseError
from .models import CheckoutResult, EntryUpdateStatus, update_status_from_code

_ENTRY_LINE = re.compile(r"^(?P<codes>[A-Z ]{4}) (?P<path>\S.*)$")
_VERSION = re.compile(r"^\d+(?:\.\d+)+$")


class OutputCollector:
    """Buffers lines received from the output and error streams of one process."""

    def __init__(self) -> None:
        self._output: list[str] = []
        self._error: list[str] = []
        self._any_error = False

    @classmethod
    def from_text(cls, stdout: str, stderr: str) -> "OutputCollector":
        collector = cls()
        for line in split_lines(stdout):
            collector.receive_output(line)
        for line in split_lines(stderr):
            collector.receive_error(line)
        return collector

    def receive_output(self, line: str | None) -> None:
        # ``None`` marks end of stream for line-callback style runners.
        if line is None:
            return
        self._output.append(line)

    def receive_error(self, line: str | None) -> None:
        if line is None:
            return
        self._any_error = True
        self._error.append(line)

    @property
    def any_error(self) -> bool:
        return self._any_error

    @property
    def output_text(self) -> str:
        return _join(self._output)

    @property
    def error_text(self) -> str:
        return _join(self._error)

    @property
    def output_trimmed(self) -> str:
        return self.output_text.rstrip()

    @property
    def error_trimmed(self) -> str:
        return self.error_text.rstrip()

    @property
    def output_lines(self) -> tuple[str, ...]:
        return tuple(_strip_terminator(line) for line in self._output)

    @property
    def error_lines(self) -> tuple[str, ...]:
        return tuple(_strip_terminator(line) for line in self._error)

    def output_reader(self) -> io.StringIO:
        """Return a reader over the output text; ``readline()`` yields ``""`` at end of stream."""

        return io.StringIO(self.output_text)

    def error_reader(self) -> io.StringIO:
        return io.StringIO(self.error_text)


def split_lines(text: str) -> list[str]:
    """Split ``text`` after each \\n, \\r\\n or \\r, keeping the terminators.

    Unlike ``str.splitlines`` this leaves form feeds and Unicode separators inside the line.
    """

    return io.StringIO(text, newline="").readlines()


def _join(lines: Iterable[str]) -> str:
    return "".join(line if line.endswith(("\n", "\r")) else f"{line}\n" for line in lines)


def _strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


def last_line(text: str) -> str:
    """Return the last non-blank line of ``text`` (empty string when there is none)."""

    for line in reversed(split_lines(text)):
        if line.strip():
            return line.strip()
    return ""


def _revision_token(token: str, *, operation: str, output: str) -> int:
    if not token.endswith("."):
        raise StatusParseError(f"{operation} output has malformed revision token '{token}':\n{output}")
    try:
        return int(token[:-1])
    except ValueError:
        raise StatusParseError(f"{operation} output has non-numeric revision '{token}':\n{output}") from None


def parse_commit_revision(output: str) -> int:
    """Extract ``N`` from a final ``Committed revision N.`` line."""

    tokens = last_line(output).split()
    if len(tokens) != 3 or tokens[0] != "Committed" or tokens[1] != "revision":
        raise OutputMismatchError("commit", ["Committed revision {N}."], output)
    return _revision_token(tokens[2], operation="commit", output=output)


def parse_update_revision(output: str) -> int:
    """Extract ``N`` from a final ``Updated to revision N.`` or ``At revision N.`` line."""

    line = last_line(output)
    tokens = line.split()
    if len(tokens) < 2 or tokens[-2] != "revision" or not line.startswith(("Updated to revision", "At revision")):
        raise OutputMismatchError("update", ["Updated to revision {N}.", "At revision {N}."], output)
    return _revision_token(tokens[-1], operation="update", output=output)


def parse_entry_line(line: str) -> EntryUpdateStatus | None:
    """Parse one ``<codes> <path>`` line; returns ``None`` for informational lines."""

    match = _ENTRY_LINE.match(line.rstrip("\r\n"))
    if match is None:
        return None
    codes = match.group("codes").strip()
    if not codes:
        return None
    code = codes[0]
    try:
        status = update_status_from_code(code)
    except ValueError as exc:
        raise StatusParseError(f"{exc} in line '{line.rstrip()}'") from exc
    return EntryUpdateStatus(status=status, relative_path=match.group("path"))


def parse_entries(lines: Iterable[str]) -> tuple[EntryUpdateStatus, ...]:
    entries: list[EntryUpdateStatus] = []
    for line in lines:
        entry = parse_entry_line(line)
        if entry is not None:
            entries.append(entry)
    return tuple(entries)


def parse_checkout_output(output: str) -> CheckoutResult:
    """Parse ``svn checkout`` output into its entries and final revision."""

    tokens = last_line(output).split()
    if tokens[:3] != ["Checked", "out", "revision"] or len(tokens) != 4:
        raise OutputMismatchError("checkout", ["Checked out revision {N}."], output)
    revision = _revision_token(tokens[3], operation="checkout", output=output)
    return CheckoutResult(revision=revision, entries=parse_entries(split_lines(output)))


def parse_svnversion(output: str) -> int:
    """Return the newest revision from ``svnversion`` output such as ``4123:4168MS``."""

    value = output.strip()
    if ":" in value:
        # {target revision}:{highest revision anywhere below it}
        value = value.split(":", 1)[1]
    while value and not value[-1].isdigit():
        value = value[:-1]
    if not value.isdigit():
        raise StatusParseError(f"Unable to read a revision from svnversion output '{output.strip()}'")
    return int(value)


def parse_version(output: str) -> str:
    """Validate the output of ``svn --version --quiet``."""

    version = last_line(output)
    if not _VERSION.match(version):
        raise StatusParseError(f"Unable to read an svn version from '{output.strip()}'")
    return version
