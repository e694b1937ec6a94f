"""Exception hierarchy for svnauto."""

from __future__ import annotations

from collections.abc import Sequence


class SvnError(RuntimeError):
    """Base class for failures surfaced while automating svn."""


class CommandError(SvnError):
    """Raised when a command cannot run, times out, or exits non-zero in check mode."""

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class OutputMismatchError(SvnError):
    """Raised when captured output matches none of the expected lines."""

    def __init__(self, operation: str, expected: Sequence[str], output: str) -> None:
        rendered = " OR ".join(repr(line) for line in expected)
        super().__init__(f"{operation} failed: expected {rendered}, got:\n{output}")
        self.operation = operation
        self.expected = tuple(expected)
        self.output = output


class UnrecognizedWarningError(SvnError):
    """Raised when the error stream holds text that is not a known benign warning."""

    def __init__(self, path: str, error_text: str) -> None:
        super().__init__(f"Unrecognized svn error output for '{path}':\n{error_text}")
        self.path = path
        self.error_text = error_text


class StatusParseError(SvnError):
    """Raised when structured or line output cannot be interpreted."""


class PropertyNotFoundError(SvnError):
    """Raised when reading a property that is not set on a path."""

    def __init__(self, path: str, name: str) -> None:
        super().__init__(f"Property '{name}' not found on '{path}'")
        self.path = path
        self.name = name


class StatusResolutionError(SvnError):
    """Raised when the ancestor walk cannot settle an ambiguous status."""
