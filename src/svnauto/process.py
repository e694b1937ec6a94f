"""Command runner for svn and svnversion."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from .errors import CommandError
from .output import OutputCollector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for one process execution."""

    argv: tuple[str, ...]
    returncode: int
    output: OutputCollector

    @property
    def stdout(self) -> str:
        return self.output.output_text

    @property
    def stderr(self) -> str:
        return self.output.error_text


class ExecError(CommandError):
    """Raised when a command returns non-zero in check mode."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        detail = (result.output.error_trimmed or result.output.output_trimmed).strip()
        super().__init__(
            f"command failed ({result.returncode}): {rendered}\n{detail}",
            argv=result.argv,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
        self.result = result


class Runner(Protocol):
    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        timeout: float | None = None,
    ) -> ExecResult: ...


def run_command(
    argv: Sequence[str],
    *,
    check: bool = True,
    timeout: float | None = None,
) -> ExecResult:
    """Run command and return structured result."""
    argv = list(argv)
    logger.debug("Running %s", " ".join(argv))
    try:
        completed = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except FileNotFoundError as exc:
        raise CommandError(f"executable not found: {argv[0]}", argv=argv) from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandError(f"command timed out after {timeout}s: {' '.join(argv)}", argv=argv) from exc

    result = ExecResult(
        argv=tuple(argv),
        returncode=completed.returncode,
        output=OutputCollector.from_text(completed.stdout, completed.stderr),
    )
    if check and result.returncode != 0:
        raise ExecError(result)
    return result
