from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from svnauto.client import SvnClient
from svnauto.output import OutputCollector
from svnauto.process import ExecError, ExecResult


class FakeRunner:
    """Scripted stand-in for ``run_command`` keyed by the argv after the executable."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._responses: dict[tuple[str, ...], list[ExecResult]] = {}

    def on(self, *argv: str, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        result = ExecResult(
            argv=tuple(argv),
            returncode=returncode,
            output=OutputCollector.from_text(stdout, stderr),
        )
        self._responses.setdefault(tuple(argv), []).append(result)

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        timeout: float | None = None,
    ) -> ExecResult:
        key = tuple(argv)[1:]
        self.calls.append(key)
        queue = self._responses.get(key)
        if not queue:
            raise AssertionError(f"unexpected command: {key}")
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if check and result.returncode != 0:
            raise ExecError(result)
        return result


@pytest.fixture
def fake_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def client(fake_runner: FakeRunner) -> SvnClient:
    return SvnClient(runner=fake_runner)
