from __future__ import annotations

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from svnauto import cli
from svnauto.cli import app
from svnauto.client import SvnClient
from svnauto.status import NODE_NOT_FOUND_WARNING

runner = CliRunner()


@pytest.fixture
def patched_client(monkeypatch: pytest.MonkeyPatch, client: SvnClient) -> SvnClient:
    monkeypatch.setattr(cli, "_load_client", lambda ctx: client)
    return client


def _status_xml(path: str, item: str) -> str:
    return f'<status><target path="{path}"><entry path="{path}"><wc-status item="{item}"/></entry></target></status>'


def test_cli_init_writes_loadable_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    config_path = Path("svnauto.toml")

    result = runner.invoke(app, ["init", "--path", str(config_path), "--svn", "/usr/local/bin/svn"])

    assert result.exit_code == 0
    data = tomllib.loads(config_path.read_text())
    assert data["tools"]["svn"] == "/usr/local/bin/svn"

    again = runner.invoke(app, ["init", "--path", str(config_path)])
    assert again.exit_code == 1
    assert "already exists" in again.stdout


def test_cli_status_resolves_each_path(tmp_path: Path, patched_client: SvnClient, fake_runner) -> None:
    directory = str(tmp_path / "unversioned_dir")
    target = f"{directory}/file.txt"
    fake_runner.on(
        "status",
        "-v",
        "--depth",
        "empty",
        "--xml",
        target,
        stderr=NODE_NOT_FOUND_WARNING.format(path=target) + "\n",
        returncode=1,
    )
    fake_runner.on("status", "-v", "--depth", "empty", "--xml", directory, stdout=_status_xml(directory, "unversioned"))

    result = runner.invoke(app, ["status", target])

    assert result.exit_code == 0
    assert "unversioned" in result.stdout
    assert "not_found" not in result.stdout


def test_cli_commit_prints_revision(tmp_path: Path, patched_client: SvnClient, fake_runner) -> None:
    target = str(tmp_path)
    fake_runner.on("commit", "-m", "fix", target, stdout="Committed revision 42.\n")

    result = runner.invoke(app, ["commit", target, "-m", "fix"])

    assert result.exit_code == 0
    assert "Committed revision 42." in result.stdout


def test_cli_reports_svn_errors(tmp_path: Path, patched_client: SvnClient, fake_runner) -> None:
    target = str(tmp_path / "a.txt")
    fake_runner.on("add", target, stdout="something unexpected\n")

    result = runner.invoke(app, ["add", target])

    assert result.exit_code == 1
    assert "add failed" in result.stdout
    assert "something unexpected" in result.stdout


def test_cli_ignore_add_lists_values(tmp_path: Path, patched_client: SvnClient, fake_runner) -> None:
    target = str(tmp_path)
    empty = f'<properties><target path="{target}"></target></properties>'
    listed = f'<properties><target path="{target}"><property name="svn:ignore"/></target></properties>'
    fake_runner.on("proplist", "--xml", target, stdout=empty)
    fake_runner.on("proplist", "--xml", target, stdout=listed)
    fake_runner.on("propset", "svn:ignore", "*.log", target, stdout=f"property 'svn:ignore' set on '{target}'\n")
    fake_runner.on("propget", "svn:ignore", target, stdout="*.log\n")

    result = runner.invoke(app, ["ignore", "add", target, "*.log"])

    assert result.exit_code == 0
    assert "*.log" in result.stdout


def test_cli_missing_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["--config", "missing.toml", "version"])

    assert result.exit_code == 1
    assert "does not exist" in result.stdout


def test_cli_missing_config_suggests_init(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["--config", "missing.toml", "version"])

    assert result.exit_code == 1
    assert "svnauto init --path <path>" in result.stdout
