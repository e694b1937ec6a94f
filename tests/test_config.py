from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from svnauto.config import DEFAULT_CONFIG_FILENAME, Config, ConfigError, load_config
from svnauto.status import DEFAULT_MAX_DEPTH


def _write_config(tmp_path: Path, body: str) -> Path:
    config_path = tmp_path / DEFAULT_CONFIG_FILENAME
    config_path.write_text(dedent(body))
    return config_path


def test_load_config_happy_path(tmp_path: Path, fake_home: Path) -> None:
    config_path = _write_config(
        tmp_path,
        """
        [tools]
        svn = "~/svn/bin/svn"
        svnversion = "./bin/svnversion"

        [settings]
        timeout = 30
        max_status_depth = 16
        """,
    )

    config = load_config(config_path)

    assert config.config_path == config_path.resolve(strict=False)
    assert config.tools.svn == str((fake_home / "svn" / "bin" / "svn").resolve(strict=False))
    assert config.tools.svnversion == str((tmp_path / "bin" / "svnversion").resolve(strict=False))
    assert config.settings.timeout == 30.0
    assert config.settings.max_status_depth == 16


def test_bare_executable_names_are_kept_for_path_lookup(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        """
        [tools]
        svn = "svn-1.14"
        """,
    )

    config = load_config(config_path)

    assert config.tools.svn == "svn-1.14"
    assert config.tools.svnversion == "svnversion"
    assert config.settings.timeout is None
    assert config.settings.max_status_depth == DEFAULT_MAX_DEPTH


def test_load_config_from_directory(tmp_path: Path) -> None:
    _write_config(tmp_path, "[settings]\nmax_status_depth = 4\n")

    config = load_config(tmp_path)

    assert config.settings.max_status_depth == 4


def test_default_config_when_no_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert load_config() == Config.default()


def test_missing_explicit_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path / "nope.toml")


def test_directory_without_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Expected to find"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "body",
    [
        "[settings]\nmax_status_depth = 0\n",
        "[settings]\ntimeout = -1\n",
        "[settings\n",
    ],
)
def test_invalid_config(tmp_path: Path, body: str) -> None:
    config_path = _write_config(tmp_path, body)

    with pytest.raises(ConfigError):
        load_config(config_path)
