"""TOML configuration loading for svnauto."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .status import DEFAULT_MAX_DEPTH

DEFAULT_CONFIG_FILENAME = "svnauto.toml"


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be parsed or validated."""


def _expand_executable(raw: str | os.PathLike[str], *, base_dir: Path) -> str:
    """Expand env vars and ``~`` in ``raw``; bare command names are left for ``PATH`` lookup."""

    text = os.path.expandvars(str(raw))
    if os.sep not in text and (os.altsep is None or os.altsep not in text) and not text.startswith("~"):
        return text
    expanded = Path(text).expanduser()
    if expanded.is_absolute():
        return str(expanded.resolve(strict=False))
    return str((base_dir / expanded).resolve(strict=False))


class Tools(BaseModel):
    """Locations of the external executables."""

    model_config = ConfigDict(frozen=True)

    svn: str = "svn"
    svnversion: str = "svnversion"

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], *, base_dir: Path) -> "Tools":
        values = {key: _expand_executable(raw[key], base_dir=base_dir) for key in ("svn", "svnversion") if key in raw}
        return cls(**values)


class Settings(BaseModel):
    """Global configuration options."""

    model_config = ConfigDict(frozen=True)

    timeout: float | None = Field(default=None, gt=0)
    max_status_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)


class Config(BaseModel):
    """Fully parsed configuration file."""

    model_config = ConfigDict(frozen=True)

    config_path: Path | None = None
    tools: Tools = Field(default_factory=Tools)
    settings: Settings = Field(default_factory=Settings)

    @classmethod
    def default(cls) -> "Config":
        return cls()


def load_config(path: Path | None = None) -> Config:
    """Load and validate a configuration file.

    Args:
        path: Optional path to the TOML file or its directory. Defaults to ``svnauto.toml`` in
            the current working directory, falling back to built-in defaults when that file
            does not exist.
    """

    config_path = _resolve_config_path(path)
    if config_path is None:
        return Config.default()
    base_dir = config_path.parent

    try:
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Configuration file '{config_path}' is not valid TOML: {exc}") from exc

    try:
        tools = Tools.from_raw(data.get("tools") or {}, base_dir=base_dir)
        settings = Settings(**(data.get("settings") or {}))
    except ValidationError as exc:
        raise ConfigError(f"Configuration file '{config_path}' is invalid:\n{exc}") from exc

    return Config(config_path=config_path, tools=tools, settings=settings)


def _resolve_config_path(path: Path | None) -> Path | None:
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
        return candidate.resolve(strict=False) if candidate.exists() else None

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file '{path}' does not exist")
    if path.is_dir():
        candidate = path / DEFAULT_CONFIG_FILENAME
        if not candidate.exists():
            raise ConfigError(f"Expected to find '{DEFAULT_CONFIG_FILENAME}' inside '{path}', but none was located")
        path = candidate

    return path.resolve(strict=False)
