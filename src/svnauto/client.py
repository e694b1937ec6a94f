"""High level svn operations with output validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence
from xml.etree import ElementTree

from .arguments import ArgumentsBuilder, normalize_path
from .config import Config
from .errors import OutputMismatchError, PropertyNotFoundError, StatusParseError, UnrecognizedWarningError
from .models import CheckoutResult, ItemStatus, PathStatus
from .output import parse_checkout_output, parse_commit_revision, parse_svnversion, parse_update_revision, parse_version
from .process import ExecError, ExecResult, Runner, run_command
from .properties import PropertyValues
from .status import has_uncommitted_changes, parse_status_xml, resolve_status

logger = logging.getLogger(__name__)

SVN_IGNORE = "svn:ignore"

PROPERTY_NOT_FOUND_CODE = "W200017"


def _property_names(text: str) -> list[str]:
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        raise StatusParseError(f"Malformed svn proplist XML: {exc}") from exc
    return [node.get("name", "") for node in root.iter("property")]


def _first_line(result: ExecResult) -> str:
    for line in result.output.output_lines:
        if line.strip():
            return line
    return ""


def _raw(result: ExecResult) -> str:
    return result.output.output_text + result.output.error_text


class SvnClient:
    """Runs svn commands for one configuration and checks what they print."""

    def __init__(self, config: Config | None = None, *, runner: Runner = run_command) -> None:
        self.config = config or Config.default()
        self._runner = runner
        self.properties = PropertyValues(self)

    # ------------------------------------------------------------------
    # Running

    def _execute(self, argv: Sequence[str], *, check: bool) -> ExecResult:
        return self._runner(argv, check=check, timeout=self.config.settings.timeout)

    def _run(self, arguments: ArgumentsBuilder, *, check: bool = True) -> ExecResult:
        return self._execute([self.config.tools.svn, *arguments.build()], check=check)

    def _expect_line(self, operation: str, result: ExecResult, expected: Sequence[str]) -> None:
        if _first_line(result) not in expected:
            raise OutputMismatchError(operation, expected, _raw(result))

    # ------------------------------------------------------------------
    # Tool information

    def version(self) -> str:
        logger.debug("Getting svn version...")
        result = self._run(ArgumentsBuilder().flag("version").flag("quiet"))
        version = parse_version(result.stdout)
        logger.info("Got svn version %s.", version)
        return version

    def latest_revision(self, directory: str | Path) -> int:
        """Return the highest revision found anywhere in the working copy at ``directory``."""

        target = normalize_path(directory)
        logger.debug("Getting latest svn revision for %s...", target)
        arguments = ArgumentsBuilder().flag("no-newline").flag("quiet").value(target)
        result = self._execute([self.config.tools.svnversion, *arguments.build()], check=True)
        revision = parse_svnversion(result.stdout)
        logger.info("Got latest svn revision %d for %s.", revision, target)
        return revision

    # ------------------------------------------------------------------
    # Status

    def status_query(self, path: str) -> ExecResult:
        """Run a non-recursive XML status query without failing on warnings."""

        return self._run(ArgumentsBuilder("status").verbose().for_instance_only().xml().value(path), check=False)

    def status(self, path: str | Path) -> ItemStatus:
        """Return the definite status of ``path``.

        Never returns ``ItemStatus.NOT_FOUND``.
        """

        return resolve_status(self.status_query, path, max_depth=self.config.settings.max_status_depth)

    def statuses(self, path: str | Path) -> list[PathStatus]:
        """Return the status of ``path`` and everything below it, in svn's order."""

        target = normalize_path(path)
        result = self._run(ArgumentsBuilder("status").verbose().xml().value(target))
        if result.output.any_error:
            raise UnrecognizedWarningError(target, result.output.error_text)
        return parse_status_xml(result.stdout)

    def has_uncommitted_changes(self, path: str | Path) -> bool:
        return has_uncommitted_changes(self.statuses(path))

    # ------------------------------------------------------------------
    # Mutating commands

    def add(self, path: str | Path) -> None:
        target = normalize_path(path)
        logger.debug("Adding %s...", target)
        result = self._run(ArgumentsBuilder("add").value(target))
        self._expect_line("add", result, [f"A         {target}", f"A  (bin)  {target}"])
        logger.info("Added %s.", target)

    def delete(self, path: str | Path, *, force: bool = False) -> None:
        target = normalize_path(path)
        logger.debug("Deleting %s...", target)
        arguments = ArgumentsBuilder("delete")
        if force:
            arguments.flag("force")
        result = self._run(arguments.value(target))
        self._expect_line("delete", result, [f"D         {target}"])
        logger.info("Deleted %s.", target)

    def revert(self, path: str | Path) -> None:
        target = normalize_path(path)
        logger.debug("Reverting %s...", target)
        result = self._run(ArgumentsBuilder("revert").value(target))
        self._expect_line("revert", result, [f"Reverted '{target}'"])
        logger.info("Reverted %s.", target)

    def commit(self, path: str | Path, message: str) -> int:
        """Commit ``path`` and return the new revision."""

        target = normalize_path(path)
        logger.debug("Committing %s...", target)
        result = self._run(ArgumentsBuilder("commit").message(message).value(target))
        revision = parse_commit_revision(result.stdout)
        logger.info("Committed %s as revision %d.", target, revision)
        return revision

    def update(self, path: str | Path) -> int:
        """Update ``path`` and return the revision it is now at."""

        target = normalize_path(path)
        logger.debug("Updating %s...", target)
        result = self._run(ArgumentsBuilder("update").value(target))
        revision = parse_update_revision(result.stdout)
        logger.info("Updated %s to revision %d.", target, revision)
        return revision

    def checkout(self, url: str, path: str | Path, *, revision: int | None = None) -> CheckoutResult:
        target = normalize_path(path)
        logger.debug("Checking out %s into %s...", url, target)
        arguments = ArgumentsBuilder("checkout")
        if revision is not None:
            arguments.option_short("r", str(revision))
        result = self._run(arguments.value(url).value(target))
        checkout = parse_checkout_output(result.stdout)
        logger.info("Checked out %s at revision %d.", url, checkout.revision)
        return checkout

    # ------------------------------------------------------------------
    # Property primitives

    def has_property(self, path: str | Path, name: str) -> bool:
        target = normalize_path(path)
        result = self._run(ArgumentsBuilder("proplist").xml().value(target))
        return name in _property_names(result.stdout)

    def get_property(self, path: str | Path, name: str) -> str:
        """Return the raw value of ``name``; raises ``PropertyNotFoundError`` when it is not set."""

        target = normalize_path(path)
        logger.debug("Getting %s for %s...", name, target)
        result = self._run(ArgumentsBuilder("propget").value(name).value(target), check=False)
        if result.output.any_error:
            if PROPERTY_NOT_FOUND_CODE in result.output.error_text:
                raise PropertyNotFoundError(target, name)
            if result.returncode != 0:
                raise ExecError(result)
            raise UnrecognizedWarningError(target, result.output.error_text)
        if result.returncode != 0:
            raise ExecError(result)
        if not result.output.output_lines:
            raise PropertyNotFoundError(target, name)

        # svn terminates the printed value with one extra line break.
        value = result.stdout
        if value.endswith("\r\n"):
            value = value[:-2]
        elif value.endswith(("\n", "\r")):
            value = value[:-1]
        logger.info("Got %s for %s.", name, target)
        return value

    def set_property(self, path: str | Path, name: str, value: str) -> None:
        target = normalize_path(path)
        logger.debug("Setting %s for %s...", name, target)
        result = self._run(ArgumentsBuilder("propset").value(name).value(value).value(target))
        self._expect_line("propset", result, [f"property '{name}' set on '{target}'"])
        logger.info("Set %s for %s.", name, target)

    def delete_property(self, path: str | Path, name: str) -> None:
        """Delete ``name`` from ``path``; deleting an absent property succeeds."""

        target = normalize_path(path)
        logger.debug("Deleting %s for %s...", name, target)
        result = self._run(ArgumentsBuilder("propdel").value(name).value(target), check=False)

        deleted = f"property '{name}' deleted from '{target}'."
        nonexistent = f"Attempting to delete nonexistent property '{name}' on '{target}'"
        # Newer svn releases report the absent property as a warning on stderr.
        if _first_line(result) in (deleted, nonexistent) or any(
            line.endswith(nonexistent) for line in result.output.error_lines
        ):
            logger.info("Deleted %s for %s.", name, target)
            return
        if result.returncode != 0:
            raise ExecError(result)
        raise OutputMismatchError("propdel", [deleted, nonexistent], _raw(result))

    # ------------------------------------------------------------------
    # Property value sets

    def get_property_values(self, path: str | Path, name: str) -> list[str]:
        return self.properties.get_values(path, name)

    def has_property_value(self, path: str | Path, name: str, value: str) -> bool:
        return self.properties.has_value(path, name, value)

    def add_property_value(self, path: str | Path, name: str, value: str) -> None:
        self.properties.add_value(path, name, value)

    def remove_property_value(self, path: str | Path, name: str, value: str) -> None:
        self.properties.remove_value(path, name, value)

    def set_property_values(self, path: str | Path, name: str, values: Iterable[str]) -> None:
        self.properties.set_values(path, name, values)

    # svn:ignore

    def get_svn_ignore_values(self, path: str | Path) -> list[str]:
        return self.get_property_values(path, SVN_IGNORE)

    def has_svn_ignore_value(self, path: str | Path, value: str) -> bool:
        return self.has_property_value(path, SVN_IGNORE, value)

    def add_svn_ignore_value(self, path: str | Path, value: str) -> None:
        self.add_property_value(path, SVN_IGNORE, value)

    def remove_svn_ignore_value(self, path: str | Path, value: str) -> None:
        self.remove_property_value(path, SVN_IGNORE, value)

    def set_svn_ignore_values(self, path: str | Path, values: Iterable[str]) -> None:
        self.set_property_values(path, SVN_IGNORE, values)

    def delete_svn_ignore(self, path: str | Path) -> None:
        self.delete_property(path, SVN_IGNORE)
