"""Status parsing and robust status resolution.

``svn status`` cannot always say what a path is. Outside a working copy, or for a node
it does not know, it prints a warning on stderr instead of XML. Worse, a path inside an
ignored directory and a path inside an unversioned directory produce the same
"node not found" warning. ``resolve_status`` settles that case by walking up the
ancestors until one of them has a definite status and reporting that status for the
original path.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable
from xml.etree import ElementTree

from .arguments import normalize_path
from .errors import StatusParseError, StatusResolutionError, UnrecognizedWarningError
from .models import ItemStatus, PathStatus, WorkingCopyItemType, item_status_from_item_type
from .process import ExecResult

logger = logging.getLogger(__name__)

NOT_WORKING_COPY_WARNING = "svn: warning: W155007: '{path}' is not a working copy"
NODE_NOT_FOUND_WARNING = "svn: warning: W155010: The node '{path}' was not found."

DEFAULT_MAX_DEPTH = 128

UNCOMMITTED_STATUSES = frozenset(
    {
        ItemStatus.ADDED,
        ItemStatus.CONFLICTED,
        ItemStatus.DELETED,
        ItemStatus.MERGED,
        ItemStatus.MODIFIED,
        ItemStatus.REPLACED,
    }
)

StatusQuery = Callable[[str], ExecResult]


def _item_status(raw: str | None, *, attribute: str, path: str) -> ItemStatus:
    if raw is None:
        raise StatusParseError(f"Entry '{path}' has no '{attribute}' attribute")
    try:
        item_type = WorkingCopyItemType(raw)
    except ValueError:
        raise StatusParseError(f"Unrecognized working copy {attribute} value '{raw}' for '{path}'") from None
    return item_status_from_item_type(item_type)


def parse_status_xml(text: str) -> list[PathStatus]:
    """Convert ``svn status --xml`` output into ``PathStatus`` records in document order."""

    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        raise StatusParseError(f"Malformed svn status XML: {exc}") from exc

    statuses: list[PathStatus] = []
    # Entries assigned to a changelist are grouped under <changelist> instead of <target>.
    for group in root:
        if group.tag not in ("target", "changelist"):
            continue
        for entry in group.findall("entry"):
            path = entry.get("path")
            if path is None:
                raise StatusParseError("Status entry without a 'path' attribute")
            wc_status = entry.find("wc-status")
            if wc_status is None:
                raise StatusParseError(f"Status entry '{path}' has no <wc-status> element")
            statuses.append(
                PathStatus(
                    path=path,
                    status=_item_status(wc_status.get("item"), attribute="item", path=path),
                    properties=_item_status(wc_status.get("props", "none"), attribute="props", path=path),
                )
            )
    return statuses


def classify_status(result: ExecResult, path: str) -> ItemStatus:
    """Interpret the result of a non-recursive status query for ``path``.

    May return ``ItemStatus.NOT_FOUND``; use ``resolve_status`` for a definite answer.
    """

    if not result.output.any_error:
        statuses = parse_status_xml(result.stdout)
        if not statuses:
            return ItemStatus.NONE
        if len(statuses) > 1:
            raise StatusParseError(
                f"Expected at most one status entry for '{path}', got {len(statuses)}:\n{result.stdout}"
            )
        return statuses[0].status

    error_text = result.output.error_text
    if NOT_WORKING_COPY_WARNING.format(path=path) in error_text:
        return ItemStatus.NOT_WORKING_COPY
    if NODE_NOT_FOUND_WARNING.format(path=path) in error_text:
        return ItemStatus.NOT_FOUND
    raise UnrecognizedWarningError(path, error_text)


def resolve_status(
    query: StatusQuery,
    path: str | os.PathLike[str],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ItemStatus:
    """Return the definite status of ``path``; never ``ItemStatus.NOT_FOUND``.

    ``query`` runs a depth-empty XML status query for an absolute path without raising
    on a non-zero exit.
    """

    original = normalize_path(path)
    current = original
    status = classify_status(query(current), current)

    steps = 0
    while status is ItemStatus.NOT_FOUND:
        parent = os.path.dirname(current)
        if parent == current:
            raise StatusResolutionError(f"Reached '{current}' without resolving the status of '{original}'")
        steps += 1
        if steps > max_depth:
            raise StatusResolutionError(f"Gave up resolving the status of '{original}' after {max_depth} ancestors")
        logger.debug("Status of '%s' is ambiguous, checking '%s'", current, parent)
        current = parent
        status = classify_status(query(current), current)

    if current != original:
        logger.debug("Resolved '%s' as %s from ancestor '%s'", original, status.value, current)
    return status


def has_uncommitted_changes(statuses: Iterable[PathStatus]) -> bool:
    """Return ``True`` when at least one entry carries a change that a commit would send."""

    count = sum(
        1
        for entry in statuses
        if entry.status in UNCOMMITTED_STATUSES or entry.properties in UNCOMMITTED_STATUSES
    )
    return count > 0
