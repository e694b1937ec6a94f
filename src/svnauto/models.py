"""Shared models and enums for svnauto."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ItemStatus(str, Enum):
    """Working copy status of a single file or directory."""

    NONE = "none"
    NOT_WORKING_COPY = "not_working_copy"
    # Ambiguous: the path is inside an ignored or an unversioned directory.
    # Only ever an intermediate value of status resolution.
    NOT_FOUND = "not_found"
    NO_MODIFICATIONS = "no_modifications"
    ADDED = "added"
    CONFLICTED = "conflicted"
    DELETED = "deleted"
    EXTERNAL = "external"
    IGNORED = "ignored"
    INCOMPLETE = "incomplete"
    MERGED = "merged"
    MISSING = "missing"
    MODIFIED = "modified"
    OBSTRUCTED = "obstructed"
    REPLACED = "replaced"
    UNVERSIONED = "unversioned"


class WorkingCopyItemType(str, Enum):
    """Values of the ``item`` attribute on ``<wc-status>`` in ``svn status --xml``."""

    ADDED = "added"
    CONFLICTED = "conflicted"
    DELETED = "deleted"
    EXTERNAL = "external"
    IGNORED = "ignored"
    INCOMPLETE = "incomplete"
    MERGED = "merged"
    MISSING = "missing"
    MODIFIED = "modified"
    NONE = "none"
    NORMAL = "normal"
    OBSTRUCTED = "obstructed"
    REPLACED = "replaced"
    UNVERSIONED = "unversioned"


class UpdateStatus(str, Enum):
    """Per-entry outcome reported by ``svn update`` and ``svn checkout``."""

    NONE = "none"
    ADDED = "added"
    CONFLICT = "conflict"
    DELETED = "deleted"
    EXISTED = "existed"
    MERGED = "merged"
    REPLACED = "replaced"
    UPDATED = "updated"


_ITEM_TYPE_TO_STATUS: dict[WorkingCopyItemType, ItemStatus] = {
    WorkingCopyItemType.ADDED: ItemStatus.ADDED,
    WorkingCopyItemType.CONFLICTED: ItemStatus.CONFLICTED,
    WorkingCopyItemType.DELETED: ItemStatus.DELETED,
    WorkingCopyItemType.EXTERNAL: ItemStatus.EXTERNAL,
    WorkingCopyItemType.IGNORED: ItemStatus.IGNORED,
    WorkingCopyItemType.INCOMPLETE: ItemStatus.INCOMPLETE,
    WorkingCopyItemType.MERGED: ItemStatus.MERGED,
    WorkingCopyItemType.MISSING: ItemStatus.MISSING,
    WorkingCopyItemType.MODIFIED: ItemStatus.MODIFIED,
    WorkingCopyItemType.NONE: ItemStatus.NONE,
    WorkingCopyItemType.NORMAL: ItemStatus.NO_MODIFICATIONS,
    WorkingCopyItemType.OBSTRUCTED: ItemStatus.OBSTRUCTED,
    WorkingCopyItemType.REPLACED: ItemStatus.REPLACED,
    WorkingCopyItemType.UNVERSIONED: ItemStatus.UNVERSIONED,
}
_STATUS_TO_ITEM_TYPE = {status: item for item, status in _ITEM_TYPE_TO_STATUS.items()}

_UPDATE_CODES: dict[UpdateStatus, str] = {
    UpdateStatus.ADDED: "A",
    UpdateStatus.CONFLICT: "C",
    UpdateStatus.DELETED: "D",
    UpdateStatus.EXISTED: "E",
    UpdateStatus.MERGED: "M",
    UpdateStatus.REPLACED: "R",
    UpdateStatus.UPDATED: "U",
}
_UPDATE_STATUSES = {code: status for status, code in _UPDATE_CODES.items()}


def item_status_from_item_type(item_type: WorkingCopyItemType) -> ItemStatus:
    """Map an XML ``item`` value onto ``ItemStatus``."""

    return _ITEM_TYPE_TO_STATUS[item_type]


def item_type_from_item_status(status: ItemStatus) -> WorkingCopyItemType:
    """Map ``status`` back onto the XML vocabulary.

    ``NOT_WORKING_COPY`` and ``NOT_FOUND`` are derived from warnings rather than XML and
    raise ``ValueError``.
    """

    try:
        return _STATUS_TO_ITEM_TYPE[status]
    except KeyError:
        raise ValueError(f"Item status '{status.value}' has no working copy item type") from None


def update_status_to_code(status: UpdateStatus) -> str:
    """Return the single reporting character used for ``status``."""

    try:
        return _UPDATE_CODES[status]
    except KeyError:
        raise ValueError(f"Update status '{status.value}' has no reporting character") from None


def update_status_from_code(code: str) -> UpdateStatus:
    """Return the ``UpdateStatus`` for a reporting character."""

    try:
        return _UPDATE_STATUSES[code]
    except KeyError:
        raise ValueError(f"Unrecognized update status reporting character '{code}'") from None


@dataclass(frozen=True, slots=True)
class PathStatus:
    """A path paired with its working copy status."""

    path: str
    status: ItemStatus
    properties: ItemStatus = ItemStatus.NONE


@dataclass(frozen=True, slots=True)
class EntryUpdateStatus:
    """One line of update or checkout output."""

    status: UpdateStatus
    # Relative to whatever root svn chose to print from.
    relative_path: str


@dataclass(frozen=True, slots=True)
class CheckoutResult:
    """Revision reached by a checkout plus the entries it touched."""

    revision: int
    entries: tuple[EntryUpdateStatus, ...]
