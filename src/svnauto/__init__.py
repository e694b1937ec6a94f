"""Core package for the svnauto project."""

from .cli import app, run
from .client import SVN_IGNORE, SvnClient
from .config import Config, ConfigError, Settings, Tools, load_config
from .errors import (
    CommandError,
    OutputMismatchError,
    PropertyNotFoundError,
    StatusParseError,
    StatusResolutionError,
    SvnError,
    UnrecognizedWarningError,
)
from .models import (
    CheckoutResult,
    EntryUpdateStatus,
    ItemStatus,
    PathStatus,
    UpdateStatus,
    WorkingCopyItemType,
)
from .output import OutputCollector
from .properties import PropertyValues
from .status import parse_status_xml, resolve_status

__all__ = [
    "Config",
    "ConfigError",
    "Settings",
    "Tools",
    "load_config",
    "SvnClient",
    "SVN_IGNORE",
    "SvnError",
    "CommandError",
    "OutputMismatchError",
    "PropertyNotFoundError",
    "StatusParseError",
    "StatusResolutionError",
    "UnrecognizedWarningError",
    "CheckoutResult",
    "EntryUpdateStatus",
    "ItemStatus",
    "PathStatus",
    "UpdateStatus",
    "WorkingCopyItemType",
    "OutputCollector",
    "PropertyValues",
    "parse_status_xml",
    "resolve_status",
    "app",
    "run",
]
