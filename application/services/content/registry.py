"""
Registry of editable data files and their shapes.

The one place that knows which files hold a list of entries and which hold a
`{title, sections}` document.
"""

import copy
import posixpath
from enum import Enum
from typing import Any, Dict, List


class ShapeKind(str, Enum):
    LIST = "list"
    DOCUMENT = "document"


CONTENT_FILES: Dict[str, ShapeKind] = {
    "about.json": ShapeKind.DOCUMENT,
    "attend.json": ShapeKind.DOCUMENT,
    "more.json": ShapeKind.DOCUMENT,
    "locations.json": ShapeKind.LIST,
    "times.json": ShapeKind.LIST,
    "repeating-events.json": ShapeKind.LIST,
    "live.json": ShapeKind.LIST,
}

LOCATIONS_FILE = "locations.json"
TIMES_FILE = "times.json"
REPEATING_EVENTS_FILE = "repeating-events.json"
LIVE_FILE = "live.json"

_DEFAULTS: Dict[ShapeKind, Any] = {
    ShapeKind.LIST: [],
    ShapeKind.DOCUMENT: {"title": "", "sections": []},
}


def file_name(path: str) -> str:
    """Last segment of a repository path."""
    return posixpath.basename(path)


def editable_files() -> List[str]:
    return list(CONTENT_FILES)


def shape_for(path: str) -> ShapeKind:
    """Shape of the file at `path`; unregistered names are documents."""
    return CONTENT_FILES.get(file_name(path), ShapeKind.DOCUMENT)


def is_registered(path: str) -> bool:
    return file_name(path) in CONTENT_FILES


def default_content(path: str) -> Any:
    """Fresh default skeleton for a file that does not exist remotely."""
    return copy.deepcopy(_DEFAULTS[shape_for(path)])
