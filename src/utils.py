"""Shared utilities for scriptmap."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from artifacts.models.artifacts.source import SourceKind

# File suffix -> SourceFile kind for pulled automation projects.
SCRIPT_SUFFIXES: dict[str, SourceKind] = {
    ".gs": "code",
    ".js": "code",
    ".html": "markup",
    ".json": "config",
}

_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def file_kind_for_path(file_path: str | Path) -> SourceKind | None:
    """Return the SourceFile kind for a path, or None if it is not a script file.

    Examples:
        >>> file_kind_for_path("Code.gs")
        'code'
        >>> file_kind_for_path("ui/Sidebar.html")
        'markup'
        >>> file_kind_for_path("README.md") is None
        True
    """
    suffix = Path(file_path).suffix.lower()
    return SCRIPT_SUFFIXES.get(suffix)


def sanitize_project_id(name: str) -> str:
    """Turn a project name into a filesystem-safe identifier.

    Every character outside ``[a-zA-Z0-9_-]`` becomes ``_`` and the result is
    capped at 50 characters.

    Examples:
        >>> sanitize_project_id("Leave Tracker (v2)")
        'Leave_Tracker__v2_'
    """
    return _UNSAFE_ID_CHARS.sub("_", name)[:50]
