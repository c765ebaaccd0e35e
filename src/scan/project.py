"""Load a pulled automation project from disk as a SourceUnit.

Discovery walks the project tree top-down without following symlinks, so
nothing outside the root is ever read. Directories are pruned early (the
artifact output directory, symlinked directories); files are then kept when
their suffix names a SourceKind and no ``.gitignore`` rule or glob rejects
them.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from artifacts.models.artifacts.source import SourceFile, SourceUnit
from rules.config import ScriptMapConfig, load_config
from utils import file_kind_for_path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from artifacts.models.artifacts.source import SourceKind

logger = logging.getLogger(__name__)

_Matcher = Callable[[str], bool]


def gitignore_matchers(root: Path, *, nested: bool) -> list[_Matcher]:
    """Matchers for the root ``.gitignore`` and, when ``nested``, every deeper one.

    Symlinked ignore files and symlinked directories are skipped. The root
    file comes first, then deeper ones in sorted walk order.
    """
    candidates = [root / ".gitignore"]
    if nested:
        for current, dirnames, filenames in os.walk(root):
            dirnames.sort()
            if ".gitignore" in filenames:
                candidates.append(Path(current) / ".gitignore")

    matchers: list[_Matcher] = []
    seen: set[Path] = set()
    for path in candidates:
        if path in seen or path.is_symlink() or not path.is_file():
            continue
        seen.add(path)
        matchers.append(cast("_Matcher", parse_gitignore(path)))
    return matchers


@dataclass(frozen=True)
class ProjectFilter:
    """Which files under a project root belong to the SourceUnit."""

    output_dir: str = ""
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    ignored_by: tuple[_Matcher, ...] = field(default=(), compare=False)

    def walks_into(self, relative_dir: str, path: Path) -> bool:
        if path.is_symlink():
            return False
        return not (self.output_dir and relative_dir == self.output_dir)

    def is_ignored(self, path: Path) -> bool:
        for matcher in self.ignored_by:
            try:
                if matcher(str(path)):
                    return True
            except ValueError:
                # nested matchers reject paths outside their own directory
                continue
        return False

    def kind_of(self, relative_name: str, path: Path) -> SourceKind | None:
        """The file's SourceKind, or None when the file is left out."""
        kind = file_kind_for_path(relative_name)
        if kind is None or path.is_symlink() or not path.is_file():
            return None
        if self.include and not any(fnmatch(relative_name, p) for p in self.include):
            return None
        if any(fnmatch(relative_name, p) for p in self.exclude):
            return None
        if self.is_ignored(path):
            return None
        return kind


def iter_project_files(
    root: Path,
    project_filter: ProjectFilter,
) -> Iterator[tuple[str, SourceKind]]:
    """Yield ``(relative posix name, kind)`` for every project file, sorted by name."""
    found: list[tuple[str, SourceKind]] = []
    for current, dirnames, filenames in os.walk(root):
        here = Path(current)
        prefix = here.relative_to(root).as_posix()
        prefix = "" if prefix == "." else f"{prefix}/"
        dirnames[:] = [d for d in dirnames if project_filter.walks_into(prefix + d, here / d)]
        for filename in filenames:
            relative_name = prefix + filename
            kind = project_filter.kind_of(relative_name, here / filename)
            if kind is not None:
                found.append((relative_name, kind))

    found.sort(key=lambda item: item[0])
    yield from found


def project_filter_for(root: Path, config: ScriptMapConfig, output_dir_name: str) -> ProjectFilter:
    return ProjectFilter(
        output_dir=output_dir_name,
        include=tuple(config.include),
        exclude=tuple(config.exclude),
        ignored_by=tuple(gitignore_matchers(root, nested=config.nested_gitignore)),
    )


def load_source_unit(
    root: Path,
    config: ScriptMapConfig | None = None,
    name: str | None = None,
    *,
    output_dir_name: str | None = None,
) -> SourceUnit:
    """Read every project file under ``root`` into a SourceUnit.

    Files are ordered by relative path. The unit is named after ``name`` or,
    failing that, the root directory. ``output_dir_name`` is the top-level
    directory holding generated artifacts; it defaults to the configured one
    and is never scanned.

    Raises:
        FileNotFoundError: ``root`` does not exist.
        NotADirectoryError: ``root`` is not a directory.
    """
    root = Path(root)
    if not root.exists():
        msg = f"Project directory not found: {root}"
        raise FileNotFoundError(msg)
    if not root.is_dir():
        msg = f"Project path is not a directory: {root}"
        raise NotADirectoryError(msg)

    if config is None:
        config = load_config(root)

    if output_dir_name is None:
        output_dir_name = Path(config.output_dir).parts[0] if config.output_dir else ""

    resolved = root.resolve()
    files = [
        SourceFile(
            name=relative_name,
            kind=kind,
            text=(resolved / relative_name).read_text(encoding="utf-8", errors="replace"),
        )
        for relative_name, kind in iter_project_files(
            resolved, project_filter_for(resolved, config, output_dir_name)
        )
    ]

    unit_name = name or resolved.name
    logger.debug("Loaded %d file(s) for %s from %s", len(files), unit_name, root)
    return SourceUnit(name=unit_name, files=files)


__all__ = [
    "ProjectFilter",
    "gitignore_matchers",
    "iter_project_files",
    "load_source_unit",
    "project_filter_for",
]
