"""Analysis entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from artifacts.models.artifacts.analysis import AnalysisResult
    from artifacts.models.artifacts.source import SourceUnit
    from rules.config import ScriptMapConfig


def analyze_source_unit(
    unit: SourceUnit,
    config: ScriptMapConfig | None = None,
) -> AnalysisResult:
    """Analyze one unit via lazy import to avoid package import cycles."""
    from artifacts.engine import analyze_source_unit as _analyze_source_unit

    return _analyze_source_unit(unit, config)


def analyze_project(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ScriptMapConfig | None = None,
    name: str | None = None,
) -> dict[str, object]:
    """Analyze a project directory via lazy import to avoid package import cycles."""
    from artifacts.write import analyze_project as _analyze_project

    return _analyze_project(root=root, out_dir=out_dir, config=config, name=name)


__all__ = ["analyze_project", "analyze_source_unit"]
