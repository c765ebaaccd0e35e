from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.engine import analyze_source_unit
from artifacts.models.artifacts.analysis import AnalysisResult
from artifacts.utils import _get_output_dir_name, _load_json, _write_json, _write_jsonl
from contract.artifacts import (
    ANALYSIS_JSON,
    CONNECTED_RESOURCES_JSONL,
    EXTERNAL_CALLS_JSONL,
    FUNCTIONS_JSONL,
    TRIGGERS_JSONL,
)
from rules.config import load_config, resolve_output_dir
from scan.project import load_source_unit
from utils import sanitize_project_id

if TYPE_CHECKING:
    from rules.config import ScriptMapConfig

logger = logging.getLogger(__name__)


def write_analysis_artifacts(result: AnalysisResult, out_dir: Path) -> list[Path]:
    """Persist one analysis, overwriting any previous artifacts in ``out_dir``.

    Returns:
        Paths of the written artifacts, in contract order.
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    written = [
        out_dir / ANALYSIS_JSON,
        out_dir / FUNCTIONS_JSONL,
        out_dir / EXTERNAL_CALLS_JSONL,
        out_dir / TRIGGERS_JSONL,
        out_dir / CONNECTED_RESOURCES_JSONL,
    ]
    _write_json(written[0], result)
    _write_jsonl(written[1], result.functions)
    _write_jsonl(written[2], result.external_calls)
    _write_jsonl(written[3], result.triggers)
    _write_jsonl(written[4], result.connected_resources)
    return written


def store_analysis(result: AnalysisResult, store_dir: Path, project_id: str) -> Path:
    """Store one analysis under ``store_dir``, replacing the project's previous one.

    Each project gets its own subdirectory named after the sanitized
    ``project_id``; ``load_analyses(store_dir)`` reads them all back.
    """
    project_dir = store_dir / sanitize_project_id(project_id)
    write_analysis_artifacts(result, project_dir)
    logger.debug("Stored analysis of %s in %s", result.name, project_dir)
    return project_dir


def load_analyses(store_dir: Path) -> list[AnalysisResult]:
    """Read back every stored analysis under ``store_dir``.

    An analysis is either ``store_dir/analysis.json`` itself or
    ``analysis.json`` inside one of its immediate subdirectories. A missing
    store yields an empty list.

    Raises:
        pydantic.ValidationError: A stored document does not match the model.
    """
    if not store_dir.is_dir():
        return []

    candidates = [store_dir / ANALYSIS_JSON]
    candidates.extend(
        child / ANALYSIS_JSON
        for child in sorted(store_dir.iterdir(), key=lambda p: p.name)
        if child.is_dir()
    )
    return [
        AnalysisResult.model_validate(_load_json(path))
        for path in candidates
        if path.is_file()
    ]


def analyze_project(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ScriptMapConfig | None = None,
    name: str | None = None,
) -> dict[str, object]:
    """Analyze a local automation project and write its artifacts.

    Args:
        root: Directory holding the pulled project files
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration (loaded from scriptmap.toml if omitted)
        name: Optional project name (defaults to the directory name)

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    unit = load_source_unit(
        root,
        config,
        name,
        output_dir_name=_get_output_dir_name(out_dir.resolve(), root.resolve()) or None,
    )
    result = analyze_source_unit(unit, config)
    written = write_analysis_artifacts(result, out_dir)
    logger.info("Wrote %d artifact(s) for %s to %s", len(written), result.name, out_dir)

    return {
        "name": result.name,
        "file_count": len(unit.files),
        "lines_of_code": result.lines_of_code,
        "complexity": result.complexity,
        "function_count": len(result.functions),
        "external_call_count": len(result.external_calls),
        "trigger_count": len(result.triggers),
        "connected_resource_count": len(result.connected_resources),
        "business_rule_count": len(result.business_rules),
        "artifacts": [str(path) for path in written],
    }
