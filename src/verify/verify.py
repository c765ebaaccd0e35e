"""Determinism verification for scriptmap artifacts.

A project is re-analyzed into a scratch directory and each stored artifact
is compared byte-for-byte with its regenerated twin. When ``analysis.json``
differs, the top-level AnalysisResult fields that changed are reported too.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from artifacts.write import analyze_project
from contract.artifacts import ANALYSIS_JSON


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()
    # top-level analysis.json keys whose values differ
    changed_fields: tuple[str, ...] = ()


def _artifact_bytes(directory: Path) -> dict[str, bytes]:
    """Artifacts are written flat, so only direct children are compared."""
    return {path.name: path.read_bytes() for path in directory.iterdir() if path.is_file()}


def changed_analysis_fields(stored: bytes, regenerated: bytes) -> list[str]:
    """Top-level keys whose values differ between two analysis documents."""
    try:
        before: Any = orjson.loads(stored)
        after: Any = orjson.loads(regenerated)
    except orjson.JSONDecodeError:
        return []
    if not isinstance(before, dict) or not isinstance(after, dict):
        return []
    return sorted(key for key in before.keys() | after.keys() if before.get(key) != after.get(key))


def verify_determinism(
    *,
    root: Path,
    artifacts_dir: Path,
    name: str | None = None,
) -> DeterminismResult:
    """Verify that the stored artifacts match a fresh analysis of ``root``.

    Args:
        root: Project directory to analyze.
        artifacts_dir: Directory containing existing artifacts to verify.
        name: Project name the artifacts were generated with, if overridden.

    Returns:
        DeterminismResult listing missing, extra and mismatched artifact
        names, plus the changed analysis fields when ``analysis.json`` differs.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    stored = _artifact_bytes(artifacts_dir)
    with tempfile.TemporaryDirectory() as temp_dir:
        analyze_project(root=root, out_dir=Path(temp_dir), name=name)
        regenerated = _artifact_bytes(Path(temp_dir))

    missing = sorted(stored.keys() - regenerated.keys())
    extra = sorted(regenerated.keys() - stored.keys())
    mismatches = sorted(
        filename
        for filename in stored.keys() & regenerated.keys()
        if stored[filename] != regenerated[filename]
    )
    changed_fields: list[str] = []
    if ANALYSIS_JSON in mismatches:
        changed_fields = changed_analysis_fields(
            stored[ANALYSIS_JSON],
            regenerated[ANALYSIS_JSON],
        )

    return DeterminismResult(
        ok=not missing and not extra and not mismatches,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
        changed_fields=tuple(changed_fields),
    )


__all__ = ["DeterminismResult", "changed_analysis_fields", "verify_determinism"]
