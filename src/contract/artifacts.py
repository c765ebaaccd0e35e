"""Analysis artifact contract definitions.

This module defines the stable engine↔storage boundary: the filenames a
stored analysis is made of and the format of each.
"""

from __future__ import annotations

from dataclasses import dataclass

# Artifact schema version for stored analyses.
ARTIFACT_SCHEMA_VERSION = 1

# Artifact filename constants (stable contract identifiers).
ANALYSIS_JSON = "analysis.json"
FUNCTIONS_JSONL = "functions.jsonl"
EXTERNAL_CALLS_JSONL = "external_calls.jsonl"
TRIGGERS_JSONL = "triggers.jsonl"
CONNECTED_RESOURCES_JSONL = "connected_resources.jsonl"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for one stored analysis artifact."""

    filename: str
    format: str
    required_fields_note: str


# ---------------------------------------------------------------------------
# Code locations
# ---------------------------------------------------------------------------
# Canonical location format: {file}:{line}
# - file: source file name as given in the SourceUnit
# - line: 1-based integer


def build_location(file_name: str | None, line: int) -> str:
    """Build a code location string following the contract format.

    Format: ``{file}:{line}``, or ``line {line}`` when the file is unknown.
    """
    if not file_name:
        return f"line {line}"
    return f"{file_name}:{line}"


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "analysis": ArtifactSpec(
        filename=ANALYSIS_JSON,
        format="json",
        required_fields_note="AnalysisResult fields required by contract.",
    ),
    "functions": ArtifactSpec(
        filename=FUNCTIONS_JSONL,
        format="jsonl",
        required_fields_note="FunctionRecord fields required by contract.",
    ),
    "external_calls": ArtifactSpec(
        filename=EXTERNAL_CALLS_JSONL,
        format="jsonl",
        required_fields_note="ExternalCall fields required by contract.",
    ),
    "triggers": ArtifactSpec(
        filename=TRIGGERS_JSONL,
        format="jsonl",
        required_fields_note="TriggerRecord fields required by contract.",
    ),
    "connected_resources": ArtifactSpec(
        filename=CONNECTED_RESOURCES_JSONL,
        format="jsonl",
        required_fields_note="ConnectedResource fields required by contract.",
    ),
}
