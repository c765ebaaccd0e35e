"""Stable engine/storage contract surface for scriptmap.

Filenames, formats and the schema version of stored analyses. Models and
validation helpers are resolved lazily to keep this import cheap.
"""

from contract.artifacts import (
    ANALYSIS_JSON,
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    CONNECTED_RESOURCES_JSONL,
    EXTERNAL_CALLS_JSONL,
    FUNCTIONS_JSONL,
    TRIGGERS_JSONL,
    ArtifactSpec,
    build_location,
)

_MODEL_NAMES = {
    "AnalysisResult",
    "ConnectedResource",
    "ExternalCall",
    "FunctionRecord",
    "TriggerRecord",
}
_VALIDATION_NAMES = {"ValidationMessage", "ValidationResult", "validate_artifacts"}


def __getattr__(name: str) -> object:
    if name in _MODEL_NAMES:
        from contract import models

        return getattr(models, name)

    if name in _VALIDATION_NAMES:
        from contract import validation

        return getattr(validation, name)

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ANALYSIS_JSON",
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "CONNECTED_RESOURCES_JSONL",
    "EXTERNAL_CALLS_JSONL",
    "FUNCTIONS_JSONL",
    "TRIGGERS_JSONL",
    "AnalysisResult",
    "ArtifactSpec",
    "ConnectedResource",
    "ExternalCall",
    "FunctionRecord",
    "TriggerRecord",
    "ValidationMessage",
    "ValidationResult",
    "build_location",
    "validate_artifacts",
]
