"""Validation helpers for stored analysis artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import BaseModel, ValidationError

from contract.artifacts import ARTIFACT_SCHEMA_VERSION, ARTIFACT_SPECS
from contract.models import (
    AnalysisResult,
    ConnectedResource,
    ExternalCall,
    FunctionRecord,
    TriggerRecord,
)

if TYPE_CHECKING:
    from pathlib import Path

_JSONL_MODELS: dict[str, type[BaseModel]] = {
    "functions": FunctionRecord,
    "external_calls": ExternalCall,
    "triggers": TriggerRecord,
    "connected_resources": ConnectedResource,
}


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    """Re-parse every stored artifact in ``artifacts_dir`` against its model.

    Per-record JSONL files are also checked against the matching list in
    ``analysis.json`` so a partially rewritten directory is reported.
    """
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    analysis: AnalysisResult | None = None
    record_counts: dict[str, int] = {}

    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        if spec.format == "json":
            analysis = _validate_analysis(
                artifact_name,
                path,
                result,
                strict_schema_version=strict_schema_version,
            )
        elif spec.format == "jsonl":
            count = _validate_jsonl(
                artifact_name, path, _JSONL_MODELS[artifact_name], result
            )
            if count is not None:
                record_counts[artifact_name] = count
        else:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message=f"Unsupported artifact format: {spec.format}.",
                )
            )

    if analysis is not None:
        _check_record_counts(artifacts_dir, analysis, record_counts, result)

    return result


def _validate_jsonl(
    artifact_name: str,
    path: Path,
    model: type[BaseModel],
    result: ValidationResult,
) -> int | None:
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return None

    count = 0
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            count += 1
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            try:
                model.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
    return count


def _validate_analysis(
    artifact_name: str,
    path: Path,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> AnalysisResult | None:
    try:
        raw: Any = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return None

    if not isinstance(raw, dict):
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message="Expected JSON object for analysis.json.",
            )
        )
        return None

    schema_present = "schema_version" in raw
    try:
        analysis = AnalysisResult.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return None

    _check_schema_version(
        artifact_name,
        path,
        schema_present,
        analysis.schema_version,
        result,
        strict_schema_version=strict_schema_version,
    )
    return analysis


def _check_record_counts(
    artifacts_dir: Path,
    analysis: AnalysisResult,
    record_counts: dict[str, int],
    result: ValidationResult,
) -> None:
    for artifact_name, count in record_counts.items():
        expected = len(getattr(analysis, artifact_name))
        if count != expected:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=artifacts_dir / ARTIFACT_SPECS[artifact_name].filename,
                    message=(
                        f"Record count {count} disagrees with analysis.json "
                        f"({expected})."
                    ),
                )
            )


def _check_schema_version(
    artifact_name: str,
    path: Path,
    schema_present: bool,
    schema_version: int,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    if schema_present and schema_version != ARTIFACT_SCHEMA_VERSION:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=(
                    "Schema version mismatch: "
                    f"expected {ARTIFACT_SCHEMA_VERSION}, got {schema_version}."
                ),
            )
        )
        return

    if not schema_present:
        message = f"Missing schema_version; defaulted to {ARTIFACT_SCHEMA_VERSION}."
        target = result.errors if strict_schema_version else result.warnings
        target.append(
            ValidationMessage(artifact=artifact_name, path=path, message=message)
        )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
