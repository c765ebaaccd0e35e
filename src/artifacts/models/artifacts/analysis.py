"""Analysis result models.

AnalysisResult is the single value returned by the engine for one SourceUnit
and the document persisted as ``analysis.json``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from artifacts.models.artifacts.calls import (
    DependencyRecord,
    ExternalCall,
    GoogleServiceUsage,
)
from artifacts.models.artifacts.functions import FunctionRecord
from artifacts.models.artifacts.logic import (
    BusinessCalculation,
    BusinessRequirement,
    BusinessRule,
    DataTransformation,
    DecisionNode,
    StatusFlow,
    ValidationCheck,
)
from artifacts.models.artifacts.resources import ConnectedResource
from artifacts.models.artifacts.triggers import TriggerRecord
from contract.artifacts import ARTIFACT_SCHEMA_VERSION

Complexity = Literal["low", "medium", "high"]

EntryMode = Literal["manual", "triggered"]


class FunctionalSummary(BaseModel):
    """Plain-language description of what a project does."""

    model_config = ConfigDict(frozen=True)

    brief: str
    detailed: str
    workflow_steps: list[str] = Field(default_factory=list)
    input_sources: list[str] = Field(default_factory=list)
    output_targets: list[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Everything the engine derives from one SourceUnit."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    name: str
    lines_of_code: int = 0
    complexity: Complexity = "low"
    entry_mode: EntryMode = "manual"
    summary: str = ""
    functional_summary: FunctionalSummary
    functions: list[FunctionRecord] = Field(default_factory=list)
    external_calls: list[ExternalCall] = Field(default_factory=list)
    google_services: list[GoogleServiceUsage] = Field(default_factory=list)
    triggers: list[TriggerRecord] = Field(default_factory=list)
    connected_resources: list[ConnectedResource] = Field(default_factory=list)
    dependencies: list[DependencyRecord] = Field(default_factory=list)
    business_rules: list[BusinessRule] = Field(default_factory=list)
    validations: list[ValidationCheck] = Field(default_factory=list)
    status_flows: list[StatusFlow] = Field(default_factory=list)
    calculations: list[BusinessCalculation] = Field(default_factory=list)
    decision_tree: list[DecisionNode] = Field(default_factory=list)
    data_transformations: list[DataTransformation] = Field(default_factory=list)
    business_requirements: list[BusinessRequirement] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


__all__ = ["AnalysisResult", "Complexity", "EntryMode", "FunctionalSummary"]
