"""Business-logic models reconstructed from script source.

These records are advisory: they are produced by text heuristics and may
overlap across families (a guard can be both a rule and a validation).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["critical", "important", "standard"]

RequirementCategory = Literal[
    "workflow",
    "validation",
    "calculation",
    "integration",
    "notification",
    "reporting",
]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class BusinessRule(_Record):
    """A conditional block guarded by domain vocabulary, with its action."""

    id: str
    name: str
    description: str
    condition: str
    condition_explained: str
    action: str
    action_explained: str
    severity: Severity | None = None
    location: str | None = None


class ValidationCheck(_Record):
    """A guard that rejects bad input."""

    id: str
    field: str
    field_description: str
    condition: str
    condition_explained: str
    error_message: str | None = None
    on_pass: str
    on_fail: str
    location: str | None = None


class StatusValue(_Record):
    value: str
    meaning: str
    is_terminal: bool
    triggers: list[str] = Field(default_factory=list)


class StatusTransition(_Record):
    from_value: str
    to_value: str
    condition: str
    condition_explained: str
    action: str


class StatusFlow(_Record):
    """Observed values and transitions for one status-like field."""

    field: str
    values: list[StatusValue] = Field(default_factory=list)
    transitions: list[StatusTransition] = Field(default_factory=list)


class BusinessCalculation(_Record):
    id: str
    name: str
    description: str
    formula: str
    formula_explained: str
    inputs: list[str] = Field(default_factory=list)
    output: str
    example: str | None = None
    location: str | None = None


class DecisionOutcome(_Record):
    action: str
    action_explained: str
    sets_status: str | None = None
    sends_notification: bool = False
    notification_details: str | None = None
    updates_data: list[str] | None = None


class DecisionNode(_Record):
    id: str
    condition: str
    condition_explained: str
    if_true: DecisionOutcome
    if_false: DecisionOutcome | None = None
    nested: list[DecisionNode] | None = None
    location: str | None = None


DecisionNode.model_rebuild()


class DataTransformation(_Record):
    id: str
    name: str
    description: str
    input_format: str
    output_format: str
    business_purpose: str


class BusinessRequirement(_Record):
    id: str
    title: str
    description: str
    category: RequirementCategory
    related_functions: list[str] = Field(default_factory=list)


class BusinessLogic(_Record):
    """All business-logic families extracted from one unit."""

    business_rules: list[BusinessRule] = Field(default_factory=list)
    validations: list[ValidationCheck] = Field(default_factory=list)
    status_flows: list[StatusFlow] = Field(default_factory=list)
    calculations: list[BusinessCalculation] = Field(default_factory=list)
    decision_tree: list[DecisionNode] = Field(default_factory=list)
    data_transformations: list[DataTransformation] = Field(default_factory=list)
    business_requirements: list[BusinessRequirement] = Field(default_factory=list)


__all__ = [
    "BusinessCalculation",
    "BusinessLogic",
    "BusinessRequirement",
    "BusinessRule",
    "DataTransformation",
    "DecisionNode",
    "DecisionOutcome",
    "RequirementCategory",
    "Severity",
    "StatusFlow",
    "StatusTransition",
    "StatusValue",
    "ValidationCheck",
]
