"""Model namespace for scriptmap artifact schemas."""

from artifacts.models.artifacts.analysis import AnalysisResult, FunctionalSummary
from artifacts.models.artifacts.calls import (
    DependencyRecord,
    ExternalCall,
    GoogleServiceUsage,
)
from artifacts.models.artifacts.functions import FunctionRecord
from artifacts.models.artifacts.logic import (
    BusinessCalculation,
    BusinessLogic,
    BusinessRequirement,
    BusinessRule,
    DataTransformation,
    DecisionNode,
    DecisionOutcome,
    StatusFlow,
    StatusTransition,
    StatusValue,
    ValidationCheck,
)
from artifacts.models.artifacts.resources import ConnectedResource
from artifacts.models.artifacts.source import SourceFile, SourceUnit
from artifacts.models.artifacts.triggers import TriggerRecord

__all__ = [
    "AnalysisResult",
    "BusinessCalculation",
    "BusinessLogic",
    "BusinessRequirement",
    "BusinessRule",
    "ConnectedResource",
    "DataTransformation",
    "DecisionNode",
    "DecisionOutcome",
    "DependencyRecord",
    "ExternalCall",
    "FunctionRecord",
    "FunctionalSummary",
    "GoogleServiceUsage",
    "SourceFile",
    "SourceUnit",
    "StatusFlow",
    "StatusTransition",
    "StatusValue",
    "TriggerRecord",
    "ValidationCheck",
]
