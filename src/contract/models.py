"""Record models exposed at the engine/storage boundary."""

from artifacts.models.artifacts.analysis import AnalysisResult
from artifacts.models.artifacts.calls import ExternalCall
from artifacts.models.artifacts.functions import FunctionRecord
from artifacts.models.artifacts.resources import ConnectedResource
from artifacts.models.artifacts.triggers import TriggerRecord

__all__ = [
    "AnalysisResult",
    "ConnectedResource",
    "ExternalCall",
    "FunctionRecord",
    "TriggerRecord",
]
