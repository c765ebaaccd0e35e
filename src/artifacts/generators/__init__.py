"""Per-unit artifact generators for scriptmap."""

from artifacts.generators.advice import AdviceGenerator
from artifacts.generators.calls import CallsGenerator
from artifacts.generators.deps import DepsGenerator
from artifacts.generators.functions import FunctionsGenerator
from artifacts.generators.logic import LogicGenerator
from artifacts.generators.resources import ResourcesGenerator
from artifacts.generators.triggers import TriggersGenerator

__all__ = [
    "AdviceGenerator",
    "CallsGenerator",
    "DepsGenerator",
    "FunctionsGenerator",
    "LogicGenerator",
    "ResourcesGenerator",
    "TriggersGenerator",
]
