"""Business logic generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from logic import extract_business_logic

if TYPE_CHECKING:
    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.logic import BusinessLogic
    from artifacts.models.artifacts.source import SourceUnit
    from rules.config import ScriptMapConfig


class LogicGenerator:
    """Generates the reconstructed business logic of a unit.

    Needs the unit's function records (``functions`` kwarg) to look inside
    validation functions and to relate requirements to functions.
    """

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "business_logic"

    def generate(self, unit: SourceUnit, **kwargs: Any) -> BusinessLogic:
        functions: list[FunctionRecord] = kwargs.get("functions") or []
        config: ScriptMapConfig | None = kwargs.get("config")
        return extract_business_logic(unit.name, unit.analyzable_files(), functions, config)
