"""Code-quality advice generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from logic.advice import build_advice

if TYPE_CHECKING:
    from artifacts.models.artifacts.advice import ProjectAdvice
    from artifacts.models.artifacts.calls import ExternalCall
    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.source import SourceUnit


class AdviceGenerator:
    """Generates suggestions, warnings and recommendations for a unit.

    Reads the records the other generators produced (``functions``,
    ``external_calls``) plus the unit's ``complexity`` and ``lines_of_code``.
    """

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "advice"

    def generate(self, unit: SourceUnit, **kwargs: Any) -> ProjectAdvice:
        functions: list[FunctionRecord] = kwargs.get("functions") or []
        external_calls: list[ExternalCall] = kwargs.get("external_calls") or []
        return build_advice(
            unit.analyzable_files(),
            functions,
            external_calls,
            kwargs.get("complexity", "low"),
            kwargs.get("lines_of_code", 0),
        )
