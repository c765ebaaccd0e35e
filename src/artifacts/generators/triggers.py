"""Triggers artifact generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from parse.triggers import extract_triggers

if TYPE_CHECKING:
    from artifacts.models.artifacts.source import SourceUnit
    from artifacts.models.artifacts.triggers import TriggerRecord


class TriggersGenerator:
    """Generates trigger records (programmatic and reserved entry points)."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "triggers"

    def generate(self, unit: SourceUnit, **kwargs: Any) -> list[TriggerRecord]:
        return extract_triggers(unit.analyzable_files())
