"""Connected resources artifact generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from parse.resources import extract_connected_resources

if TYPE_CHECKING:
    from artifacts.models.artifacts.resources import ConnectedResource
    from artifacts.models.artifacts.source import SourceUnit
    from rules.config import ScriptMapConfig


class ResourcesGenerator:
    """Generates the spreadsheets, documents and drive files a unit touches."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "connected_resources"

    def generate(self, unit: SourceUnit, **kwargs: Any) -> list[ConnectedResource]:
        config: ScriptMapConfig | None = kwargs.get("config")
        return extract_connected_resources(unit.analyzable_files(), config)
