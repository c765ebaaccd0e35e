"""Dependencies generator for scriptmap artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from parse.dependencies import extract_dependencies

if TYPE_CHECKING:
    from artifacts.models.artifacts.calls import DependencyRecord
    from artifacts.models.artifacts.resources import ConnectedResource
    from artifacts.models.artifacts.source import SourceUnit


class DepsGenerator:
    """Generates library and third-party API dependencies.

    Unlike the other generators this one also reads config files, where the
    manifest declares libraries. Identifiers already reported as connected
    resources are not repeated as libraries.
    """

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "dependencies"

    def generate(self, unit: SourceUnit, **kwargs: Any) -> list[DependencyRecord]:
        resources: list[ConnectedResource] = kwargs.get("resources") or []
        return extract_dependencies(
            unit.files,
            exclude_ids=[r.file_id for r in resources],
        )
