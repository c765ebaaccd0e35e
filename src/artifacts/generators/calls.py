"""External calls and platform services artifact generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from parse.external_calls import extract_external_calls, extract_google_services

if TYPE_CHECKING:
    from artifacts.models.artifacts.calls import ExternalCall, GoogleServiceUsage
    from artifacts.models.artifacts.source import SourceUnit
    from rules.config import ScriptMapConfig


class CallsGenerator:
    """Generates outbound HTTP endpoints and used platform services."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "calls"

    def generate(
        self,
        unit: SourceUnit,
        **kwargs: Any,
    ) -> tuple[list[ExternalCall], list[GoogleServiceUsage]]:
        """Generate external calls and Google service usage."""
        config: ScriptMapConfig | None = kwargs.get("config")
        files = unit.analyzable_files()
        return (
            extract_external_calls(files, config),
            extract_google_services(files, config),
        )
