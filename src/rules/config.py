from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "scriptmap.toml"

DEFAULT_TERMINAL_STATUSES = [
    "approved",
    "rejected",
    "cancelled",
    "completed",
    "closed",
    "expired",
    "failed",
    "success",
    "terminated",
    "archived",
]

# Ordered: the first keyword found in a URL wins.
DEFAULT_API_VENDORS: dict[str, str] = {
    "slack": "Slack API",
    "salesforce": "Salesforce API",
    "workable": "Workable API",
    "jisr": "Jisr HR API",
    "attendance": "Jisr HR API",
    "webhook": "Webhook endpoint",
    "notion": "Notion API",
    "airtable": "Airtable API",
    "hubspot": "HubSpot API",
    "stripe": "Stripe API",
    "twilio": "Twilio API",
    "sendgrid": "SendGrid API",
    "api": "External API",
}

GENERIC_API_DESCRIPTION = "HTTP request"


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ComplexityConfig(_StrictModel):
    """Line-count cutoffs for the low/medium/high complexity tiers."""

    low_max_lines: int = Field(
        default=100,
        description="Units with fewer lines than this are 'low'",
    )
    medium_max_lines: int = Field(
        default=500,
        description="Units with fewer lines than this (and not low) are 'medium'",
    )

    @field_validator("low_max_lines", "medium_max_lines")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 0:
            msg = "complexity cutoffs must be non-negative"
            raise ValueError(msg)
        return v

    def tier(self, lines_of_code: int) -> str:
        if lines_of_code < self.low_max_lines:
            return "low"
        if lines_of_code < self.medium_max_lines:
            return "medium"
        return "high"


class WindowsConfig(_StrictModel):
    """Sizes (in characters) of the text windows heuristics look at."""

    method: int = Field(
        default=200,
        description="Chars either side of a fetch call searched for the HTTP method",
    )
    access: int = Field(
        default=500,
        description="Chars after a resource reference searched for reads/writes",
    )
    status_effects: int = Field(
        default=200,
        description="Chars after a status assignment searched for side effects",
    )


class ScriptMapConfig(_StrictModel):
    """Configuration for scriptmap analysis runs."""

    output_dir: str = Field(
        default=".scriptmap",
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all script files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    complexity: ComplexityConfig = Field(
        default_factory=ComplexityConfig,
        description="Complexity tier cutoffs",
    )
    windows: WindowsConfig = Field(
        default_factory=WindowsConfig,
        description="Heuristic text window sizes",
    )
    terminal_statuses: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TERMINAL_STATUSES),
        description="Status values treated as terminal",
    )
    api_vendors: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_API_VENDORS),
        description="Ordered URL keyword -> API description table",
    )
    google_services: dict[str, str] = Field(
        default_factory=dict,
        description="Additional service rules: namespace token -> service name",
    )

    @field_validator("terminal_statuses", mode="before")
    @classmethod
    def validate_terminal_statuses(cls, v: Any) -> Any:
        """Normalise terminal statuses to lowercase strings."""
        if v is None:
            return []
        if not isinstance(v, list) or not all(isinstance(s, str) for s in v):
            msg = "terminal_statuses must be a list of strings"
            raise TypeError(msg)
        return [s.lower() for s in v]

    @field_validator("api_vendors", "google_services", mode="before")
    @classmethod
    def validate_string_table(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, dict):
            msg = "expected a mapping of str -> str"
            raise TypeError(msg)
        for key, value in v.items():
            if not isinstance(key, str) or not isinstance(value, str):
                msg = "expected a mapping of str -> str"
                raise TypeError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> ScriptMapConfig:
    """Load configuration from scriptmap.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ScriptMapConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ScriptMapConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
