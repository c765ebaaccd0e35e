"""Configuration for scriptmap analysis runs."""

from rules.config import (
    ComplexityConfig,
    ConfigError,
    ScriptMapConfig,
    WindowsConfig,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "ComplexityConfig",
    "ConfigError",
    "ScriptMapConfig",
    "WindowsConfig",
    "load_config",
    "resolve_output_dir",
]
