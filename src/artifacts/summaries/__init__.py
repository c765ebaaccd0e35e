"""Summary helpers for scriptmap analysis results."""

from artifacts.summaries.builders import (
    build_functional_summary,
    build_one_line_summary,
    build_workflow_steps,
)

__all__ = [
    "build_functional_summary",
    "build_one_line_summary",
    "build_workflow_steps",
]
