"""Function models for script source artifacts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FunctionRecord(BaseModel):
    """A function declaration extracted from a script file."""

    model_config = ConfigDict(frozen=True)

    name: str
    parameters: list[str] = Field(default_factory=list)
    is_public: bool
    line_count: int
    start_line: int
    end_line: int
    description: str | None = None
    file_name: str | None = None


__all__ = ["FunctionRecord"]
