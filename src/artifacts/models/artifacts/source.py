"""Source models for automation projects.

A SourceUnit is the complete set of files making up one automation project.
It is supplied by the caller, analysed once and then discarded.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SourceKind = Literal["code", "markup", "config"]


class SourceFile(BaseModel):
    """One named file of an automation project."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: SourceKind = "code"
    text: str = ""


class SourceUnit(BaseModel):
    """Ordered list of source files plus the project's logical name."""

    model_config = ConfigDict(frozen=True)

    name: str
    files: list[SourceFile] = Field(default_factory=list)

    def analyzable_files(self) -> list[SourceFile]:
        """Files the extractors scan, in unit order (config files excluded)."""
        return [f for f in self.files if f.kind != "config"]


__all__ = ["SourceFile", "SourceKind", "SourceUnit"]
