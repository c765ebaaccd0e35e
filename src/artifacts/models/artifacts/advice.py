"""Code-quality advice models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProjectAdvice(BaseModel):
    """Improvement hints derived from what the code does and does not use.

    ``suggestions`` are small code changes, ``warnings`` flag risks and
    ``recommendations`` are broader practices. Each list keeps rule order.
    """

    model_config = ConfigDict(frozen=True)

    suggestions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


__all__ = ["ProjectAdvice"]
