"""Trigger and entry-point models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

TriggerType = Literal[
    "time-driven",
    "on-edit",
    "on-open",
    "on-form-submit",
    "web-request-get",
    "web-request-post",
    "other",
]


class TriggerRecord(BaseModel):
    """How the host runtime invokes one function of the project."""

    model_config = ConfigDict(frozen=True)

    type: TriggerType
    function_name: str
    schedule: str | None = None
    schedule_description: str | None = None
    is_programmatic: bool = False
    source_event: str | None = None


__all__ = ["TriggerRecord", "TriggerType"]
