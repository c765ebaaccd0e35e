"""Outbound integration models.

External calls are keyed by (url, method); repeated call sites increment
``count`` instead of producing new records.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

DependencyKind = Literal["library", "api"]


class ExternalCall(BaseModel):
    """An outbound HTTP endpoint used by the project."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: HttpMethod = "GET"
    description: str
    count: int = 1
    location: str | None = None


class GoogleServiceUsage(BaseModel):
    """A platform service namespace referenced anywhere in the unit."""

    model_config = ConfigDict(frozen=True)

    service_name: str
    namespace: str


class DependencyRecord(BaseModel):
    """A library identifier or third-party API host the project relies on."""

    model_config = ConfigDict(frozen=True)

    kind: DependencyKind
    identifier: str
    name: str | None = None


__all__ = [
    "DependencyKind",
    "DependencyRecord",
    "ExternalCall",
    "GoogleServiceUsage",
    "HttpMethod",
]
