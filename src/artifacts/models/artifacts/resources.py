"""Connected resource models (other files the project reads or writes)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

ResourceKind = Literal["spreadsheet", "document", "drive-file", "active-container"]

AccessMode = Literal["read", "write", "read-write"]

ACTIVE_CONTAINER_ID = "active"


class ConnectedResource(BaseModel):
    """A first-party file referenced from the project's source."""

    model_config = ConfigDict(frozen=True)

    file_id: str
    kind: ResourceKind
    access: AccessMode
    extracted_from: str
    location: str | None = None
    file_url: str | None = None
    file_name: str | None = None


__all__ = [
    "ACTIVE_CONTAINER_ID",
    "AccessMode",
    "ConnectedResource",
    "ResourceKind",
]
