"""Connected-resource extraction: other first-party files a project touches."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from artifacts.models.artifacts.resources import ACTIVE_CONTAINER_ID, ConnectedResource
from contract.artifacts import build_location
from parse.text import line_at, window_after
from rules.config import ScriptMapConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artifacts.models.artifacts.source import SourceFile

logger = logging.getLogger(__name__)

_READ_CALLS = re.compile(r"\.getValue|\.getValues|\.getRange|\.getDataRange|\.getSheets|\.getName")
_WRITE_CALLS = re.compile(
    r"\.setValue|\.setValues|\.appendRow|\.insertRow|\.deleteRow|\.clear|\.setBackground"
)
_URL_ID_PATTERNS = (
    re.compile(r"/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"id=([a-zA-Z0-9_-]+)"),
)
_ACTIVE_CONTAINER = re.compile(
    r"\b(?:SpreadsheetApp\s*\.\s*(?:getActiveSpreadsheet|getActive)"
    r"|DocumentApp\s*\.\s*getActiveDocument)\s*\(\s*\)"
)


@dataclass(frozen=True)
class _OpenPattern:
    regex: re.Pattern[str]
    kind: str
    extracted_from: str
    by_url: bool = False
    url_template: str | None = None


_OPEN_PATTERNS = (
    _OpenPattern(
        re.compile(r"\bSpreadsheetApp\s*\.\s*openById\s*\(\s*['\"`]([a-zA-Z0-9_-]+)['\"`]\s*\)"),
        "spreadsheet",
        "openById",
        url_template="https://docs.google.com/spreadsheets/d/{}",
    ),
    _OpenPattern(
        re.compile(r"\bSpreadsheetApp\s*\.\s*openByUrl\s*\(\s*['\"`]([^'\"`]+)['\"`]\s*\)"),
        "spreadsheet",
        "openByUrl",
        by_url=True,
    ),
    _OpenPattern(
        re.compile(r"\bDriveApp\s*\.\s*getFileById\s*\(\s*['\"`]([a-zA-Z0-9_-]+)['\"`]\s*\)"),
        "drive-file",
        "getFileById",
        url_template="https://drive.google.com/file/d/{}",
    ),
    _OpenPattern(
        re.compile(r"\bDocumentApp\s*\.\s*openById\s*\(\s*['\"`]([a-zA-Z0-9_-]+)['\"`]\s*\)"),
        "document",
        "openById",
        url_template="https://docs.google.com/document/d/{}",
    ),
    _OpenPattern(
        re.compile(r"\bDocumentApp\s*\.\s*openByUrl\s*\(\s*['\"`]([^'\"`]+)['\"`]\s*\)"),
        "document",
        "openByUrl",
        by_url=True,
    ),
)


def id_from_url(url: str) -> str | None:
    """Pull a file identifier out of a document URL."""
    for pattern in _URL_ID_PATTERNS:
        match = pattern.search(url)
        if match is not None:
            return match.group(1)
    return None


def detect_access(text: str, index: int, window: int = 500) -> str:
    """Classify reads/writes in the window following a resource reference."""
    context = window_after(text, index, window)
    has_read = _READ_CALLS.search(context) is not None
    has_write = _WRITE_CALLS.search(context) is not None
    if has_read and has_write:
        return "read-write"
    if has_write:
        return "write"
    return "read"


def extract_connected_resources(
    files: Sequence[SourceFile],
    config: ScriptMapConfig | None = None,
) -> list[ConnectedResource]:
    """Find referenced spreadsheets, documents and drive files.

    Resources are unique by identifier across the unit. The active container
    is reported at most once and is always read-write.
    """
    config = config or ScriptMapConfig()
    window = config.windows.access
    resources: list[ConnectedResource] = []
    seen: set[str] = set()

    for source in files:
        text = source.text
        hits: list[tuple[int, ConnectedResource]] = []

        for pattern in _OPEN_PATTERNS:
            for match in pattern.regex.finditer(text):
                raw = match.group(1)
                if pattern.by_url:
                    file_id = id_from_url(raw)
                    file_url = raw
                else:
                    file_id = raw
                    file_url = pattern.url_template.format(raw) if pattern.url_template else None
                if not file_id or file_id in seen:
                    continue
                seen.add(file_id)
                hits.append(
                    (
                        match.start(),
                        ConnectedResource(
                            file_id=file_id,
                            kind=pattern.kind,
                            access=detect_access(text, match.start(), window),
                            extracted_from=pattern.extracted_from,
                            location=build_location(source.name, line_at(text, match.start())),
                            file_url=file_url,
                        ),
                    )
                )

        if ACTIVE_CONTAINER_ID not in seen:
            active = _ACTIVE_CONTAINER.search(text)
            if active is not None:
                seen.add(ACTIVE_CONTAINER_ID)
                hits.append(
                    (
                        active.start(),
                        ConnectedResource(
                            file_id=ACTIVE_CONTAINER_ID,
                            kind="active-container",
                            access="read-write",
                            extracted_from="active",
                            location=build_location(source.name, line_at(text, active.start())),
                            file_name="Container file",
                        ),
                    )
                )

        hits.sort(key=lambda item: item[0])
        resources.extend(resource for _, resource in hits)

    logger.debug("Found %d connected resource(s)", len(resources))
    return resources


__all__ = ["detect_access", "extract_connected_resources", "id_from_url"]
