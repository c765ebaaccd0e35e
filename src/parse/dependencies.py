"""Library and third-party API dependency detection."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import orjson

from artifacts.models.artifacts.calls import DependencyRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from artifacts.models.artifacts.source import SourceFile

logger = logging.getLogger(__name__)

# Script library ids are long opaque tokens; anything over 30 id chars counts.
_LIBRARY_LITERAL = re.compile(r"(['\"`])([A-Za-z0-9_-]{31,})\1")
_URL_LITERAL = re.compile(r"(['\"`])(https?://[^'\"`\s]+)\1")


def url_host(url: str) -> str | None:
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return None
    if not host or "$" in host:
        return None
    return host


def _manifest_libraries(text: str) -> list[DependencyRecord]:
    try:
        manifest: Any = orjson.loads(text)
    except orjson.JSONDecodeError:
        logger.debug("Skipping config file that is not valid JSON")
        return []
    if not isinstance(manifest, dict):
        return []

    dependencies = manifest.get("dependencies")
    libraries = dependencies.get("libraries") if isinstance(dependencies, dict) else None
    if not isinstance(libraries, list):
        return []

    records = []
    for library in libraries:
        if not isinstance(library, dict) or not isinstance(library.get("libraryId"), str):
            continue
        symbol = library.get("userSymbol")
        records.append(
            DependencyRecord(
                kind="library",
                identifier=library["libraryId"],
                name=symbol if isinstance(symbol, str) else None,
            )
        )
    return records


def extract_dependencies(
    files: Sequence[SourceFile],
    exclude_ids: Iterable[str] = (),
) -> list[DependencyRecord]:
    """Collect library ids, then external API hosts.

    Manifest-declared libraries come from config files, followed by long id
    literals found in code (minus ``exclude_ids``, typically connected file
    ids). API hosts of URL literals outside Google's own domains come after
    every library. Each group keeps first-occurrence order across files.
    """
    excluded = set(exclude_ids)
    records: list[DependencyRecord] = []
    seen: set[tuple[str, str]] = set()

    def add(record: DependencyRecord) -> None:
        key = (record.kind, record.identifier)
        if key in seen:
            return
        seen.add(key)
        records.append(record)

    for source in files:
        if source.kind == "config":
            for record in _manifest_libraries(source.text):
                add(record)

    code_files = [source for source in files if source.kind != "config"]
    for source in code_files:
        for match in _LIBRARY_LITERAL.finditer(source.text):
            identifier = match.group(2)
            if identifier not in excluded:
                add(DependencyRecord(kind="library", identifier=identifier))

    for source in code_files:
        for match in _URL_LITERAL.finditer(source.text):
            host = url_host(match.group(2))
            if host and "google" not in host:
                add(DependencyRecord(kind="api", identifier=host))

    logger.debug("Found %d dependency record(s)", len(records))
    return records


__all__ = ["extract_dependencies", "url_host"]
