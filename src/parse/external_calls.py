"""Outbound network call and platform service detection.

Four pattern families feed one map keyed by (base URL, method), applied in
sequence: literal fetch call sites, URL-named variables, URL-ish config keys
and finally any other URL-shaped literal. Only the first family counts
repeated occurrences; the others only add endpoints whose base URL is not
yet known under any method.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from artifacts.models.artifacts.calls import ExternalCall, GoogleServiceUsage
from contract.artifacts import build_location
from parse.text import line_at, window_around
from rules.config import GENERIC_API_DESCRIPTION, ScriptMapConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artifacts.models.artifacts.source import SourceFile

_FETCH_CALL = re.compile(
    r"(?:\bUrlFetchApp\s*\.\s*fetch(?:All)?|(?<![.\w$])fetch)\s*\(\s*(['\"`])(.+?)\1"
)
_URL_VARIABLE = re.compile(
    r"\b(?:const|let|var)\s+[\w$]*[Uu]rl[\w$]*\s*=\s*(['\"`])(https?://[^'\"`\s]+)\1"
)
_CONFIG_URL = re.compile(
    r"\b(?:BASE_URL|API_URL|ENDPOINT|baseUrl|apiUrl|endpoint|api_url|base_url)"
    r"['\"]?\s*[:=]\s*(['\"`])(https?://[^'\"`\s]+)\1",
    re.IGNORECASE,
)
_GENERIC_URL = re.compile(
    r"(['\"`])(https?://(?!(?:docs|drive|sheets|script|www)\.google\.com)"
    r"[a-zA-Z0-9][a-zA-Z0-9\-._]*\.[a-zA-Z]{2,}[^'\"`\s]*)\1"
)
_STATIC_ASSET = re.compile(
    r"\.(?:png|jpe?g|gif|svg|css|js|ico|woff2?|ttf)$", re.IGNORECASE
)
_METHOD_LITERAL = re.compile(
    r"['\"]?method['\"]?\s*:\s*['\"](post|put|delete|patch)['\"]", re.IGNORECASE
)

# Precedence when several method literals sit in the same window.
_METHOD_PRIORITY = ("POST", "PUT", "DELETE", "PATCH")

GOOGLE_SERVICE_NAMESPACES: dict[str, str] = {
    "SpreadsheetApp": "Sheets",
    "DriveApp": "Drive",
    "GmailApp": "Gmail",
    "CalendarApp": "Calendar",
    "DocumentApp": "Docs",
    "SlidesApp": "Slides",
    "FormApp": "Forms",
    "ContactsApp": "Contacts",
    "UrlFetchApp": "URL Fetch",
    "CacheService": "Cache",
    "PropertiesService": "Properties",
    "ScriptApp": "Script",
    "HtmlService": "HTML",
    "ContentService": "Content",
    "LockService": "Lock",
    "Logger": "Logger",
    "Utilities": "Utilities",
    "CardService": "Cards",
    "Charts": "Charts",
}


def normalize_base_url(url: str) -> str:
    """Reduce a URL to scheme, host and its first path segment.

    Anything that does not parse as an absolute URL (template literals with a
    placeholder host, relative paths) falls back to its first 50 characters.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url[:50]
    if not parts.scheme or not parts.netloc or "$" in parts.netloc:
        return url[:50]
    segments = [s for s in parts.path.split("/") if s]
    first = f"/{segments[0]}" if segments else ""
    return f"{parts.scheme}://{parts.netloc}{first}"


def detect_http_method(text: str, index: int, window: int) -> str:
    """Infer the HTTP method from method literals near a call site."""
    found = {m.group(1).upper() for m in _METHOD_LITERAL.finditer(window_around(text, index, window))}
    for method in _METHOD_PRIORITY:
        if method in found:
            return method
    return "GET"


def describe_api(url: str, vendors: dict[str, str]) -> str:
    lower = url.lower()
    for keyword, description in vendors.items():
        if keyword.lower() in lower:
            return description
    return GENERIC_API_DESCRIPTION


@dataclass
class _CallEntry:
    url: str
    method: str
    description: str
    location: str
    count: int = 1


class _CallMap:
    """Insertion-ordered (base URL, method) -> entry accumulator."""

    def __init__(self, vendors: dict[str, str]) -> None:
        self._entries: dict[tuple[str, str], _CallEntry] = {}
        self._bases: set[str] = set()
        self._vendors = vendors

    def add(
        self,
        url: str,
        method: str,
        location: str,
        *,
        increment: bool,
    ) -> None:
        key = (normalize_base_url(url), method)
        existing = self._entries.get(key)
        if existing is not None:
            if increment:
                existing.count += 1
            return
        # secondary families never add a second method for a known endpoint
        if not increment and key[0] in self._bases:
            return
        self._bases.add(key[0])
        self._entries[key] = _CallEntry(
            url=key[0],
            method=method,
            description=describe_api(url, self._vendors),
            location=location,
        )

    def records(self) -> list[ExternalCall]:
        return [
            ExternalCall(
                url=e.url,
                method=e.method,
                description=e.description,
                count=e.count,
                location=e.location,
            )
            for e in self._entries.values()
        ]


def extract_external_calls(
    files: Sequence[SourceFile],
    config: ScriptMapConfig | None = None,
) -> list[ExternalCall]:
    """Detect outbound HTTP endpoints across all files of a unit."""
    config = config or ScriptMapConfig()
    calls = _CallMap(config.api_vendors)

    for source in files:
        text = source.text
        for match in _FETCH_CALL.finditer(text):
            method = detect_http_method(text, match.start(), config.windows.method)
            calls.add(
                match.group(2),
                method,
                build_location(source.name, line_at(text, match.start())),
                increment=True,
            )

    for pattern in (_URL_VARIABLE, _CONFIG_URL, _GENERIC_URL):
        for source in files:
            text = source.text
            for match in pattern.finditer(text):
                url = match.group(2)
                if pattern is _GENERIC_URL and _STATIC_ASSET.search(url.split("?")[0]):
                    continue
                calls.add(
                    url,
                    "GET",
                    build_location(source.name, line_at(text, match.start())),
                    increment=False,
                )

    return calls.records()


def extract_google_services(
    files: Sequence[SourceFile],
    config: ScriptMapConfig | None = None,
) -> list[GoogleServiceUsage]:
    """Return the platform services whose namespace token appears anywhere."""
    config = config or ScriptMapConfig()
    table = {**GOOGLE_SERVICE_NAMESPACES, **config.google_services}

    used: list[GoogleServiceUsage] = []
    seen: set[str] = set()
    for namespace, service_name in table.items():
        token = re.compile(rf"\b{re.escape(namespace)}\b")
        if service_name in seen:
            continue
        if any(token.search(source.text) for source in files):
            seen.add(service_name)
            used.append(GoogleServiceUsage(service_name=service_name, namespace=namespace))
    return used


__all__ = [
    "GOOGLE_SERVICE_NAMESPACES",
    "describe_api",
    "detect_http_method",
    "extract_external_calls",
    "extract_google_services",
    "normalize_base_url",
]
