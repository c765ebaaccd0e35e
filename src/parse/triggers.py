"""Trigger and entry-point classification.

Two families are recognised: ``ScriptApp.newTrigger('fn')`` registration
chains (time-based or bound to a container event) and reserved function
names the host runtime calls on its own. Records come out in text order,
file by file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from artifacts.models.artifacts.triggers import TriggerRecord
from parse.text import match_bracket

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artifacts.models.artifacts.source import SourceFile

logger = logging.getLogger(__name__)

_NEW_TRIGGER = re.compile(r"\bScriptApp\s*\.\s*newTrigger\s*\(\s*(['\"`])([\w$]+)\1\s*\)")
_CHAIN_LINK = re.compile(r"\s*\.\s*([A-Za-z_]\w*)\s*\(")
_INTEGER = re.compile(r"^\s*(\d+)\s*$")
_WEEKDAY = re.compile(r"WeekDay\s*\.\s*([A-Z]+)")
# ``var builder = `` immediately before a newTrigger call
_BUILDER_BINDING = re.compile(r"\b([A-Za-z_$][\w$]*)\s*=\s*$")


@dataclass(frozen=True)
class ReservedTrigger:
    type: str
    source_event: str


# Function names the runtime invokes without any registration call.
RESERVED_TRIGGERS: dict[str, ReservedTrigger] = {
    "onOpen": ReservedTrigger("on-open", "spreadsheet"),
    "onEdit": ReservedTrigger("on-edit", "spreadsheet"),
    "onInstall": ReservedTrigger("other", "addon"),
    "onSelectionChange": ReservedTrigger("other", "spreadsheet"),
    "onChange": ReservedTrigger("other", "spreadsheet"),
    "onFormSubmit": ReservedTrigger("on-form-submit", "form"),
    "doGet": ReservedTrigger("web-request-get", "http"),
    "doPost": ReservedTrigger("web-request-post", "http"),
}

_EVENT_METHODS = {
    "onEdit": "on-edit",
    "onOpen": "on-open",
    "onFormSubmit": "on-form-submit",
    "onChange": "other",
}

_EVENT_SOURCES = {
    "forSpreadsheet": "spreadsheet",
    "forForm": "form",
    "forDocument": "document",
    "forUserCalendar": "calendar",
}


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def _int_arg(args: str, default: int = 1) -> int:
    match = _INTEGER.match(args)
    return int(match.group(1)) if match else default


def read_chain(text: str, start: int) -> list[tuple[str, str]]:
    """Read the ``.method(args)`` links following ``start``.

    Stops at the first non-link or at an unbalanced argument list.
    """
    links: list[tuple[str, str]] = []
    index = start
    while True:
        match = _CHAIN_LINK.match(text, index)
        if match is None:
            break
        paren = match.end() - 1
        close = match_bracket(text, paren)
        if close is None:
            break
        links.append((match.group(1), text[paren + 1 : close].strip()))
        index = close + 1
    return links


def describe_schedule(links: list[tuple[str, str]]) -> tuple[str, str]:
    """Build (schedule, schedule description) from a time-based chain."""
    methods = dict(links)
    schedule = "scheduled"

    if "everyMinutes" in methods:
        schedule = f"every {_plural(_int_arg(methods['everyMinutes']), 'minute')}"
    elif "everyHours" in methods:
        schedule = f"every {_plural(_int_arg(methods['everyHours']), 'hour')}"
    elif "everyDays" in methods:
        days = _int_arg(methods["everyDays"])
        schedule = "daily" if days == 1 else f"every {days} days"
    elif "everyWeeks" in methods:
        weeks = _int_arg(methods["everyWeeks"])
        schedule = "weekly" if weeks == 1 else f"every {weeks} weeks"
    elif "onWeekDay" in methods:
        schedule = "weekly"
    elif "at" in methods:
        schedule = "at specific time"
    elif "after" in methods:
        schedule = "once after a delay"

    if "onWeekDay" in methods:
        day = _WEEKDAY.search(methods["onWeekDay"])
        if day is not None:
            schedule += f" on {day.group(1).capitalize()}"
    if "atHour" in methods:
        hour = _INTEGER.match(methods["atHour"])
        if hour is not None:
            schedule += f" at {int(hour.group(1)):02d}:00"

    return schedule, f"Runs {schedule}"


def _programmatic_trigger(function_name: str, links: list[tuple[str, str]]) -> TriggerRecord | None:
    names = [name for name, _ in links]
    if "timeBased" in names:
        schedule, description = describe_schedule(links)
        return TriggerRecord(
            type="time-driven",
            function_name=function_name,
            schedule=schedule,
            schedule_description=description,
            is_programmatic=True,
            source_event="clock",
        )

    source = next((_EVENT_SOURCES[n] for n in names if n in _EVENT_SOURCES), None)
    for name in names:
        if name in _EVENT_METHODS:
            if source is None and name == "onFormSubmit":
                source = "form"
            return TriggerRecord(
                type=_EVENT_METHODS[name],
                function_name=function_name,
                is_programmatic=True,
                source_event=source,
            )
    return None


def builder_chain(text: str, match: re.Match[str], limit: int) -> list[tuple[str, str]]:
    """Links applied to a newTrigger builder, including through a variable.

    When the builder is bound with ``var t = ScriptApp.newTrigger(...)``,
    every later ``t.method(...)`` chain up to ``limit`` is appended.
    """
    links = read_chain(text, match.end())
    binding = _BUILDER_BINDING.search(text, 0, match.start())
    if binding is None:
        return links
    usage = re.compile(rf"(?<![\w$.]){re.escape(binding.group(1))}(?=\s*\.)")
    for use in usage.finditer(text, match.end(), limit):
        links.extend(read_chain(text, use.end()))
    return links


def _file_triggers(text: str, reserved_seen: set[str]) -> list[tuple[int, TriggerRecord]]:
    found: list[tuple[int, TriggerRecord]] = []

    registrations = list(_NEW_TRIGGER.finditer(text))
    for index, match in enumerate(registrations):
        limit = registrations[index + 1].start() if index + 1 < len(registrations) else len(text)
        record = _programmatic_trigger(match.group(2), builder_chain(text, match, limit))
        if record is not None:
            found.append((match.start(), record))

    for name, reserved in RESERVED_TRIGGERS.items():
        if name in reserved_seen:
            continue
        decl = re.search(rf"\bfunction\s+{name}\s*\(", text)
        if decl is None:
            continue
        reserved_seen.add(name)
        found.append(
            (
                decl.start(),
                TriggerRecord(
                    type=reserved.type,
                    function_name=name,
                    is_programmatic=False,
                    source_event=reserved.source_event,
                ),
            )
        )

    found.sort(key=lambda item: item[0])
    return found


def extract_triggers(files: Sequence[SourceFile]) -> list[TriggerRecord]:
    """Classify every trigger in the unit; an empty list means manual invocation."""
    triggers: list[TriggerRecord] = []
    seen: set[TriggerRecord] = set()
    reserved_seen: set[str] = set()

    for source in files:
        for _, record in _file_triggers(source.text, reserved_seen):
            if record in seen:
                continue
            seen.add(record)
            triggers.append(record)

    logger.debug("Classified %d trigger(s) across %d file(s)", len(triggers), len(files))
    return triggers


__all__ = [
    "RESERVED_TRIGGERS",
    "builder_chain",
    "describe_schedule",
    "extract_triggers",
    "read_chain",
]
