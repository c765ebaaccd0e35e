"""Validation check extraction.

Three sources, numbered V1.. across all of them: guards inside functions
named validate*/check*/verify*, four inline guard shapes on business-named
fields, and a few named business checks. Guards claimed here are reported
back so decision-tree extraction can skip them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import ValidationCheck
from contract.artifacts import build_location
from logic.explain import explain_condition
from logic.vocabulary import format_variable_name, is_business_variable
from parse.functions import function_span
from parse.text import iter_conditional_blocks, line_at, match_bracket

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.source import SourceFile

_VALIDATOR_NAME = re.compile(r"^(?:validate|check|verify)", re.IGNORECASE)
_GUARD_FIELD = re.compile(r"([A-Za-z_$][\w$]*)(?:\s*\.\s*([A-Za-z_$][\w$]*))?")
_ASSIGNED_MESSAGE = re.compile(r"message\s*=\s*['\"]([^'\"]+)['\"]", re.IGNORECASE)
_ERROR_MESSAGES = (
    re.compile(r"(?:message|error|reason)\s*[:=]\s*['\"]([^'\"]+)['\"]", re.IGNORECASE),
    re.compile(r"throw\s+(?:new\s+)?\w+\s*\(\s*['\"]([^'\"]+)['\"]", re.IGNORECASE),
    re.compile(r"alert\s*\(\s*['\"]([^'\"]+)['\"]", re.IGNORECASE),
)
_ERROR_STATUS = re.compile(r"status.*(?:invalid|error|failed)", re.IGNORECASE)
_ERROR_WORD = re.compile(r"error|message", re.IGNORECASE)

_INLINE_SHAPES = (
    (
        "required",
        re.compile(
            r"\bif\s*\(\s*!([\w$]+)\s*(?:\|\|\s*\1\s*===?\s*(?:''|\"\")\s*)?\)\s*\{([^{}]+)\}"
        ),
    ),
    (
        "length",
        re.compile(r"\bif\s*\(\s*([\w$]+)\.length\s*([<>=!]+)\s*(\d+)\s*\)\s*\{([^{}]+)\}"),
    ),
    (
        "range",
        re.compile(
            r"\bif\s*\(\s*([\w$]+)\s*([<>]=?)\s*(\d+)\s*"
            r"(?:&&\s*\1\s*([<>]=?)\s*(\d+))?\s*\)\s*\{([^{}]+)\}"
        ),
    ),
    (
        "format",
        re.compile(
            r"\bif\s*\(\s*!?([\w$]+)\.(?:match|test|includes)\s*\(\s*"
            r"(?:/[^/\n]+/[gimsuy]*|'[^'\n]+'|\"[^\"\n]+\")\s*\)\s*\)\s*\{([^{}]+)\}"
        ),
    ),
)

_NAMED_CHECKS = (
    (
        re.compile(
            r"(\w+balance|\w+Balance|balance\w*)\s*([<>]=?)\s*"
            r"(\w+days|\w+Days|requested\w*|\w+amount)",
            re.IGNORECASE,
        ),
        "Balance",
        "Checks if available balance is sufficient for the request",
    ),
    (
        re.compile(r"probation\s*[=!]==?\s*(?:true|false)", re.IGNORECASE),
        "Probation Status",
        "Verifies employee probation period status",
    ),
    (
        re.compile(r"(?:joining|startDate|start_date)\s*[<>]=?\s*(?:today|new Date|current)", re.IGNORECASE),
        "Employment Date",
        "Validates employment dates against current date",
    ),
    (
        re.compile(r"(?:overlap|conflict)\s*(?:===?\s*true|\s*&&|\s*\|\|)", re.IGNORECASE),
        "Schedule Conflict",
        "Checks for scheduling conflicts with existing records",
    ),
)


@dataclass
class ValidationScan:
    checks: list[ValidationCheck] = field(default_factory=list)
    # file name -> offsets of guard ``if`` keywords claimed as validations
    consumed: dict[str, set[int]] = field(default_factory=dict)

    def claim(self, file_name: str, offset: int) -> None:
        self.consumed.setdefault(file_name, set()).add(offset)


def extract_error_message(body: str) -> str | None:
    for pattern in _ERROR_MESSAGES:
        match = pattern.search(body)
        if match is not None:
            return match.group(1)
    return None


def extract_fail_action(body: str) -> str:
    if "throw" in body:
        return "Throw error and stop execution"
    if "return false" in body:
        return "Return false to indicate validation failure"
    if "return null" in body:
        return "Return null to indicate no valid result"
    if "reject" in body:
        return "Reject the request"
    if "status" in body and _ERROR_STATUS.search(body):
        return "Set status to invalid/error"
    if "push" in body and _ERROR_WORD.search(body):
        return "Add error message to list"
    return "Handle validation failure"


def guarded_field(condition: str) -> str:
    match = _GUARD_FIELD.search(condition.lstrip("!( "))
    if match is None:
        return "field"
    return match.group(2) or match.group(1)


def _function_checks(
    files: Sequence[SourceFile],
    functions: Sequence[FunctionRecord],
    ids: Iterator[int],
    scan: ValidationScan,
) -> None:
    by_name = {source.name: source for source in files}
    for record in functions:
        if not _VALIDATOR_NAME.match(record.name):
            continue
        source = by_name.get(record.file_name or "")
        if source is None:
            continue
        start, end = function_span(source.text, record)
        for block in iter_conditional_blocks(source.text[start:end]):
            if "return" not in block.body and "throw" not in block.body:
                continue
            assigned = _ASSIGNED_MESSAGE.search(block.body)
            name = guarded_field(block.condition)
            scan.checks.append(
                ValidationCheck(
                    id=f"V{next(ids)}",
                    field=name,
                    field_description=format_variable_name(name),
                    condition=block.condition,
                    condition_explained=explain_condition(block.condition),
                    error_message=(
                        assigned.group(1) if assigned else extract_error_message(block.body)
                    ),
                    on_pass="Continue processing",
                    on_fail=extract_fail_action(block.body),
                    location=f"In {record.name}()",
                )
            )
            scan.claim(source.name, start + block.start)


def _guard_condition(text: str) -> str:
    paren = text.index("(")
    close = match_bracket(text, paren)
    return text[paren + 1 : close].strip() if close is not None else ""


def _inline_checks(files: Sequence[SourceFile], ids: Iterator[int], scan: ValidationScan) -> None:
    for shape, pattern in _INLINE_SHAPES:
        for source in files:
            for match in pattern.finditer(source.text):
                name = match.group(1)
                if not is_business_variable(name):
                    continue
                body = match.group(match.lastindex or 0)
                label = format_variable_name(name)
                scan.checks.append(
                    ValidationCheck(
                        id=f"V{next(ids)}",
                        field=name,
                        field_description=label,
                        condition=_guard_condition(match.group(0)),
                        condition_explained=f"Validates {label} ({shape} check)",
                        error_message=extract_error_message(body),
                        on_pass="Continue with valid data",
                        on_fail=extract_fail_action(body),
                        location=build_location(source.name, line_at(source.text, match.start())),
                    )
                )
                scan.claim(source.name, match.start())


def _named_checks(files: Sequence[SourceFile], ids: Iterator[int], scan: ValidationScan) -> None:
    for pattern, name, description in _NAMED_CHECKS:
        for source in files:
            match = pattern.search(source.text)
            if match is None:
                continue
            scan.checks.append(
                ValidationCheck(
                    id=f"V{next(ids)}",
                    field=name,
                    field_description=name,
                    condition=match.group(0),
                    condition_explained=description,
                    on_pass="Validation passes, continue processing",
                    on_fail="Validation fails, reject or require correction",
                    location=build_location(source.name, line_at(source.text, match.start())),
                )
            )
            break


def extract_validations(
    files: Sequence[SourceFile],
    functions: Sequence[FunctionRecord],
) -> ValidationScan:
    ids = count(1)
    scan = ValidationScan()
    _function_checks(files, functions, ids, scan)
    _inline_checks(files, ids, scan)
    _named_checks(files, ids, scan)
    return scan


__all__ = [
    "ValidationScan",
    "extract_error_message",
    "extract_fail_action",
    "extract_validations",
    "guarded_field",
]
