"""Data transformation extraction: map, reduce, filter and object reshaping."""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import DataTransformation
from logic.explain import explain_condition
from logic.vocabulary import format_variable_name, is_business_condition, is_business_variable
from parse.text import match_bracket

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from artifacts.models.artifacts.source import SourceFile

_CALLBACK_HEAD = re.compile(
    r"\s*(?:\(?\s*([\w$]+)\s*(?:,\s*([\w$]+)\s*)?(?:,[^)]*)?\)?\s*=>"
    r"|function\s*[\w$]*\s*\(\s*([\w$]+)\s*(?:,\s*([\w$]+)\s*)?[^)]*\))\s*"
)
_RETURN_OBJECT = re.compile(r"\breturn\s*\{([^{}]+)\}")
_RETURN_VALUE = re.compile(r"\breturn\s+([^;]+)")
_OBJECT_EXPRESSION = re.compile(r"^\(?\s*\{([^{}]*)\}")
_FIELD_KEY = re.compile(r"([\w$]+)\s*:")
_RESHAPE = re.compile(r"(?<![\w$.])([\w$]+)\s*=\s*\{\s*([\w$]+)\s*:\s*([\w$]+)\.([\w$]+)")


@dataclass(frozen=True)
class _Callback:
    """A collection-method callback: parameter names, body and trailing args."""

    first: str
    second: str | None
    body: str
    rest: str


def _split_top_level_comma(text: str) -> tuple[str, str]:
    """Split ``text`` at its last top-level comma: (before, after)."""
    depth = 0
    split = -1
    for index, char in enumerate(text):
        if char in "({[":
            depth += 1
        elif char in ")}]":
            depth -= 1
        elif char == "," and depth == 0:
            split = index
    if split == -1:
        return text, ""
    return text[:split], text[split + 1 :]


def _callbacks(text: str, method: str) -> Iterator[_Callback]:
    for match in re.finditer(rf"\.{method}\s*\(", text):
        paren = match.end() - 1
        close = match_bracket(text, paren)
        if close is None:
            continue
        args = text[paren + 1 : close]
        head = _CALLBACK_HEAD.match(args)
        if head is None:
            continue
        first = head.group(1) or head.group(3)
        second = head.group(2) or head.group(4)
        remainder = args[head.end() :]
        if method == "reduce":
            body, rest = _split_top_level_comma(remainder)
        else:
            body, rest = remainder, ""
        yield _Callback(first, second, body.strip(), rest.strip())


def _block_contents(body: str) -> str:
    if body.startswith("{") and body.endswith("}"):
        return body[1:-1].strip()
    return body


def infer_transform_purpose(body: str, param: str) -> str:
    lower = body.lower()
    if "email" in lower or "name" in lower or "employee" in lower:
        return "Extracts and formats employee/user information for display or notification"
    if "date" in lower or "format" in lower:
        return "Formats dates for proper display or API requirements"
    if "status" in lower:
        return "Extracts status information for reporting or processing"
    if "balance" in lower or "amount" in lower:
        return "Prepares financial/balance data for calculations or display"
    if "row" in lower or "sheet" in lower:
        return "Transforms spreadsheet data into structured objects"
    return f"Transforms {format_variable_name(param)} data into required format"


def infer_aggregate_purpose(body: str, accumulator: str) -> str:
    lower = body.lower()
    if "+" in lower or "sum" in lower or "total" in lower:
        return "Calculates total sum of values"
    if "count" in lower or "length" in lower or "++" in lower:
        return "Counts number of items matching criteria"
    if "group" in lower or ("[" in lower and "push" in lower):
        return "Groups items by category or key"
    return f"Aggregates data into {format_variable_name(accumulator)}"


def _mapped_fields(body: str) -> list[str] | None:
    """Output keys of a mapping callback, [] for a non-object result, None if unknown."""
    if body.startswith("{"):
        obj = _RETURN_OBJECT.search(body)
        if obj is not None:
            return _FIELD_KEY.findall(obj.group(1))
        return [] if _RETURN_VALUE.search(body) else None
    obj = _OBJECT_EXPRESSION.match(body)
    if obj is not None:
        return _FIELD_KEY.findall(obj.group(1))
    return [] if body else None


def _map_transforms(source: SourceFile, ids: Iterator[int]) -> Iterator[DataTransformation]:
    for callback in _callbacks(source.text, "map"):
        fields = _mapped_fields(callback.body)
        if fields is None:
            continue
        if not fields and not is_business_condition(callback.body):
            continue
        label = format_variable_name(callback.first)
        yield DataTransformation(
            id=f"T{next(ids)}",
            name="Data Mapping Transformation",
            description=f"Transforms each {label} into a new format",
            input_format=f"Array of {label} objects",
            output_format=(
                f"Objects with: {', '.join(format_variable_name(f) for f in fields)}"
                if fields
                else "Transformed data structure"
            ),
            business_purpose=infer_transform_purpose(callback.body, callback.first),
        )


def _reduce_transforms(source: SourceFile, ids: Iterator[int]) -> Iterator[DataTransformation]:
    for callback in _callbacks(source.text, "reduce"):
        if callback.second is None:
            continue
        if callback.rest.startswith("{"):
            output = "Aggregated object"
        elif callback.rest.startswith("["):
            output = "Aggregated array"
        else:
            output = "Aggregated value"
        yield DataTransformation(
            id=f"T{next(ids)}",
            name="Data Aggregation",
            description=(
                f"Aggregates {format_variable_name(callback.second)} items into "
                f"{format_variable_name(callback.first)}"
            ),
            input_format="Array of items",
            output_format=output,
            business_purpose=infer_aggregate_purpose(callback.body, callback.first),
        )


def _filter_transforms(source: SourceFile, ids: Iterator[int]) -> Iterator[DataTransformation]:
    for callback in _callbacks(source.text, "filter"):
        condition = _block_contents(callback.body)
        returned = _RETURN_VALUE.search(condition)
        if returned is not None:
            condition = returned.group(1)
        condition = condition.strip().rstrip(";").strip()
        if not is_business_condition(condition):
            continue
        label = format_variable_name(callback.first)
        yield DataTransformation(
            id=f"T{next(ids)}",
            name="Data Filtering",
            description=f"Filters {label} items based on business criteria",
            input_format=f"Array of all {label} items",
            output_format=f"Array of {label} items matching criteria",
            business_purpose=f"Selects only items where: {explain_condition(condition)}",
        )


def _reshape_transforms(source: SourceFile, ids: Iterator[int]) -> Iterator[DataTransformation]:
    for match in _RESHAPE.finditer(source.text):
        target, _, origin, _ = match.groups()
        if not is_business_variable(target) and not is_business_variable(origin):
            continue
        yield DataTransformation(
            id=f"T{next(ids)}",
            name="Data Restructuring",
            description=(
                f"Restructures {format_variable_name(origin)} data into "
                f"{format_variable_name(target)} format"
            ),
            input_format=f"{format_variable_name(origin)} object",
            output_format=f"{format_variable_name(target)} object",
            business_purpose="Prepares data for processing or output",
        )


def extract_data_transformations(files: Sequence[SourceFile]) -> list[DataTransformation]:
    ids = count(1)
    transformations: list[DataTransformation] = []
    for family in (_map_transforms, _reduce_transforms, _filter_transforms, _reshape_transforms):
        for source in files:
            transformations.extend(family(source, ids))
    return transformations


__all__ = [
    "extract_data_transformations",
    "infer_aggregate_purpose",
    "infer_transform_purpose",
]
