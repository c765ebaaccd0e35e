"""Function declaration and extent extraction for script files."""

from __future__ import annotations

import re

from artifacts.models.artifacts.functions import FunctionRecord
from parse.text import count_lines, extent_end, line_at

_FUNCTION_DECL = re.compile(r"\bfunction\s+([A-Za-z_$][\w$]*)\s*\(([^)]*)\)\s*\{")
_PRECEDING_BLOCK_COMMENT = re.compile(r"/\*\*?((?:(?!\*/)[\s\S])*)\*/\s*$")
_COMMENT_STAR = re.compile(r"^\s*\*+ ?", re.MULTILINE)
_DOC_TAG_LINE = re.compile(r"^\s*@\w+[^\n]*$", re.MULTILINE)
_WHITESPACE_RUN = re.compile(r"\s+")

# Only look this far back for a block comment attached to a declaration.
_COMMENT_LOOKBEHIND = 2000


def split_parameters(raw: str) -> list[str]:
    """Split a raw parameter list on commas, dropping blanks."""
    return [p.strip() for p in raw.split(",") if p.strip()]


def _preceding_description(text: str, start: int) -> str | None:
    """Text of the block comment immediately before ``start``, tags removed."""
    before = text[max(0, start - _COMMENT_LOOKBEHIND) : start]
    match = _PRECEDING_BLOCK_COMMENT.search(before)
    if match is None:
        return None
    body = _COMMENT_STAR.sub("", match.group(1))
    body = _DOC_TAG_LINE.sub("", body)
    description = _WHITESPACE_RUN.sub(" ", body).strip()
    return description or None


def extract_functions(text: str, file_name: str | None = None) -> list[FunctionRecord]:
    """Extract every function declaration in ``text``, in text order.

    The extent runs from the ``function`` keyword to the brace closing the
    body. Unbalanced braces make the extent run to the end of the text.
    """
    records: list[FunctionRecord] = []
    for match in _FUNCTION_DECL.finditer(text):
        name = match.group(1)
        start = match.start()
        end = extent_end(text, match.end() - 1)
        line_count = count_lines(text[start:end])
        start_line = line_at(text, start)

        records.append(
            FunctionRecord(
                name=name,
                parameters=split_parameters(match.group(2)),
                is_public=not name.startswith("_"),
                line_count=line_count,
                start_line=start_line,
                end_line=start_line + line_count - 1,
                description=_preceding_description(text, start),
                file_name=file_name,
            )
        )
    return records


def function_span(text: str, record: FunctionRecord) -> tuple[int, int]:
    """Character offsets (start, end) of the lines covered by a function."""
    lines = text.split("\n")
    start = sum(len(line) + 1 for line in lines[: record.start_line - 1])
    covered = lines[record.start_line - 1 : record.end_line]
    return start, start + len("\n".join(covered))


def function_body(text: str, record: FunctionRecord) -> str:
    """Re-slice the source lines covered by a function's extent."""
    start, end = function_span(text, record)
    return text[start:end]


__all__ = ["extract_functions", "function_body", "function_span", "split_parameters"]
