"""Text-scanning primitives shared by every extractor.

Bracket matching here is deliberately lexical: it counts bracket characters
without skipping string literals or comments, so a literal brace inside a
string shifts the computed extent. Line counts and complexity tiers depend on
these semantics.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_PAIRS = {"{": "}", "(": ")", "[": "]"}

_IF_START = re.compile(r"\bif\s*\(")
_ELSE_BLOCK = re.compile(r"\s*else\s*\{")


def line_at(text: str, index: int) -> int:
    """Return the 1-based line number of ``index`` within ``text``."""
    return text.count("\n", 0, max(0, index)) + 1


def count_lines(text: str) -> int:
    """Number of lines in ``text``; an empty text has zero lines."""
    if not text:
        return 0
    return text.count("\n") + 1


def match_bracket(text: str, open_index: int) -> int | None:
    """Return the index of the bracket closing the one at ``open_index``.

    Returns None when the bracket is never closed.
    """
    opener = text[open_index]
    closer = _PAIRS[opener]
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index
    return None


def extent_end(text: str, open_index: int) -> int:
    """Return the end offset (exclusive) of the block opened at ``open_index``.

    Unbalanced input degrades to an extent running to the end of the text.
    """
    close = match_bracket(text, open_index)
    if close is None:
        return len(text)
    return close + 1


@dataclass(frozen=True)
class ConditionalBlock:
    """An ``if (...) { ... }`` block with an optional plain ``else`` body."""

    condition: str
    body: str
    else_body: str | None
    start: int
    end: int
    # offset just past the true body, before any else
    body_end: int

    def contains(self, offset: int) -> bool:
        return self.start < offset < self.end


def _skip_space(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def iter_conditional_blocks(text: str) -> Iterator[ConditionalBlock]:
    """Yield every braced ``if`` block in text order, nested ones included.

    An ``else if`` is reported as its own block; only a plain ``else { }``
    becomes ``else_body``. Single-statement ``if`` without braces is skipped.
    """
    for match in _IF_START.finditer(text):
        paren = match.end() - 1
        paren_close = match_bracket(text, paren)
        if paren_close is None:
            continue

        brace = _skip_space(text, paren_close + 1)
        if brace >= len(text) or text[brace] != "{":
            continue

        body_close = match_bracket(text, brace)
        if body_close is None:
            body = text[brace + 1 :]
            end = len(text)
        else:
            body = text[brace + 1 : body_close]
            end = body_close + 1
        body_end = end

        else_body: str | None = None
        else_match = _ELSE_BLOCK.match(text, end)
        if else_match is not None:
            else_open = else_match.end() - 1
            else_close = match_bracket(text, else_open)
            if else_close is None:
                else_body = text[else_open + 1 :]
                end = len(text)
            else:
                else_body = text[else_open + 1 : else_close]
                end = else_close + 1

        yield ConditionalBlock(
            condition=text[paren + 1 : paren_close].strip(),
            body=body.strip(),
            else_body=else_body.strip() if else_body is not None else None,
            start=match.start(),
            end=end,
            body_end=body_end,
        )


def window_after(text: str, index: int, size: int) -> str:
    return text[index : min(len(text), index + size)]


def window_around(text: str, index: int, size: int) -> str:
    return text[max(0, index - size) : index + size]


__all__ = [
    "ConditionalBlock",
    "count_lines",
    "extent_end",
    "iter_conditional_blocks",
    "line_at",
    "match_bracket",
    "window_after",
    "window_around",
]
