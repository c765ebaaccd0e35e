"""Code-quality advice: suggestions, warnings and recommendations.

Each list comes from its own rule table and every rule is a plain predicate
over the unit's code and findings. A unit without any code gets no advice.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from artifacts.models.artifacts.advice import ProjectAdvice

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from artifacts.models.artifacts.calls import ExternalCall
    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.source import SourceFile

LONG_FUNCTION_LINES = 50
LARGE_UNIT_LINES = 500

_TRY = re.compile(r"\btry\s*\{")
_CATCH = re.compile(r"\bcatch\s*[({]")
_ANY_LOG = re.compile(r"\b(?:Logger|console)\.log\s*\(")
_LOGGER_LOG = re.compile(r"\bLogger\.log\s*\(")
_NUMERIC_ID = re.compile(r"(['\"`])\d{10,}\1")
_CELL_READ = re.compile(r"\.getRange\([^)]+\)\.getValue\(\)")
_CREDENTIAL_MENTION = re.compile(r"password|\bapiKey\s*=|\btoken\s*=")
_CREDENTIAL_LITERAL = re.compile(r"\b(?:password|apiKey|token)\s*=\s*['\"][^'\"]+['\"]")
# a comment opener not preceded by a URL scheme
_COMMENT = re.compile(r"/\*\*|(?:^|[\s;{}])//", re.MULTILINE)

_NO_PROBLEMS = (
    "This script follows good practices. "
    "Consider periodic reviews for optimization opportunities."
)


@dataclass(frozen=True)
class _Signals:
    code: str
    functions: Sequence[FunctionRecord]
    external_calls: Sequence[ExternalCall]
    complexity: str
    lines_of_code: int

    def has(self, pattern: re.Pattern[str]) -> bool:
        return pattern.search(self.code) is not None

    def uses(self, fragment: str) -> bool:
        return fragment in self.code

    def long_functions(self) -> list[str]:
        return [f.name for f in self.functions if f.line_count > LONG_FUNCTION_LINES]


@dataclass(frozen=True)
class _Rule:
    applies: Callable[[_Signals], bool]
    message: Callable[[_Signals], str]


def _fixed(text: str) -> Callable[[_Signals], str]:
    return lambda _: text


def _no_error_handling(s: _Signals) -> bool:
    return not (s.has(_TRY) and s.has(_CATCH))


def _hardcoded_credentials(s: _Signals) -> bool:
    if not s.has(_CREDENTIAL_MENTION):
        return False
    return not s.uses("PropertiesService") or s.has(_CREDENTIAL_LITERAL)


_SUGGESTIONS = (
    _Rule(
        _no_error_handling,
        _fixed("Add try-catch error handling for better reliability"),
    ),
    _Rule(
        lambda s: not s.has(_ANY_LOG),
        _fixed("Add logging for easier debugging"),
    ),
    _Rule(
        lambda s: bool(s.long_functions()),
        lambda s: f"Consider breaking down long functions: {', '.join(s.long_functions())}",
    ),
    _Rule(
        lambda s: s.has(_NUMERIC_ID),
        _fixed("Move hardcoded IDs to PropertiesService for flexibility"),
    ),
    _Rule(
        lambda s: bool(s.external_calls) and not s.uses("Utilities.sleep"),
        _fixed("Consider adding rate limiting (Utilities.sleep) for external API calls"),
    ),
    _Rule(
        lambda s: bool(s.external_calls) and not s.uses("CacheService"),
        _fixed("Consider using CacheService to cache external API responses"),
    ),
    _Rule(
        lambda s: s.has(_CELL_READ),
        _fixed("Use getValues() for batch reads instead of individual getValue() calls"),
    ),
)

_WARNINGS = (
    _Rule(
        _hardcoded_credentials,
        _fixed(
            "Potential hardcoded credentials detected. "
            "Consider using Script Properties for sensitive data."
        ),
    ),
    _Rule(
        lambda s: not s.has(_TRY) and not s.has(_CATCH),
        _fixed("No error handling detected. Consider adding try-catch blocks for robustness."),
    ),
    _Rule(
        lambda s: not s.has(_ANY_LOG),
        _fixed("No logging detected. Consider adding logging for debugging and monitoring."),
    ),
    _Rule(
        lambda s: s.uses("getDataRange()") and s.uses("getValues()") and not s.uses("getRange("),
        _fixed("Reading entire data range may cause performance issues with large datasets."),
    ),
    _Rule(
        lambda s: len(s.external_calls) > 2 and not s.uses("Utilities.sleep"),
        _fixed("Multiple API calls without rate limiting may hit quota limits."),
    ),
)

_RECOMMENDATIONS = (
    _Rule(
        lambda s: s.complexity == "high" or s.lines_of_code > LARGE_UNIT_LINES,
        _fixed(
            "Consider splitting this script into smaller, more focused functions "
            "for better maintainability."
        ),
    ),
    _Rule(
        _no_error_handling,
        _fixed("Add error handling with try-catch blocks to gracefully handle failures."),
    ),
    _Rule(
        lambda s: not s.has(_LOGGER_LOG),
        _fixed("Add logging statements to track execution progress and debug issues."),
    ),
    _Rule(
        lambda s: not s.uses("PropertiesService"),
        _fixed("Use Script Properties to store configuration values instead of hardcoding."),
    ),
    _Rule(
        lambda s: not s.has(_COMMENT),
        _fixed("Add JSDoc comments and inline documentation for better code understanding."),
    ),
    _Rule(
        lambda s: s.uses("UrlFetchApp.fetch") and not s.uses("CacheService"),
        _fixed(
            "Consider caching API responses to reduce external calls and improve performance."
        ),
    ),
)


def _apply(rules: Sequence[_Rule], signals: _Signals) -> list[str]:
    return [rule.message(signals) for rule in rules if rule.applies(signals)]


def build_advice(
    files: Sequence[SourceFile],
    functions: Sequence[FunctionRecord],
    external_calls: Sequence[ExternalCall],
    complexity: str,
    lines_of_code: int,
) -> ProjectAdvice:
    """Advice for one unit. Recommendations never come back empty for real code."""
    code = "\n".join(source.text for source in files)
    if not code.strip():
        return ProjectAdvice()

    signals = _Signals(code, functions, external_calls, complexity, lines_of_code)
    return ProjectAdvice(
        suggestions=_apply(_SUGGESTIONS, signals),
        warnings=_apply(_WARNINGS, signals),
        recommendations=_apply(_RECOMMENDATIONS, signals) or [_NO_PROBLEMS],
    )


__all__ = ["LARGE_UNIT_LINES", "LONG_FUNCTION_LINES", "build_advice"]
