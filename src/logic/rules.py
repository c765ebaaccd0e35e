"""Business rule extraction: guarded blocks, ternaries and switches."""

from __future__ import annotations

import re
from itertools import count
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import BusinessRule
from contract.artifacts import build_location
from logic.actions import (
    determine_severity,
    extract_action,
    infer_rule_description,
    infer_rule_name,
)
from logic.explain import explain_condition
from logic.vocabulary import format_value, format_variable_name, is_business_condition
from parse.text import iter_conditional_blocks, line_at, match_bracket

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from artifacts.models.artifacts.source import SourceFile

_TERNARY = re.compile(
    r"(?<![\w$.])([A-Za-z_$][\w$]*)\s*=(?![=>])\s*([^?;\n{}=][^?;\n{}]*?)\s*\?\s*"
    r"(['\"][^'\"\n]+['\"]|[^:;\n]+?)\s*:\s*(['\"][^'\"\n]+['\"]|[^;\n]+)"
)
_SWITCH = re.compile(r"\bswitch\s*\(")
_SWITCH_SUBJECT = re.compile(r"^[\w$]+(?:\.[\w$]+)?$")
_CASE = re.compile(
    r"\bcase\s+['\"]?([\w$.-]+)['\"]?\s*:([\s\S]*?)(?=\bcase\b|\bdefault\b|\Z)"
)

# Conditions shorter than this are loop guards and flags, never rules.
_MIN_CONDITION = 5


def _block_rules(source: SourceFile, ids: Iterator[int]) -> Iterator[BusinessRule]:
    text = source.text
    for block in iter_conditional_blocks(text):
        condition = block.condition
        if len(condition) < _MIN_CONDITION or "typeof" in condition or "instanceof" in condition:
            continue
        if not is_business_condition(condition):
            continue
        action = extract_action(block.body)
        if action is None:
            continue
        yield BusinessRule(
            id=f"BR{next(ids)}",
            name=infer_rule_name(condition, action),
            description=infer_rule_description(condition, action),
            condition=condition,
            condition_explained=explain_condition(condition),
            action=action.summary,
            action_explained=action.explanation,
            severity=determine_severity(condition, action.summary),
            location=build_location(source.name, line_at(text, block.start)),
        )


def _ternary_rules(source: SourceFile, ids: Iterator[int]) -> Iterator[BusinessRule]:
    text = source.text
    for match in _TERNARY.finditer(text):
        variable, condition, if_true, if_false = (g.strip() for g in match.groups())
        if not is_business_condition(condition):
            continue
        label = format_variable_name(variable)
        explained = explain_condition(condition)
        yield BusinessRule(
            id=f"BR{next(ids)}",
            name=f"{label} Assignment Rule",
            description=f"Determines {label} based on condition",
            condition=condition,
            condition_explained=explained,
            action=f"Set {label} to {if_true} or {if_false}",
            action_explained=(
                f"If {explained}, then {label} is set to {format_value(if_true)}; "
                f"otherwise it's set to {format_value(if_false)}"
            ),
            severity=determine_severity(variable, condition),
            location=build_location(source.name, line_at(text, match.start())),
        )


def _switch_rules(source: SourceFile, ids: Iterator[int]) -> Iterator[BusinessRule]:
    text = source.text
    for match in _SWITCH.finditer(text):
        paren = match.end() - 1
        paren_close = match_bracket(text, paren)
        if paren_close is None:
            continue
        subject = text[paren + 1 : paren_close].strip()
        if not _SWITCH_SUBJECT.match(subject):
            continue
        brace = text.find("{", paren_close)
        if brace == -1 or text[paren_close + 1 : brace].strip():
            continue
        brace_close = match_bracket(text, brace)
        block = text[brace + 1 : brace_close if brace_close is not None else len(text)]

        clauses: list[tuple[str, str, str]] = []
        for case in _CASE.finditer(block):
            action = extract_action(case.group(2))
            if action is not None:
                clauses.append((case.group(1), action.summary, action.explanation))
        if not clauses:
            continue

        label = format_variable_name(subject.replace(".", "_"))
        yield BusinessRule(
            id=f"BR{next(ids)}",
            name=f"{label} Processing Rules",
            description=f"Handles different values of {label}",
            condition=f"Based on {label} value",
            condition_explained=(
                f"Different actions are taken depending on the value of {label}"
            ),
            action="; ".join(f"When {value}: {summary}" for value, summary, _ in clauses),
            action_explained=". ".join(
                f"If {label} equals {value}, then {explanation}"
                for value, _, explanation in clauses
            ),
            severity="important",
            location=build_location(source.name, line_at(text, match.start())),
        )


def extract_business_rules(files: Sequence[SourceFile]) -> list[BusinessRule]:
    """Rules from guarded blocks, then ternaries, then switches; ids run across all."""
    ids = count(1)
    rules: list[BusinessRule] = []
    for family in (_block_rules, _ternary_rules, _switch_rules):
        for source in files:
            rules.extend(family(source, ids))
    return rules


__all__ = ["extract_business_rules"]
