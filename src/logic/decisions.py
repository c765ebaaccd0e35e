"""Decision-tree extraction over guarded blocks."""

from __future__ import annotations

import re
from itertools import count
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import DecisionNode, DecisionOutcome
from contract.artifacts import build_location
from logic.actions import business_assignments, extract_action, status_value
from logic.explain import explain_condition
from logic.vocabulary import format_value, format_variable_name, is_business_condition
from parse.text import ConditionalBlock, iter_conditional_blocks, line_at

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from artifacts.models.artifacts.source import SourceFile

_RECIPIENT = re.compile(r"(?:to|recipient|email)\s*[:=]\s*['\"]?([^'\";\n]+)['\"]?", re.IGNORECASE)
_SUBJECT = re.compile(r"subject\s*[:=]\s*['\"]([^'\"]+)['\"]", re.IGNORECASE)
_RETURN_VALUE = re.compile(r"\breturn\s+([^;\n]+)")


def parse_decision_outcome(body: str) -> DecisionOutcome | None:
    """Summarise what happens on one branch, or None if nothing recognisable."""
    actions: list[str] = []
    explanations: list[str] = []

    sets_status = status_value(body)
    if sets_status is not None:
        actions.append(f'Set status to "{sets_status}"')
        explanations.append(f'Sets status to "{sets_status}"')

    sends_notification = False
    details: list[str] = []
    if "sendEmail" in body or "GmailApp" in body or "MailApp" in body:
        sends_notification = True
        recipient = _RECIPIENT.search(body)
        if recipient is not None:
            subject = _SUBJECT.search(body)
            suffix = f', Subject: "{subject.group(1)}"' if subject else ""
            details.append(f"Email to: {recipient.group(1).strip()}{suffix}")
        else:
            details.append("Sends email notification")
    if "slack" in body or "postMessage" in body or "webhook" in body:
        sends_notification = True
        details.append("Posts Slack message")
    notification_details = " ".join(details) or None
    if sends_notification:
        explanations.append(notification_details or "Sends notification")

    updates = list(
        dict.fromkeys(
            format_variable_name(name)
            for name, _ in business_assignments(body, skip_status=sets_status is not None)
        )
    )
    if updates:
        explanations.append(f"Updates: {', '.join(updates)}")

    returned = _RETURN_VALUE.search(body)
    if returned is not None:
        value = format_value(returned.group(1))
        actions.append(f"Return {value}")
        explanations.append(f"Returns {value}")

    if not explanations:
        fallback = extract_action(body)
        if fallback is None:
            return None
        return DecisionOutcome(action=fallback.summary, action_explained=fallback.explanation)

    return DecisionOutcome(
        action=", ".join(actions) or explanations[0],
        action_explained=". ".join(explanations),
        sets_status=sets_status,
        sends_notification=sends_notification,
        notification_details=notification_details,
        updates_data=updates or None,
    )


def _top_level_children(blocks: Sequence[ConditionalBlock], index: int) -> list[ConditionalBlock]:
    """Blocks directly inside the true body of blocks[index], in text order."""
    parent = blocks[index]
    children: list[ConditionalBlock] = []
    for block in blocks[index + 1 :]:
        if block.start >= parent.body_end:
            break
        if children and children[-1].contains(block.start):
            continue
        children.append(block)
    return children


def _file_nodes(
    source: SourceFile,
    consumed: set[int],
    ids: Iterator[int],
) -> Iterator[DecisionNode]:
    text = source.text
    blocks = list(iter_conditional_blocks(text))
    # end of the last emitted true body; blocks before it belong to that node
    covered_until = -1

    for index, block in enumerate(blocks):
        if block.start in consumed or block.start < covered_until:
            continue
        if not is_business_condition(block.condition):
            continue
        if_true = parse_decision_outcome(block.body)
        if if_true is None:
            continue

        node_id = f"D{next(ids)}"
        nested: list[DecisionNode] = []
        for child in _top_level_children(blocks, index):
            if child.start in consumed or not is_business_condition(child.condition):
                continue
            outcome = parse_decision_outcome(child.body)
            if outcome is None:
                continue
            nested.append(
                DecisionNode(
                    id=f"D{next(ids)}",
                    condition=child.condition,
                    condition_explained=explain_condition(child.condition),
                    if_true=outcome,
                    location=build_location(source.name, line_at(text, child.start)),
                )
            )

        covered_until = block.body_end
        yield DecisionNode(
            id=node_id,
            condition=block.condition,
            condition_explained=explain_condition(block.condition),
            if_true=if_true,
            if_false=parse_decision_outcome(block.else_body) if block.else_body else None,
            nested=nested or None,
            location=build_location(source.name, line_at(text, block.start)),
        )


def extract_decision_tree(
    files: Sequence[SourceFile],
    consumed: Mapping[str, set[int]] | None = None,
) -> list[DecisionNode]:
    """One node per business guard, with at most one level of children.

    Guards listed in ``consumed`` (file name -> ``if`` offsets already
    reported as validations) are skipped.
    """
    consumed = consumed or {}
    ids = count(1)
    nodes: list[DecisionNode] = []
    for source in files:
        nodes.extend(_file_nodes(source, consumed.get(source.name, set()), ids))
    return nodes


__all__ = ["extract_decision_tree", "parse_decision_outcome"]
