"""Status-flow reconstruction.

Every assignment to a status-like field contributes an observed value;
``if (status === 'A') { ... status = 'B' ... }`` contributes a transition
A -> B. Values and fields keep first-seen order across the unit.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import StatusFlow, StatusTransition, StatusValue
from logic.vocabulary import format_variable_name
from parse.text import iter_conditional_blocks, window_after
from rules.config import ScriptMapConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artifacts.models.artifacts.source import SourceFile

logger = logging.getLogger(__name__)

STATUS_ASSIGNMENT = re.compile(
    r"\[\s*['\"]([\w$]*status)['\"]\s*\]\s*=(?![=>])\s*['\"]([\w-]+)['\"]"
    r"|(?<![\w$])([\w$]*status)\s*=(?![=>])\s*['\"]([\w-]+)['\"]"
    r"|\bset([\w$]*status)\s*\(\s*['\"]([\w-]+)['\"]"
    r"|(?<![\w$])([\w$]*status)['\"]?\s*:\s*['\"]([\w-]+)['\"]",
    re.IGNORECASE,
)
_STATUS_ENUM = re.compile(r"\b[A-Z_]*STATUS(?:ES)?[A-Z_]*\s*[:=]\s*\{([^{}]*)\}")
_ENUM_VALUE = re.compile(r"[\w$]+\s*:\s*['\"]([\w-]+)['\"]")
_ENUM_KEY = re.compile(r"['\"]?([\w$]+)['\"]?\s*:")
_TRANSITION_GUARD = re.compile(
    r"(?:[\w$]+\s*\.\s*)?([\w$]*status)\s*===?\s*['\"]([\w-]+)['\"]", re.IGNORECASE
)

STATUS_MEANINGS = {
    "pending": "Awaiting review or action",
    "approved": "Request has been approved and is being processed",
    "rejected": "Request was denied",
    "cancelled": "Request was cancelled by the requester",
    "completed": "Process has been fully completed",
    "inprogress": "Currently being processed",
    "draft": "Saved but not yet submitted",
    "submitted": "Submitted and awaiting initial review",
    "active": "Currently active and in use",
    "inactive": "Not currently active",
    "expired": "Has passed its validity period",
    "error": "An error occurred during processing",
    "failed": "The process failed to complete",
    "success": "The process completed successfully",
    "valid": "Data has been validated",
    "invalid": "Data failed validation",
    "new": "Newly created, not yet processed",
    "open": "Open for action",
    "closed": "No longer open for action",
    "onhold": "Temporarily paused",
    "processing": "Currently being processed by the system",
}

_SIDE_EFFECTS = (
    (("sendEmail", "GmailApp"), "Sends email notification"),
    (("slack", "postMessage"), "Sends Slack notification"),
    (("setValues", "setValue"), "Updates spreadsheet"),
    (("UrlFetchApp",), "Calls external API"),
)


def normalize_field(name: str) -> str:
    """``STATUS`` -> ``status``, ``LeaveStatus`` -> ``leaveStatus``."""
    if name.isupper():
        return name.lower()
    return name[:1].lower() + name[1:]


def infer_status_meaning(value: str) -> str:
    key = value.lower().replace("-", "").replace("_", "")
    return STATUS_MEANINGS.get(key) or f"Status: {format_variable_name(value)}"


def side_effects(window: str) -> list[str]:
    return [label for needles, label in _SIDE_EFFECTS if any(n in window for n in needles)]


def _assignment_groups(match: re.Match[str]) -> tuple[str, str]:
    groups = match.groups()
    name, value = next(
        (groups[i], groups[i + 1]) for i in range(0, len(groups), 2) if groups[i] is not None
    )
    return normalize_field(name), value


@dataclass
class _FieldState:
    values: dict[str, list[str]] = field(default_factory=dict)
    transitions: dict[tuple[str, str], StatusTransition] = field(default_factory=dict)

    def observe(self, value: str, effects: list[str] | None = None) -> None:
        seen = self.values.setdefault(value, [])
        for effect in effects or ():
            if effect not in seen:
                seen.append(effect)


def _enum_values(body: str) -> list[str]:
    values = _ENUM_VALUE.findall(body)
    return values or _ENUM_KEY.findall(body)


def extract_status_flows(
    files: Sequence[SourceFile],
    config: ScriptMapConfig | None = None,
) -> list[StatusFlow]:
    config = config or ScriptMapConfig()
    terminal = set(config.terminal_statuses)
    fields: dict[str, _FieldState] = {}

    for source in files:
        text = source.text
        for match in STATUS_ASSIGNMENT.finditer(text):
            name, value = _assignment_groups(match)
            window = window_after(text, match.start(), config.windows.status_effects)
            fields.setdefault(name, _FieldState()).observe(value, side_effects(window))

        for match in _STATUS_ENUM.finditer(text):
            for value in _enum_values(match.group(1)):
                fields.setdefault("status", _FieldState()).observe(value)

        for block in iter_conditional_blocks(text):
            guard = _TRANSITION_GUARD.fullmatch(block.condition)
            if guard is None:
                continue
            name, from_value = normalize_field(guard.group(1)), guard.group(2)
            target = next(
                (
                    value
                    for assigned, value in map(
                        _assignment_groups, STATUS_ASSIGNMENT.finditer(block.body)
                    )
                    if assigned == name
                ),
                None,
            )
            if target is None or target == from_value:
                continue
            state = fields.setdefault(name, _FieldState())
            state.observe(from_value)
            state.observe(target)
            state.transitions.setdefault(
                (from_value, target),
                StatusTransition(
                    from_value=from_value,
                    to_value=target,
                    condition=block.condition,
                    condition_explained=(
                        f'When current status is "{from_value}", change to "{target}"'
                    ),
                    action=f"Update status from {from_value} to {target}",
                ),
            )

    flows = [
        StatusFlow(
            field=name,
            values=[
                StatusValue(
                    value=value,
                    meaning=infer_status_meaning(value),
                    is_terminal=value.lower() in terminal,
                    triggers=effects,
                )
                for value, effects in state.values.items()
            ],
            transitions=list(state.transitions.values()),
        )
        for name, state in fields.items()
    ]
    logger.debug("Reconstructed %d status flow(s)", len(flows))
    return flows


__all__ = [
    "STATUS_ASSIGNMENT",
    "STATUS_MEANINGS",
    "extract_status_flows",
    "infer_status_meaning",
    "normalize_field",
]
