"""Action inference from conditional bodies, plus rule naming and severity."""

from __future__ import annotations

import re
from dataclasses import dataclass

from logic.vocabulary import format_value, format_variable_name, is_business_variable

STATUS_SET = re.compile(
    r"\[\s*['\"]status['\"]\s*\]\s*=(?![=>])\s*['\"]([\w-]+)['\"]"
    r"|(?<![\w$])status\s*=(?![=>])\s*['\"]([\w-]+)['\"]"
    r"|\bset\w*Status\s*\(\s*['\"]([\w-]+)['\"]",
    re.IGNORECASE,
)
ASSIGNMENT = re.compile(r"(?<![\w$])([A-Za-z_$][\w$]*)\s*=(?![=>])\s*([^;\n]+)")
_RETURN_VALUE = re.compile(r"\breturn\s+([^;\n]+)")
_THROW_MESSAGE = re.compile(r"\bthrow\s+(?:new\s+)?\w+\s*\(\s*['\"]([^'\"]+)['\"]")
_STATUS_NAME = re.compile(r"status$", re.IGNORECASE)


@dataclass(frozen=True)
class Action:
    summary: str
    explanation: str


def status_value(body: str) -> str | None:
    """Value of the first status assignment in ``body``, if any."""
    match = STATUS_SET.search(body)
    if match is None:
        return None
    return next(group for group in match.groups() if group is not None)


def business_assignments(body: str, *, skip_status: bool) -> list[tuple[str, str]]:
    """(variable, value) pairs assigned to business-named variables."""
    found: list[tuple[str, str]] = []
    for match in ASSIGNMENT.finditer(body):
        name = match.group(1)
        if skip_status and _STATUS_NAME.search(name):
            continue
        if is_business_variable(name):
            found.append((name, match.group(2).strip()))
    return found


def extract_action(body: str) -> Action | None:
    """Describe what a block body does, or None if nothing recognisable."""
    actions: list[str] = []
    explanations: list[str] = []

    status = status_value(body)
    if status is not None:
        actions.append(f'Set status to "{status}"')
        explanations.append(f'Updates the status to "{status}"')

    for name, value in business_assignments(body, skip_status=status is not None):
        actions.append(f"Update {format_variable_name(name)}")
        explanations.append(f"Sets {format_variable_name(name)} to {format_value(value)}")

    if "sendEmail" in body or "GmailApp" in body or "MailApp" in body:
        actions.append("Send email notification")
        explanations.append("Sends an email notification to relevant parties")

    if "slack" in body or "postMessage" in body or "webhook" in body:
        actions.append("Send Slack/chat message")
        explanations.append("Posts a message to Slack or messaging platform")

    if "setValues" in body or "setValue" in body:
        actions.append("Update spreadsheet data")
        explanations.append("Writes updated data back to the spreadsheet")

    if "UrlFetchApp" in body or "fetch(" in body:
        actions.append("Call external API")
        explanations.append("Makes a request to an external service")

    returned = _RETURN_VALUE.search(body)
    if returned is not None:
        value = format_value(returned.group(1))
        actions.append(f"Return {value}")
        explanations.append(f"Returns {value} to the caller")

    thrown = _THROW_MESSAGE.search(body)
    if thrown is not None:
        actions.append(f"Throw error: {thrown.group(1)}")
        explanations.append(f'Stops execution with error message: "{thrown.group(1)}"')

    if not actions:
        return None
    return Action(summary=", ".join(actions), explanation=". ".join(explanations))


_CRITICAL_TERMS = (
    "reject", "denied", "terminate", "payment", "salary", "deduct",
    "permission", "access", "security",
)  # money, permissions or final status
_IMPORTANT_TERMS = ("approv", "notify", "email", "update", "status", "submit")


def determine_severity(context: str, action: str) -> str:
    lower = f"{context} {action}".lower()
    if any(term in lower for term in _CRITICAL_TERMS):
        return "critical"
    if any(term in lower for term in _IMPORTANT_TERMS):
        return "important"
    return "standard"


def infer_rule_name(condition: str, action: Action) -> str:
    lower = condition.lower()
    if "balance" in lower and "<" in lower:
        return "Insufficient Balance Check"
    if "status" in lower and "approved" in lower:
        return "Approval Status Verification"
    if "status" in lower and "pending" in lower:
        return "Pending Status Handler"
    if "date" in lower or "deadline" in lower:
        return "Date/Deadline Validation"
    if "probation" in lower:
        return "Probation Period Check"
    if "leave" in lower or "days" in lower:
        return "Leave Days Validation"
    if "manager" in lower or "approval" in lower:
        return "Manager Approval Rule"
    if "email" in lower or "valid" in lower:
        return "Data Validation Rule"
    return f"Business Rule: {action.summary[:30]}"


def infer_rule_description(condition: str, action: Action) -> str:
    lower = condition.lower()
    if "balance" in lower:
        return "Checks if balance meets the required threshold before proceeding"
    if "status" in lower:
        return "Validates the current status before taking action"
    if "date" in lower or "deadline" in lower:
        return "Ensures date-related requirements are met"
    if "leave" in lower or "days" in lower:
        return "Validates leave request against available days"
    return f"Evaluates condition and performs: {action.summary}"


__all__ = [
    "ASSIGNMENT",
    "STATUS_SET",
    "Action",
    "business_assignments",
    "determine_severity",
    "extract_action",
    "infer_rule_description",
    "infer_rule_name",
    "status_value",
]
