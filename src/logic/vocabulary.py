"""Domain vocabulary tests and display formatting shared by the extractors."""

from __future__ import annotations

import re

BUSINESS_CONDITION_KEYWORDS = (
    "status", "state", "balance", "amount", "count", "total", "limit",
    "approved", "rejected", "pending", "active", "inactive", "valid", "invalid",
    "leave", "days", "hours", "date", "deadline", "due", "expir",
    "employee", "manager", "admin", "user", "role", "permission",
    "request", "application", "submission", "approval",
    "salary", "payment", "deduction", "bonus", "encash",
    "available", "remaining", "used", "consumed", "allocated",
    "probation", "contract", "employment", "joining", "termination",
    "email", "notify", "alert", "send", "message",
)

BUSINESS_VARIABLE_KEYWORDS = (
    "status", "state", "balance", "amount", "total", "count", "result",
    "approved", "rejected", "valid", "error", "message", "reason",
    "days", "hours", "date", "remaining", "available", "used",
)

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

# formatted values longer than this are cut to 47 chars plus an ellipsis
_VALUE_LIMIT = 50


def is_business_condition(text: str) -> bool:
    """True when ``text`` mentions any domain keyword (case-insensitive)."""
    lower = text.lower()
    return any(keyword in lower for keyword in BUSINESS_CONDITION_KEYWORDS)


def is_business_variable(name: str) -> bool:
    lower = name.lower()
    return any(keyword in lower for keyword in BUSINESS_VARIABLE_KEYWORDS)


def humanize(name: str) -> str:
    """``leaveBalance`` / ``leave_balance`` -> ``leave balance``."""
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", name).replace("_", " ")
    return " ".join(spaced.split()).lower()


def format_variable_name(name: str) -> str:
    """Humanized name with its first letter capitalized."""
    words = humanize(name)
    return words[:1].upper() + words[1:]


def format_value(value: str) -> str:
    """Strip quotes and truncate a code value for display."""
    cleaned = value.strip().replace("'", "").replace('"', "")
    if len(cleaned) > _VALUE_LIMIT:
        return cleaned[:47] + "..."
    return cleaned or "(empty)"


__all__ = [
    "BUSINESS_CONDITION_KEYWORDS",
    "BUSINESS_VARIABLE_KEYWORDS",
    "format_value",
    "format_variable_name",
    "humanize",
    "is_business_condition",
    "is_business_variable",
]
