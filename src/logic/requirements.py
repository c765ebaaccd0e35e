"""High-level business requirements inferred from names, vocabulary and findings."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import BusinessRequirement

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.logic import BusinessCalculation, ValidationCheck


@dataclass(frozen=True)
class _Signals:
    name: str
    code: str
    validations: Sequence[ValidationCheck]
    calculations: Sequence[BusinessCalculation]


@dataclass(frozen=True)
class _Requirement:
    title: str
    description: str
    category: str
    applies: Callable[[_Signals], bool]
    # lowercase name fragments that tie a function to this requirement
    function_terms: tuple[str, ...]
    match_descriptions: bool = False


def _leave(s: _Signals) -> bool:
    return "leave" in s.name or "leave request" in s.code or "annual leave" in s.code


_REQUIREMENTS = (
    _Requirement(
        "Leave Request Management",
        "Automates the processing, validation, and approval of employee leave requests",
        "workflow",
        _leave,
        ("leave",),
        match_descriptions=True,
    ),
    _Requirement(
        "Leave Balance Validation",
        "Ensures employees have sufficient leave balance before approving requests",
        "validation",
        lambda s: _leave(s) and any("balance" in v.field.lower() for v in s.validations),
        ("valid", "balance"),
    ),
    _Requirement(
        "Leave Balance Calculation",
        "Calculates remaining leave balance after requests are approved or encashed",
        "calculation",
        lambda s: _leave(s)
        and any("balance" in c.name.lower() or "days" in c.name.lower() for c in s.calculations),
        ("calc", "balance"),
    ),
    _Requirement(
        "Leave Encashment Processing",
        "Handles conversion of unused leave days into monetary compensation",
        "calculation",
        lambda s: "encash" in s.name or "encash" in s.code,
        ("encash",),
    ),
    _Requirement(
        "Attendance Tracking",
        "Monitors and records employee attendance from HR system integration",
        "integration",
        lambda s: "attendance" in s.name or "attendance" in s.code or "jisr" in s.code,
        ("attend", "fetch"),
    ),
    _Requirement(
        "Automated Notifications",
        "Sends email notifications to employees, managers, or stakeholders based on business events",
        "notification",
        lambda s: "reminder" in s.name
        or "notification" in s.name
        or "sendmail" in s.code
        or "gmailapp" in s.code,
        ("send", "notify", "email"),
    ),
    _Requirement(
        "Report Generation",
        "Generates business reports with aggregated data and insights",
        "reporting",
        lambda s: "report" in s.name or "report" in s.code,
        ("report", "generate"),
    ),
    _Requirement(
        "External System Integration",
        "Synchronizes data with external systems and APIs",
        "integration",
        lambda s: "sync" in s.name or "integration" in s.name or "urlfetchapp" in s.code,
        ("fetch", "sync", "api"),
    ),
    _Requirement(
        "Approval Workflow",
        "Manages approval chains and processes approval/rejection actions",
        "workflow",
        lambda s: "approval" in s.name or "approve" in s.code or "approval" in s.code,
        ("approv",),
    ),
)


def _related(functions: Sequence[FunctionRecord], terms: tuple[str, ...], *, descriptions: bool = False) -> list[str]:
    related = []
    for record in functions:
        haystack = record.name.lower()
        if descriptions and record.description:
            haystack += " " + record.description.lower()
        if any(term in haystack for term in terms):
            related.append(record.name)
    return related


def generate_business_requirements(
    name: str,
    code: str,
    validations: Sequence[ValidationCheck],
    calculations: Sequence[BusinessCalculation],
    functions: Sequence[FunctionRecord],
) -> list[BusinessRequirement]:
    """Requirements supported by the unit's name, code vocabulary and findings.

    A unit with none of these signals yields an empty list.
    """
    signals = _Signals(name.lower(), code.lower(), validations, calculations)
    ids = count(1)
    requirements: list[BusinessRequirement] = []

    for requirement in _REQUIREMENTS:
        if not requirement.applies(signals):
            continue
        requirements.append(
            BusinessRequirement(
                id=f"REQ{next(ids)}",
                title=requirement.title,
                description=requirement.description,
                category=requirement.category,
                related_functions=_related(
                    functions,
                    requirement.function_terms,
                    descriptions=requirement.match_descriptions,
                ),
            )
        )

    categories = {r.category for r in requirements}
    if validations and "validation" not in categories:
        requirements.append(
            BusinessRequirement(
                id=f"REQ{next(ids)}",
                title="Data Validation",
                description=f"Validates {len(validations)} business rules before processing",
                category="validation",
                related_functions=_related(functions, ("valid", "check")),
            )
        )
    if calculations and "calculation" not in categories:
        names = ", ".join(c.name for c in calculations[:3])
        requirements.append(
            BusinessRequirement(
                id=f"REQ{next(ids)}",
                title="Business Calculations",
                description=(
                    f"Performs {len(calculations)} business calculations including: {names}"
                ),
                category="calculation",
                related_functions=_related(functions, ("calc", "compute")),
            )
        )

    return requirements


__all__ = ["generate_business_requirements"]
