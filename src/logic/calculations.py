"""Business calculation extraction."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import BusinessCalculation
from contract.artifacts import build_location
from logic.explain import explain_formula
from logic.vocabulary import format_variable_name, is_business_variable
from parse.text import line_at

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from artifacts.models.artifacts.source import SourceFile


@dataclass(frozen=True)
class _Family:
    regex: re.Pattern[str]
    # formula keeps the "<var> <op>= <expr>" spelling for compound assignments
    compound: bool = False
    whole_match: bool = False


_FAMILIES = (
    _Family(
        re.compile(
            r"(?<![\w$.])([\w$]*(?:balance|Balance|total|Total|amount|Amount|days|Days"
            r"|hours|Hours|count|Count|sum|Sum))\s*=(?![=>])\s*([^;\n]*[+\-*/][^;\n]*)"
        )
    ),
    _Family(
        re.compile(r"(?<![\w$.])([A-Za-z_$][\w$]*)\s*([+\-*/])=\s*([^;\n]+)"),
        compound=True,
    ),
    _Family(
        re.compile(
            r"(?<![\w$.])([\w$]*(?:date|Date|days|Days))\s*=(?![=>])\s*"
            r"(?:new Date|Math\.|Date\.)[^;\n]*"
        ),
        whole_match=True,
    ),
    _Family(
        re.compile(
            r"(?<![\w$.])([\w$]*(?:percent|Percent|rate|Rate|ratio|Ratio))\s*=(?![=>])\s*"
            r"([^;\n]*[/*][^;\n]*100[^;\n]*)"
        )
    ),
)

_BUSINESS_FORMULA = re.compile(r"balance|amount|days|hours|total|sum|count", re.IGNORECASE)

_DATE_DIFFERENCE = re.compile(
    r"(?<![\w$.])([A-Za-z_$][\w$]*)\s*=(?![=>])\s*\(?\s*"
    r"([\w$]*(?:Date|_date))\s*-\s*([\w$]*(?:Date|_date))\s*\)?\s*/\s*(\(?[\d\s*]+\)?)"
)
_NUMBER = re.compile(r"\d+")

DATE_UNITS = {
    604_800_000: "weeks",
    86_400_000: "days",
    3_600_000: "hours",
    60_000: "minutes",
    1_000: "seconds",
}

_NAMED_FORMULAS = (
    (
        re.compile(r"(?<![\w$])([\w$]*balance[\w$]*)\s*-\s*([\w$]*(?:days|amount|requested)[\w$]*)", re.IGNORECASE),
        "Balance Deduction",
        "Calculates remaining balance after deducting requested amount",
    ),
    (
        re.compile(r"(?<![\w$])([\w$]*(?:salary|pay)[\w$]*)\s*[*/]\s*([\w$]*(?:days|hours|rate)[\w$]*)", re.IGNORECASE),
        "Pay Calculation",
        "Calculates pay based on rate and time worked",
    ),
    (
        re.compile(r"(?<![\w$])([\w$]*total[\w$]*)\s*\+=?\s*([\w$]*(?:amount|value|sum)[\w$]*)", re.IGNORECASE),
        "Running Total",
        "Accumulates values into a running total",
    ),
)

_NON_INPUTS = frozenset(
    {"new", "Date", "Math", "Number", "parseInt", "parseFloat", "true", "false", "null", "undefined"}
)
_IDENTIFIER = re.compile(r"[a-zA-Z_]\w*")


def extract_calc_inputs(formula: str) -> list[str]:
    names = [n for n in _IDENTIFIER.findall(formula) if n not in _NON_INPUTS]
    return [format_variable_name(n) for n in dict.fromkeys(names)]


def infer_calc_description(variable: str, formula: str) -> str:
    lower = variable.lower()
    if "balance" in lower:
        if "-" in formula:
            return "Calculates remaining balance after deductions"
        if "+" in formula:
            return "Calculates total balance including additions"
    if "total" in lower or "sum" in lower:
        return "Calculates the total/sum of values"
    if "days" in lower:
        return "Calculates number of days"
    if "amount" in lower:
        return "Calculates a monetary or quantity amount"
    if "percent" in lower or "rate" in lower:
        return "Calculates a percentage or rate"
    return f"Computes {format_variable_name(variable)} using formula"


def calc_example(variable: str) -> str | None:
    lower = variable.lower()
    if "balance" in lower:
        return "If balance is 15 days and request is 3 days, result would be 12 days remaining"
    if "days" in lower:
        return "Example: Calculates the number of leave days or working days"
    if "amount" in lower or "total" in lower:
        return "Example: Sums up individual values to get a total amount"
    if "percent" in lower:
        return "Example: If value is 80 out of 100, result would be 80%"
    return None


def divisor_unit(divisor: str) -> str:
    """Unit implied by a millisecond divisor such as ``(1000 * 60 * 60 * 24)``."""
    product = math.prod(int(n) for n in _NUMBER.findall(divisor))
    return DATE_UNITS.get(product, "milliseconds")


def _family_calcs(source: SourceFile, family: _Family, ids: Iterator[int]) -> Iterator[BusinessCalculation]:
    text = source.text
    for match in family.regex.finditer(text):
        variable = match.group(1)
        explained_from = None
        if family.compound:
            operator, operand = match.group(2), match.group(3).strip()
            formula = f"{variable} {operator}= {operand}"
            explained_from = f"{variable} {operator} {operand}"
        elif family.whole_match:
            formula = match.group(0).strip()
        else:
            formula = match.group(2).strip()

        if not is_business_variable(variable) and not _BUSINESS_FORMULA.search(formula):
            continue

        yield BusinessCalculation(
            id=f"C{next(ids)}",
            name=f"Calculate {format_variable_name(variable)}",
            description=infer_calc_description(variable, formula),
            formula=formula,
            formula_explained=explain_formula(explained_from or formula),
            inputs=extract_calc_inputs(formula),
            output=format_variable_name(variable),
            example=calc_example(variable),
            location=build_location(source.name, line_at(text, match.start())),
        )


def _date_difference_calcs(source: SourceFile, ids: Iterator[int]) -> Iterator[BusinessCalculation]:
    text = source.text
    for match in _DATE_DIFFERENCE.finditer(text):
        variable, end_date, start_date, divisor = match.groups()
        unit = divisor_unit(divisor)
        start_label = format_variable_name(start_date)
        end_label = format_variable_name(end_date)
        yield BusinessCalculation(
            id=f"C{next(ids)}",
            name=f"Calculate {format_variable_name(variable)}",
            description=f"Calculates the number of {unit} between {start_label} and {end_label}",
            formula=match.group(0).strip(),
            formula_explained=f"({end_label} - {start_label}) converted to {unit}",
            inputs=[start_label, end_label],
            output=format_variable_name(variable),
            example=f"If start is Jan 1 and end is Jan 5, result would be 4 {unit}",
            location=build_location(source.name, line_at(text, match.start())),
        )


def extract_calculations(files: Sequence[SourceFile]) -> list[BusinessCalculation]:
    ids = count(1)
    calculations: list[BusinessCalculation] = []

    for family in _FAMILIES:
        for source in files:
            calculations.extend(_family_calcs(source, family, ids))
    for source in files:
        calculations.extend(_date_difference_calcs(source, ids))

    for pattern, name, description in _NAMED_FORMULAS:
        for source in files:
            for match in pattern.finditer(source.text):
                formula = match.group(0)
                if any(formula in existing.formula for existing in calculations):
                    continue
                calculations.append(
                    BusinessCalculation(
                        id=f"C{next(ids)}",
                        name=name,
                        description=description,
                        formula=formula,
                        formula_explained=explain_formula(formula),
                        inputs=[format_variable_name(match.group(1)), format_variable_name(match.group(2))],
                        output=format_variable_name(match.group(1)),
                        location=build_location(source.name, line_at(source.text, match.start())),
                    )
                )

    return calculations


__all__ = [
    "DATE_UNITS",
    "calc_example",
    "divisor_unit",
    "extract_calc_inputs",
    "extract_calculations",
    "infer_calc_description",
]
