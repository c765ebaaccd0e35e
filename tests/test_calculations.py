from __future__ import annotations

from artifacts.models.artifacts.source import SourceFile
from logic.calculations import (
    divisor_unit,
    extract_calc_inputs,
    extract_calculations,
    infer_calc_description,
)


def _files(*texts: str) -> list[SourceFile]:
    return [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]


def test_balance_arithmetic() -> None:
    text = "var remainingBalance = leaveBalance - requestedDays;"

    (calc,) = extract_calculations(_files(text))

    assert calc.id == "C1"
    assert calc.name == "Calculate Remaining balance"
    assert calc.description == "Calculates remaining balance after deductions"
    assert calc.formula == "leaveBalance - requestedDays"
    assert calc.formula_explained == "Leave balance minus Requested days"
    assert calc.inputs == ["Leave balance", "Requested days"]
    assert calc.output == "Remaining balance"
    assert calc.example is not None
    assert calc.location == "File1.gs:1"


def test_compound_assignment() -> None:
    text = "totalAmount += item.amount;"

    (calc,) = extract_calculations(_files(text))

    assert calc.formula == "totalAmount += item.amount"
    assert calc.formula_explained == "Total amount plus Item's Amount"
    assert calc.description == "Calculates the total/sum of values"


def test_date_difference() -> None:
    text = "var leaveDays = (endDate - startDate) / (1000 * 60 * 60 * 24);"

    calcs = extract_calculations(_files(text))

    difference = next(c for c in calcs if c.name == "Calculate Leave days" and "between" in c.description)
    assert difference.description == (
        "Calculates the number of days between Start date and End date"
    )
    assert difference.inputs == ["Start date", "End date"]
    assert difference.formula_explained == "(End date - Start date) converted to days"


def test_date_creation() -> None:
    text = "var dueDate = new Date(startDate.getTime() + 86400000);"

    (calc,) = extract_calculations(_files(text))

    assert calc.formula.startswith("dueDate = new Date(")
    assert calc.output == "Due date"


def test_named_balance_deduction() -> None:
    text = "if (leaveBalance - requestedDays < 0) { return false; }"

    (calc,) = extract_calculations(_files(text))

    assert calc.name == "Balance Deduction"
    assert calc.formula == "leaveBalance - requestedDays"
    assert calc.inputs == ["Leave balance", "Requested days"]


def test_non_business_arithmetic_is_skipped() -> None:
    assert extract_calculations(_files("var x = a + b;\ni += 1;")) == []


def test_ids_are_sequential_across_files() -> None:
    files = _files("var totalHours = shiftHours * 2;", "var dayCount = weeks * 7;")

    calcs = extract_calculations(files)

    assert [(c.id, c.location) for c in calcs] == [
        ("C1", "File1.gs:1"),
        ("C2", "File2.gs:1"),
    ]


def test_divisor_unit() -> None:
    assert divisor_unit("(1000 * 60 * 60 * 24)") == "days"
    assert divisor_unit("(1000 * 60 * 60)") == "hours"
    assert divisor_unit("1000") == "seconds"
    assert divisor_unit("7") == "milliseconds"


def test_calc_inputs_skip_builtins() -> None:
    assert extract_calc_inputs("Math.round(total / count)") == ["Round", "Total", "Count"]


def test_calc_description_fallback() -> None:
    assert infer_calc_description("score", "a * b") == "Computes Score using formula"
