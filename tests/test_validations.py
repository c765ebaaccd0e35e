from __future__ import annotations

from artifacts.models.artifacts.source import SourceFile
from logic.validations import (
    extract_error_message,
    extract_fail_action,
    extract_validations,
    guarded_field,
)
from parse.functions import extract_functions


def _scan(text: str):
    files = [SourceFile(name="Code.gs", text=text)]
    return extract_validations(files, extract_functions(text, "Code.gs"))


def test_guard_inside_validator_function() -> None:
    text = (
        "function validateRequest(request) {\n"
        "  if (!request.employeeEmail) {\n"
        "    throw new Error('Employee email is required');\n"
        "  }\n"
        "  return true;\n"
        "}\n"
    )

    scan = _scan(text)

    (check,) = scan.checks
    assert check.id == "V1"
    assert check.field == "employeeEmail"
    assert check.field_description == "Employee email"
    assert check.condition == "!request.employeeEmail"
    assert check.condition_explained == "request's employee email is false/empty"
    assert check.error_message == "Employee email is required"
    assert check.on_pass == "Continue processing"
    assert check.on_fail == "Throw error and stop execution"
    assert check.location == "In validateRequest()"
    assert scan.consumed == {"Code.gs": {text.index("if")}}


def test_guard_without_exit_is_not_a_check() -> None:
    text = (
        "function checkRow(row) {\n"
        "  if (!row.name) {\n"
        "    Logger.log('missing');\n"
        "  }\n"
        "}\n"
    )

    assert _scan(text).checks == []


def test_inline_required_check() -> None:
    text = "if (!leaveBalance) {\n  return false;\n}\n"

    (check,) = _scan(text).checks

    assert check.field == "leaveBalance"
    assert check.condition == "!leaveBalance"
    assert check.condition_explained == "Validates Leave balance (required check)"
    assert check.on_fail == "Return false to indicate validation failure"
    assert check.location == "Code.gs:1"


def test_inline_length_check_collects_error() -> None:
    text = "if (reason.length < 10) { errors.push('Reason too short'); }"

    (check,) = _scan(text).checks

    assert check.field == "reason"
    assert check.condition == "reason.length < 10"
    assert check.condition_explained == "Validates Reason (length check)"
    assert check.on_fail == "Add error message to list"


def test_inline_range_check() -> None:
    text = "if (days > 30 && days < 365) { throw new Error('Out of range'); }"

    (check,) = _scan(text).checks

    assert check.field == "days"
    assert check.condition == "days > 30 && days < 365"
    assert check.condition_explained == "Validates Days (range check)"
    assert check.error_message == "Out of range"


def test_inline_check_on_non_business_field_is_skipped() -> None:
    assert _scan("if (!x) { return false; }").checks == []


def test_named_balance_check() -> None:
    text = "if (leaveBalance < requestedDays) { status = 'rejected'; }"

    scan = _scan(text)

    (check,) = scan.checks
    assert check.field == "Balance"
    assert check.condition == "leaveBalance < requestedDays"
    assert check.condition_explained == (
        "Checks if available balance is sufficient for the request"
    )
    assert scan.consumed == {}


def test_ids_run_across_sources() -> None:
    text = (
        "function validateRequest(request) {\n"
        "  if (!request.email) {\n"
        "    return false;\n"
        "  }\n"
        "}\n"
        "if (!leaveBalance) { return false; }\n"
        "if (probation === true) { status = 'blocked'; }\n"
    )

    checks = _scan(text).checks

    assert [(c.id, c.field) for c in checks] == [
        ("V1", "email"),
        ("V2", "leaveBalance"),
        ("V3", "Probation Status"),
    ]


def test_error_message_sources() -> None:
    assert extract_error_message("message = 'Bad input'") == "Bad input"
    assert extract_error_message("alert('Nope')") == "Nope"
    assert extract_error_message("return false;") is None


def test_fail_action_fallbacks() -> None:
    assert extract_fail_action("return null;") == "Return null to indicate no valid result"
    assert extract_fail_action("reject(request);") == "Reject the request"
    assert extract_fail_action("status = 'invalid';") == "Set status to invalid/error"
    assert extract_fail_action("Logger.log(x);") == "Handle validation failure"


def test_guarded_field() -> None:
    assert guarded_field("!(row.email)") == "email"
    assert guarded_field("!amount") == "amount"
    assert guarded_field("!") == "field"


def test_inline_format_check() -> None:
    text = "if (!startDate.match(/^\\d{4}-\\d{2}$/)) { throw new Error('Bad date'); }"

    (check,) = _scan(text).checks

    assert check.field == "startDate"
    assert check.condition == "!startDate.match(/^\\d{4}-\\d{2}$/)"
    assert check.condition_explained == "Validates Start date (format check)"
    assert check.error_message == "Bad date"
    assert check.on_fail == "Throw error and stop execution"


def test_format_check_on_non_business_field_is_skipped() -> None:
    assert _scan("if (!code.match(/a/)) { throw new Error('no'); }").checks == []
