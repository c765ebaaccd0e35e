from __future__ import annotations

from artifacts.models.artifacts.source import SourceFile
from logic.actions import determine_severity, extract_action, status_value
from logic.rules import extract_business_rules


def _files(*texts: str) -> list[SourceFile]:
    return [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]


def test_guarded_status_assignment_is_a_critical_rule() -> None:
    text = "if (leaveBalance < requestedDays) { status = 'rejected'; }"

    (rule,) = extract_business_rules(_files(text))

    assert rule.id == "BR1"
    assert rule.name == "Insufficient Balance Check"
    assert rule.condition == "leaveBalance < requestedDays"
    assert rule.condition_explained == "leave balance is less than requested days"
    assert rule.action == 'Set status to "rejected"'
    assert rule.severity == "critical"
    assert rule.location == "File1.gs:1"


def test_non_business_and_short_conditions_are_skipped() -> None:
    text = (
        "if (i > 10) { total = 0; }\n"
        "if (ok) { status = 'x'; }\n"
        "if (typeof leave === 'undefined') { status = 'new'; }\n"
    )

    assert extract_business_rules(_files(text)) == []


def test_block_without_recognisable_action_is_skipped() -> None:
    text = "if (leaveBalance > 0) { Logger.log('fine'); }"

    assert extract_business_rules(_files(text)) == []


def test_email_action_is_important() -> None:
    text = (
        "if (request.days > 3) {\n"
        "  GmailApp.sendEmail(manager, 'Long leave', 'Please review');\n"
        "}\n"
    )

    (rule,) = extract_business_rules(_files(text))

    assert rule.action == "Send email notification"
    assert rule.name == "Leave Days Validation"
    assert rule.severity == "important"


def test_ternary_assignment_rule() -> None:
    text = "var label = leave.days > 5 ? 'long' : 'short';"

    (rule,) = extract_business_rules(_files(text))

    assert rule.name == "Label Assignment Rule"
    assert rule.condition == "leave.days > 5"
    assert rule.action == "Set Label to 'long' or 'short'"
    assert rule.action_explained == (
        "If leave's days is greater than 5, then Label is set to long; "
        "otherwise it's set to short"
    )
    assert rule.severity == "standard"


def test_switch_rule_collects_case_actions() -> None:
    text = (
        "switch (request.type) {\n"
        "  case 'annual':\n"
        "    status = 'pending';\n"
        "    break;\n"
        "  case 'sick':\n"
        "    sendEmail(manager);\n"
        "    break;\n"
        "  default:\n"
        "    break;\n"
        "}\n"
    )

    (rule,) = extract_business_rules(_files(text))

    assert rule.name == "Request type Processing Rules"
    assert rule.action == (
        'When annual: Set status to "pending"; When sick: Send email notification'
    )
    assert rule.severity == "important"


def test_rule_ids_run_across_families_and_files() -> None:
    files = _files(
        "var label = leave.days > 5 ? 'long' : 'short';",
        "if (leaveBalance < requestedDays) { status = 'rejected'; }",
    )

    rules = extract_business_rules(files)

    assert [(r.id, r.location) for r in rules] == [
        ("BR1", "File2.gs:1"),
        ("BR2", "File1.gs:1"),
    ]


def test_extract_action_combines_effects() -> None:
    action = extract_action(
        "remainingDays = balance - 1; sheet.setValue(remainingDays); return true;"
    )

    assert action is not None
    assert action.summary == "Update Remaining days, Update spreadsheet data, Return true"


def test_status_value_shapes() -> None:
    assert status_value("row['status'] = 'done'") == "done"
    assert status_value("setLeaveStatus('closed')") == "closed"
    assert status_value("status == 'x'") is None


def test_determine_severity() -> None:
    assert determine_severity("salary > 0", "Update Salary") == "critical"
    assert determine_severity("x", "Update Y") == "important"
    assert determine_severity("x", "Return 1") == "standard"
