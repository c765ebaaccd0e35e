from __future__ import annotations

from artifacts.models.artifacts.source import SourceFile
from logic.status_flows import extract_status_flows, infer_status_meaning, normalize_field
from rules.config import ScriptMapConfig


def _files(*texts: str) -> list[SourceFile]:
    return [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]


def test_assignment_yields_terminal_value() -> None:
    text = "if (leaveBalance < requestedDays) { status = 'rejected'; }"

    (flow,) = extract_status_flows(_files(text))

    assert flow.field == "status"
    assert [v.value for v in flow.values] == ["rejected"]
    assert flow.values[0].is_terminal is True
    assert flow.values[0].meaning == "Request was denied"
    assert flow.transitions == []


def test_guarded_assignment_is_a_transition() -> None:
    text = (
        "if (request.status === 'pending') {\n"
        "  request.status = 'approved';\n"
        "  GmailApp.sendEmail(request.email, 'Approved', 'Enjoy');\n"
        "}\n"
    )

    (flow,) = extract_status_flows(_files(text))

    assert [(v.value, v.is_terminal) for v in flow.values] == [
        ("approved", True),
        ("pending", False),
    ]
    assert flow.values[0].triggers == ["Sends email notification"]
    (transition,) = flow.transitions
    assert transition.from_value == "pending"
    assert transition.to_value == "approved"
    assert transition.condition == "request.status === 'pending'"
    assert transition.condition_explained == (
        'When current status is "pending", change to "approved"'
    )
    assert transition.action == "Update status from pending to approved"


def test_repeated_transitions_are_deduplicated() -> None:
    block = "if (status === 'open') { status = 'closed'; }\n"

    (flow,) = extract_status_flows(_files(block * 3))

    assert len(flow.transitions) == 1
    assert [v.value for v in flow.values] == ["closed", "open"]


def test_field_spellings_are_normalised() -> None:
    text = (
        "row['leaveStatus'] = 'draft';\n"
        "sheet.setStatus('closed');\n"
        "var STATUS = 'new';\n"
    )

    flows = extract_status_flows(_files(text))

    assert [(f.field, [v.value for v in f.values]) for f in flows] == [
        ("leaveStatus", ["draft"]),
        ("status", ["closed", "new"]),
    ]


def test_status_enum_contributes_values() -> None:
    text = "var STATUS = { PENDING: 'pending', DONE: 'done' };\n"

    (flow,) = extract_status_flows(_files(text))

    assert flow.field == "status"
    assert [v.value for v in flow.values] == ["pending", "done"]
    assert flow.values[1].meaning == "Status: Done"


def test_values_keep_first_seen_order_across_files() -> None:
    files = _files("status = 'submitted';", "status = 'draft';\nstatus = 'submitted';")

    (flow,) = extract_status_flows(files)

    assert [v.value for v in flow.values] == ["submitted", "draft"]


def test_terminal_statuses_from_config() -> None:
    config = ScriptMapConfig(terminal_statuses=["Done"])
    text = "status = 'done';\nstatus = 'approved';"

    (flow,) = extract_status_flows(_files(text), config)

    assert [(v.value, v.is_terminal) for v in flow.values] == [
        ("done", True),
        ("approved", False),
    ]


def test_no_status_text() -> None:
    assert extract_status_flows(_files("var x = 1;")) == []


def test_helpers() -> None:
    assert normalize_field("STATUS") == "status"
    assert normalize_field("LeaveStatus") == "leaveStatus"
    assert infer_status_meaning("in_progress") == "Currently being processed"
    assert infer_status_meaning("on-hold") == "Temporarily paused"
    assert infer_status_meaning("escalated") == "Status: Escalated"
