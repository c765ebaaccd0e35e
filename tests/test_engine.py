"""End-to-end tests for the analysis engine."""

from __future__ import annotations

import shutil
import time
from pathlib import Path

import orjson
import pytest

from artifacts.engine import analyze_source_unit
from artifacts.models.artifacts.source import SourceFile, SourceUnit
from rules.config import ComplexityConfig, ScriptMapConfig
from scan.project import load_source_unit

FIXTURE = Path(__file__).parent / "fixtures" / "mini_project"

LIST_FIELDS = (
    "functions",
    "external_calls",
    "google_services",
    "triggers",
    "connected_resources",
    "dependencies",
    "business_rules",
    "validations",
    "status_flows",
    "calculations",
    "decision_tree",
    "data_transformations",
    "business_requirements",
)

ADVICE_FIELDS = ("suggestions", "warnings", "recommendations")


def _unit(*texts: str, name: str = "unit") -> SourceUnit:
    files = [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]
    return SourceUnit(name=name, files=files)


def _dump(result) -> bytes:
    return orjson.dumps(result.model_dump(mode="json"), option=orjson.OPT_SORT_KEYS)


@pytest.fixture
def leave_tracker(tmp_path: Path) -> Path:
    root = tmp_path / "leave_tracker"
    shutil.copytree(FIXTURE, root)
    return root


def test_single_function_unit() -> None:
    result = analyze_source_unit(_unit("function ping(){ return true; }", name="ping"))

    (function,) = result.functions
    assert function.name == "ping"
    assert function.parameters == []
    assert function.is_public is True
    assert function.line_count == 1
    assert result.complexity == "low"
    for field in LIST_FIELDS[1:]:
        assert getattr(result, field) == [], field
    assert "Add logging for easier debugging" in result.suggestions
    assert len(result.warnings) == 2
    assert len(result.recommendations) == 4


def test_advice_sees_calls_and_complexity() -> None:
    fetches = "UrlFetchApp.fetch('https://api.example.com/v1/a');\n" * 3
    config = ScriptMapConfig(complexity=ComplexityConfig(low_max_lines=1, medium_max_lines=2))

    result = analyze_source_unit(_unit(fetches), config)

    assert result.complexity == "high"
    assert "Consider using CacheService to cache external API responses" in result.suggestions
    assert result.recommendations[0].startswith("Consider splitting this script")


def test_simple_edit_trigger() -> None:
    result = analyze_source_unit(_unit("function onEdit(e){ Logger.log(e); }"))

    assert any(
        t.type == "on-edit" and t.function_name == "onEdit" and not t.is_programmatic
        for t in result.triggers
    )
    assert result.entry_mode == "triggered"


def test_repeated_endpoint_is_counted() -> None:
    text = (
        "UrlFetchApp.fetch('https://api.example.com/v1/widgets?id=1');\n"
        "UrlFetchApp.fetch('https://api.example.com/v1/widgets?id=2');\n"
    )

    result = analyze_source_unit(_unit(text))

    (call,) = result.external_calls
    assert call.url == "https://api.example.com/v1"
    assert call.count == 2


def test_guarded_status_assignment_feeds_rules_and_flows() -> None:
    text = "if (leaveBalance < requestedDays) { status = \"rejected\"; }"

    result = analyze_source_unit(_unit(text))

    (rule,) = result.business_rules
    assert rule.condition_explained == "leave balance is less than requested days"
    assert "rejected" in rule.action
    (flow,) = result.status_flows
    assert flow.field == "status"
    assert [v.value for v in flow.values] == ["rejected"]


def test_empty_unit() -> None:
    result = analyze_source_unit(SourceUnit(name="empty"))

    assert result.lines_of_code == 0
    assert result.complexity == "low"
    assert result.entry_mode == "manual"
    assert result.summary == "Automates spreadsheet operations. Contains 0 functions."
    for field in LIST_FIELDS + ADVICE_FIELDS:
        assert getattr(result, field) == [], field


def test_config_files_do_not_count_as_lines() -> None:
    unit = SourceUnit(
        name="unit",
        files=[
            SourceFile(name="Code.gs", text="var a = 1;\nvar b = 2;"),
            SourceFile(name="appsscript.json", kind="config", text="{\n}\n"),
        ],
    )

    assert analyze_source_unit(unit).lines_of_code == 2


def test_complexity_cutoffs_come_from_config() -> None:
    config = ScriptMapConfig(complexity=ComplexityConfig(low_max_lines=2))

    result = analyze_source_unit(_unit("var a = 1;\nvar b = 2;\nvar c = 3;"), config)

    assert result.complexity == "medium"


def test_fixture_project(leave_tracker: Path) -> None:
    unit = load_source_unit(leave_tracker)
    result = analyze_source_unit(unit)

    assert result.name == "leave_tracker"
    assert [f.name for f in unit.files] == [
        "Code.gs",
        "Notify.gs",
        "Sidebar.html",
        "appsscript.json",
    ]
    assert [f.name for f in result.functions] == [
        "onOpen",
        "installTriggers",
        "processLeaveRequests",
        "notifyManager",
        "_formatDays",
        "closeSidebar",
    ]
    assert [(t.type, t.function_name, t.is_programmatic) for t in result.triggers] == [
        ("on-open", "onOpen", False),
        ("time-driven", "processLeaveRequests", True),
    ]
    assert result.triggers[1].schedule == "every 6 hours"
    assert result.entry_mode == "triggered"

    (call,) = result.external_calls
    assert (call.url, call.method, call.description, call.count) == (
        "https://hooks.slack.com/services",
        "POST",
        "Slack API",
        1,
    )
    assert [s.service_name for s in result.google_services] == [
        "Sheets",
        "Gmail",
        "URL Fetch",
        "Script",
    ]

    (resource,) = result.connected_resources
    assert resource.kind == "spreadsheet"
    assert resource.file_id == "1AbCdEfGhIjKlMnOpQrStUvWxYz0123456789abcd"
    assert resource.access in ("read", "read-write")

    assert [(d.kind, d.name) for d in result.dependencies] == [
        ("library", "OAuth2"),
        ("api", None),
    ]
    assert result.dependencies[1].identifier == "hooks.slack.com"

    assert result.functional_summary.brief == (
        "This script runs when a document is opened and sends notifications to Slack, "
        "reads/writes spreadsheet data, sends emails."
    )
    assert [r.name for r in result.business_rules] == ["Insufficient Balance Check"]
    (flow,) = result.status_flows
    assert [v.value for v in flow.values] == ["pending", "rejected", "approved"]
    assert result.decision_tree[0].if_false is not None


def test_analysis_is_deterministic(leave_tracker: Path) -> None:
    unit = load_source_unit(leave_tracker)

    first = analyze_source_unit(unit)
    second = analyze_source_unit(unit)

    assert first == second
    assert _dump(first) == _dump(second)


@pytest.mark.parametrize(
    "text",
    [
        "{{{{",
        "}}}}",
        "function",
        "function (",
        "if (status",
        "if (leave.days > 1) {",
        "UrlFetchApp.fetch(",
        "'unterminated",
        "/* open comment",
        "rows.map(",
        "items.reduce(function(a, b) {",
        "status = ",
        "ScriptApp.newTrigger('x').timeBased(",
        "SpreadsheetApp.openById(",
        "\x00\x01\x02",
    ],
)
def test_garbage_input_never_raises(text: str) -> None:
    result = analyze_source_unit(_unit(text))

    assert result.name == "unit"


def test_pathological_input_finishes_quickly() -> None:
    unclosed = "if (leave.days > 1) {\n  status = 'pending';\n" * 200
    fetches = "UrlFetchApp.fetch('https://api.example.com/v1/items');\n" * 2000
    transitions = "if (status === 'open') { status = 'closed'; }\n" * 2000

    started = time.perf_counter()
    result = analyze_source_unit(_unit(unclosed, fetches, transitions))
    elapsed = time.perf_counter() - started

    assert elapsed < 20
    (call,) = result.external_calls
    assert call.count == 2000
    flows = {f.field: f for f in result.status_flows}
    assert len(flows["status"].transitions) == 1
