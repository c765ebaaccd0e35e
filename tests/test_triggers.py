from __future__ import annotations

from artifacts.models.artifacts.source import SourceFile
from parse.triggers import describe_schedule, extract_triggers, read_chain


def _files(*texts: str) -> list[SourceFile]:
    return [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]


def test_reserved_edit_handler() -> None:
    (trigger,) = extract_triggers(_files("function onEdit(e){ var r = e.range; }"))

    assert trigger.type == "on-edit"
    assert trigger.function_name == "onEdit"
    assert trigger.is_programmatic is False
    assert trigger.source_event == "spreadsheet"
    assert trigger.schedule is None


def test_web_app_entry_points() -> None:
    text = "function doGet(e) {\n}\nfunction doPost(e) {\n}\n"

    triggers = extract_triggers(_files(text))

    assert [(t.type, t.source_event) for t in triggers] == [
        ("web-request-get", "http"),
        ("web-request-post", "http"),
    ]


def test_reserved_name_reported_once_across_files() -> None:
    text = "function onOpen() {\n}\n"

    triggers = extract_triggers(_files(text, text))

    assert len(triggers) == 1


def test_time_based_chain() -> None:
    text = (
        "function install() {\n"
        "  ScriptApp.newTrigger('syncLeave')\n"
        "    .timeBased()\n"
        "    .everyHours(6)\n"
        "    .create();\n"
        "}\n"
    )

    (trigger,) = extract_triggers(_files(text))

    assert trigger.type == "time-driven"
    assert trigger.function_name == "syncLeave"
    assert trigger.schedule == "every 6 hours"
    assert trigger.schedule_description == "Runs every 6 hours"
    assert trigger.is_programmatic is True
    assert trigger.source_event == "clock"


def test_daily_chain_with_hour() -> None:
    text = "ScriptApp.newTrigger('digest').timeBased().everyDays(1).atHour(9).create();"

    (trigger,) = extract_triggers(_files(text))

    assert trigger.schedule == "daily at 09:00"


def test_weekly_chain_with_weekday() -> None:
    text = (
        "ScriptApp.newTrigger('report').timeBased()"
        ".onWeekDay(ScriptApp.WeekDay.MONDAY).atHour(8).create();"
    )

    (trigger,) = extract_triggers(_files(text))

    assert trigger.schedule == "weekly on Monday at 08:00"


def test_event_chain_bound_to_spreadsheet() -> None:
    text = (
        "ScriptApp.newTrigger('handleEdit')"
        ".forSpreadsheet(SpreadsheetApp.getActive()).onEdit().create();"
    )

    (trigger,) = extract_triggers(_files(text))

    assert trigger.type == "on-edit"
    assert trigger.function_name == "handleEdit"
    assert trigger.is_programmatic is True
    assert trigger.source_event == "spreadsheet"


def test_form_submit_chain_defaults_to_form_source() -> None:
    text = "ScriptApp.newTrigger('onSubmitted').forForm(form).onFormSubmit().create();"

    (trigger,) = extract_triggers(_files(text))

    assert trigger.type == "on-form-submit"
    assert trigger.source_event == "form"


def test_triggers_follow_text_order_within_a_file() -> None:
    text = (
        "function install() {\n"
        "  ScriptApp.newTrigger('tick').timeBased().everyMinutes(5).create();\n"
        "}\n"
        "function onOpen() {\n"
        "}\n"
    )

    triggers = extract_triggers(_files(text))

    assert [t.function_name for t in triggers] == ["tick", "onOpen"]


def test_identical_registrations_deduplicated() -> None:
    site = "ScriptApp.newTrigger('tick').timeBased().everyMinutes(1).create();\n"

    triggers = extract_triggers(_files(site + site))

    assert len(triggers) == 1
    assert triggers[0].schedule == "every 1 minute"


def test_no_triggers() -> None:
    assert extract_triggers(_files("function run() {\n}\n")) == []


def test_read_chain_stops_at_unbalanced_args() -> None:
    text = "x.timeBased().everyHours(2"

    assert read_chain(text, 1) == [("timeBased", "")]


def test_describe_schedule_variants() -> None:
    assert describe_schedule([("everyMinutes", "15")]) == (
        "every 15 minutes",
        "Runs every 15 minutes",
    )
    assert describe_schedule([("everyDays", "3")])[0] == "every 3 days"
    assert describe_schedule([("everyWeeks", "2")])[0] == "every 2 weeks"
    assert describe_schedule([("after", "60000")])[0] == "once after a delay"
    assert describe_schedule([("at", "date")])[0] == "at specific time"
    assert describe_schedule([])[0] == "scheduled"


def test_builder_held_in_variable() -> None:
    text = (
        "function install() {\n"
        "  var builder = ScriptApp.newTrigger('run');\n"
        "  builder.timeBased().everyHours(2).create();\n"
        "}\n"
    )

    (trigger,) = extract_triggers(_files(text))

    assert trigger.type == "time-driven"
    assert trigger.function_name == "run"
    assert trigger.schedule == "every 2 hours"


def test_builder_variables_stay_with_their_registration() -> None:
    text = (
        "var a = ScriptApp.newTrigger('first');\n"
        "a.forSpreadsheet(ss).onEdit().create();\n"
        "var b = ScriptApp.newTrigger('second');\n"
        "b.timeBased().everyDays(1).create();\n"
    )

    triggers = extract_triggers(_files(text))

    assert [(t.function_name, t.type, t.schedule) for t in triggers] == [
        ("first", "on-edit", None),
        ("second", "time-driven", "daily"),
    ]
