"""Summary builders for analysis results.

Everything here rephrases records the extractors already produced; nothing
new is read from the source text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.analysis import FunctionalSummary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artifacts.models.artifacts.calls import ExternalCall, GoogleServiceUsage
    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.resources import ConnectedResource
    from artifacts.models.artifacts.triggers import TriggerRecord

# (description keyword, action phrase, input source, output target)
VENDOR_SIGNALS: tuple[tuple[str, str, str | None, str | None], ...] = (
    ("slack", "sends notifications to Slack", None, "Slack"),
    ("jisr", "fetches attendance data from Jisr", "Jisr HR system", None),
    ("attendance", "fetches attendance data from Jisr", "Jisr HR system", None),
    ("workable", "syncs with Workable recruiting", "Workable", None),
    ("salesforce", "integrates with Salesforce", "Salesforce", None),
    ("webhook", "sends data to external webhook", None, "external webhook"),
)

GENERIC_API_ACTION = "calls external APIs"
DEFAULT_ACTION = "automates spreadsheet operations"

# (name keywords, call description keyword, detailed purpose), first match wins.
_DETAILED_PURPOSES: tuple[tuple[tuple[str, ...], str | None, str], ...] = (
    (("workable", "recruit"), "workable", "Manages recruiting pipeline and candidate data from Workable"),
    (("reminder", "notification"), "slack", "Sends automated notifications and reminders"),
    (("sync", "integration"), None, "Synchronizes data between multiple systems"),
    (("report", "dashboard"), None, "Generates reports and dashboard data"),
    (("generator", "template"), None, "Generates documents from templates"),
)

_SERVICE_PURPOSES = (
    ("Gmail", "Automates email workflows"),
    ("Calendar", "Manages calendar events and scheduling"),
    ("Sheets", "Automates spreadsheet operations and data processing"),
)

_ONE_LINE_PURPOSES = (
    ("attendance", "Manages attendance tracking and reminders"),
    ("integration", "Handles third-party integration"),
    ("reminder", "Sends automated reminders"),
    ("generator", "Generates documents or reports"),
    ("sync", "Synchronizes data between systems"),
    ("import", "Imports data from external sources"),
    ("export", "Exports data to external systems"),
    ("report", "Generates reports"),
    ("notification", "Sends notifications"),
    ("backup", "Handles data backup"),
)


def _plural(n: int, noun: str) -> str:
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


def trigger_phrase(triggers: Sequence[TriggerRecord]) -> str:
    """Opening clause describing how the unit is started."""
    if not triggers:
        return "This script runs manually"
    main = triggers[0]
    if main.type == "time-driven":
        return f"This script runs automatically {main.schedule or 'on a schedule'}"
    if main.type == "on-edit":
        return "This script runs when a spreadsheet is edited"
    if main.type == "on-open":
        return "This script runs when a document is opened"
    if main.type == "on-form-submit":
        return "This script runs when a form is submitted"
    if main.type in ("web-request-get", "web-request-post"):
        return "This script runs as a web app"
    return "This script runs manually"


def _trigger_step(triggers: Sequence[TriggerRecord]) -> str:
    if not triggers:
        return "Run manually by user"
    main = triggers[0]
    if main.type == "time-driven":
        return f"Runs automatically {main.schedule or 'on schedule'}"
    if main.type == "on-edit":
        return "Triggered when spreadsheet is edited"
    if main.type == "on-open":
        return "Runs when document is opened"
    if main.type == "on-form-submit":
        return "Triggered on form submission"
    return "Runs manually or via trigger"


def main_function(functions: Sequence[FunctionRecord]) -> FunctionRecord | None:
    """First public function longer than ten lines, if any."""
    return next((f for f in functions if f.is_public and f.line_count > 10), None)


def build_workflow_steps(
    functions: Sequence[FunctionRecord],
    calls: Sequence[ExternalCall],
    services: Sequence[str],
    triggers: Sequence[TriggerRecord],
) -> list[str]:
    """Ordered trigger -> fetch -> processing -> output narrative.

    Steps without supporting evidence are left out; the trigger step is
    always present.
    """
    steps = [_trigger_step(triggers)]

    sources = [
        c.description
        for c in calls
        if c.method == "GET" or "fetch" in c.description.lower()
    ]
    if "Sheets" in services:
        sources.append("spreadsheet data")
    if sources:
        steps.append(f"Fetches data from {' and '.join(sources[:2])}")

    main = main_function(functions)
    if main is not None:
        steps.append(f"Processes data using {main.name}()")
    elif functions:
        steps.append("Processes and transforms the data")

    outputs = [
        c.description
        for c in calls
        if c.method == "POST" or "send" in c.description.lower()
    ]
    if "Gmail" in services:
        outputs.append("email")
    if "Sheets" in services:
        outputs.append("spreadsheet")
    if outputs:
        steps.append(f"Outputs results to {' and '.join(outputs[:2])}")

    return steps


def infer_detailed_purpose(
    name: str,
    functions: Sequence[FunctionRecord],
    calls: Sequence[ExternalCall],
    services: Sequence[str],
) -> str:
    lower = name.lower()
    function_names = " ".join(f.name.lower() for f in functions)
    descriptions = " ".join(c.description.lower() for c in calls)

    if "attendance" in lower or "attendance" in function_names or "jisr" in descriptions:
        return "Automates attendance tracking and employee time management"
    for keywords, described_as, purpose in _DETAILED_PURPOSES:
        if any(keyword in lower for keyword in keywords):
            return purpose
        if described_as and described_as in descriptions:
            return purpose
    for service, purpose in _SERVICE_PURPOSES:
        if service in services:
            return purpose
    return "Automates Google Workspace tasks"


def build_functional_summary(
    name: str,
    functions: Sequence[FunctionRecord],
    calls: Sequence[ExternalCall],
    services: Sequence[GoogleServiceUsage],
    triggers: Sequence[TriggerRecord],
    resources: Sequence[ConnectedResource],
) -> FunctionalSummary:
    """Synthesize the plain-language summary of a unit."""
    service_names = [s.service_name for s in services]
    vendor_actions: list[str] = []
    generic_actions: list[str] = []
    input_sources: list[str] = []
    output_targets: list[str] = []

    for call in calls:
        description = call.description.lower()
        for keyword, action, source, target in VENDOR_SIGNALS:
            if keyword in description:
                vendor_actions.append(action)
                if source:
                    input_sources.append(source)
                if target:
                    output_targets.append(target)
                break
        else:
            if "api" in description:
                generic_actions.append(GENERIC_API_ACTION)

    service_actions: list[str] = []
    if "Sheets" in service_names:
        input_sources.append("Google Sheets")
        if any(r.kind == "spreadsheet" for r in resources):
            service_actions.append("reads/writes spreadsheet data")
    if "Gmail" in service_names:
        output_targets.append("Gmail")
        service_actions.append("sends emails")
    if "Drive" in service_names:
        service_actions.append("manages Drive files")
    if "Calendar" in service_names:
        service_actions.append("manages calendar events")

    actions = list(dict.fromkeys(vendor_actions + generic_actions + service_actions))
    action_phrase = ", ".join(actions[:3]) if actions else DEFAULT_ACTION

    detailed = f"{infer_detailed_purpose(name, functions, calls, service_names)}."
    spreadsheets = sum(1 for r in resources if r.kind == "spreadsheet")
    if spreadsheets:
        detailed += f" It works with {_plural(spreadsheets, 'spreadsheet')}."
    if calls:
        detailed += f" Integrates with {_plural(len(calls), 'external API')}."

    return FunctionalSummary(
        brief=f"{trigger_phrase(triggers)} and {action_phrase}.",
        detailed=detailed,
        workflow_steps=build_workflow_steps(functions, calls, service_names, triggers),
        input_sources=list(dict.fromkeys(input_sources)),
        output_targets=list(dict.fromkeys(output_targets)),
    )


def infer_purpose(name: str) -> str:
    lower = name.lower()
    for keyword, purpose in _ONE_LINE_PURPOSES:
        if keyword in lower:
            return purpose
    return DEFAULT_ACTION.capitalize()


def build_one_line_summary(
    name: str,
    functions: Sequence[FunctionRecord],
    calls: Sequence[ExternalCall],
    services: Sequence[GoogleServiceUsage],
) -> str:
    """``<purpose>. Contains N functions[ with M ...]. Uses Google <services>.``

    The services sentence is omitted when no platform service is used.
    """
    text = f"{infer_purpose(name)}. Contains {_plural(len(functions), 'function')}"
    if calls:
        text += f" with {_plural(len(calls), 'external API integration')}"
    text += "."
    names = [s.service_name for s in services]
    if names:
        text += f" Uses Google {', '.join(names[:3])}"
        if len(names) > 3:
            text += f" and {len(names) - 3} more services"
        text += "."
    return text
