from __future__ import annotations

from artifacts.models.artifacts.source import SourceFile
from parse.external_calls import (
    describe_api,
    extract_external_calls,
    extract_google_services,
    normalize_base_url,
)
from rules.config import DEFAULT_API_VENDORS, ScriptMapConfig


def _files(*texts: str) -> list[SourceFile]:
    return [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]


def test_repeated_fetch_sites_collapse_into_one_counted_call() -> None:
    text = (
        "function sync() {\n"
        "  UrlFetchApp.fetch('https://api.example.com/v1/items?page=1');\n"
        "  UrlFetchApp.fetch('https://api.example.com/v1/items?page=2');\n"
        "}\n"
    )

    calls = extract_external_calls(_files(text))

    assert len(calls) == 1
    call = calls[0]
    assert call.url == "https://api.example.com/v1"
    assert call.method == "GET"
    assert call.count == 2
    assert call.description == "External API"
    assert call.location == "File1.gs:2"


def test_method_literal_near_call_sets_method() -> None:
    text = (
        "UrlFetchApp.fetch('https://hooks.slack.com/services/T0/B0/X', {\n"
        "  method: 'post',\n"
        "  payload: JSON.stringify(body)\n"
        "});\n"
    )

    (call,) = extract_external_calls(_files(text))

    assert call.method == "POST"
    assert call.url == "https://hooks.slack.com/services"
    assert call.description == "Slack API"


def test_same_url_with_different_methods_is_two_calls() -> None:
    get_site = "UrlFetchApp.fetch('https://api.example.com/v1/items');\n"
    post_site = (
        "UrlFetchApp.fetch('https://api.example.com/v1/items', { method: 'post' });\n"
    )

    calls = extract_external_calls(_files(get_site, post_site))

    assert [(c.url, c.method) for c in calls] == [
        ("https://api.example.com/v1", "GET"),
        ("https://api.example.com/v1", "POST"),
    ]


def test_counts_span_files() -> None:
    site = "UrlFetchApp.fetch('https://api.example.com/v1/x');\n"

    (call,) = extract_external_calls(_files(site, site, site))

    assert call.count == 3
    assert call.location == "File1.gs:1"


def test_url_variable_is_detected() -> None:
    text = "const reportUrl = 'https://reports.example.org/daily/summary';\n"

    (call,) = extract_external_calls(_files(text))

    assert call.url == "https://reports.example.org/daily"
    assert call.method == "GET"
    assert call.description == "HTTP request"
    assert call.count == 1


def test_config_key_url_is_detected() -> None:
    text = "var CONFIG = { BASE_URL: 'https://crm.example.net/api/v2' };\n"

    (call,) = extract_external_calls(_files(text))

    assert call.url == "https://crm.example.net/api"
    assert call.description == "External API"


def test_static_assets_and_google_documents_are_ignored() -> None:
    text = (
        "var logo = 'https://cdn.example.com/img/logo.png';\n"
        "var doc = 'https://docs.google.com/spreadsheets/d/abc/edit';\n"
    )

    assert extract_external_calls(_files(text)) == []


def test_plain_fetch_function_is_recognised() -> None:
    text = "fetch('https://status.example.io/health');\n"

    (call,) = extract_external_calls(_files(text))

    assert call.url == "https://status.example.io/health"


def test_normalize_base_url() -> None:
    assert normalize_base_url("https://api.example.com") == "https://api.example.com"
    assert normalize_base_url("https://api.example.com/") == "https://api.example.com"
    assert (
        normalize_base_url("https://api.example.com/v1/users/7?x=1")
        == "https://api.example.com/v1"
    )
    assert normalize_base_url("${BASE}/users") == "${BASE}/users"
    assert normalize_base_url("x" * 80) == "x" * 50


def test_describe_api_uses_first_matching_vendor() -> None:
    assert describe_api("https://hooks.slack.com/x", DEFAULT_API_VENDORS) == "Slack API"
    assert describe_api("https://api.jisr.net/v1", DEFAULT_API_VENDORS) == "Jisr HR API"
    assert describe_api("https://example.org/data", DEFAULT_API_VENDORS) == "HTTP request"


def test_custom_vendor_table_from_config() -> None:
    config = ScriptMapConfig(api_vendors={"example": "Example Corp API"})
    text = "UrlFetchApp.fetch('https://example.org/data');\n"

    (call,) = extract_external_calls(_files(text), config)

    assert call.description == "Example Corp API"


def test_google_services_in_table_order() -> None:
    files = _files(
        "GmailApp.sendEmail(to, 'Hi', 'body');\n",
        "var ss = SpreadsheetApp.getActiveSpreadsheet();\n",
    )

    services = extract_google_services(files)

    assert [(s.service_name, s.namespace) for s in services] == [
        ("Sheets", "SpreadsheetApp"),
        ("Gmail", "GmailApp"),
    ]


def test_google_services_need_whole_token() -> None:
    files = _files("var MySpreadsheetAppHelper = 1;\n")

    assert extract_google_services(files) == []


def test_google_services_extra_rules_from_config() -> None:
    config = ScriptMapConfig(google_services={"BigQuery": "BigQuery"})
    files = _files("BigQuery.Jobs.query(request, projectId);\n")

    services = extract_google_services(files, config)

    assert [s.service_name for s in services] == ["BigQuery"]
