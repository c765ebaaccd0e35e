from __future__ import annotations

from artifacts.models.artifacts.advice import ProjectAdvice
from artifacts.models.artifacts.calls import ExternalCall
from artifacts.models.artifacts.source import SourceFile
from logic.advice import build_advice
from parse.functions import extract_functions

CAREFUL = (
    "// Reads the configured key\n"
    "function run() {\n"
    "  try {\n"
    "    var key = PropertiesService.getScriptProperties().getProperty('KEY');\n"
    "    Logger.log(key);\n"
    "  } catch (e) {\n"
    "    Logger.log(e);\n"
    "  }\n"
    "}\n"
)


def _files(*texts: str) -> list[SourceFile]:
    return [SourceFile(name=f"File{i}.gs", text=text) for i, text in enumerate(texts, 1)]


def _advice(*texts: str, calls=(), complexity: str = "low", lines: int = 1) -> ProjectAdvice:
    files = _files(*texts)
    functions = [f for source in files for f in extract_functions(source.text, source.name)]
    return build_advice(files, functions, list(calls), complexity, lines)


def _calls(count: int) -> list[ExternalCall]:
    return [
        ExternalCall(url=f"https://api{i}.example.com/v1", description="External API")
        for i in range(count)
    ]


def test_careful_code_only_gets_the_all_clear() -> None:
    advice = _advice(CAREFUL)

    assert advice.suggestions == []
    assert advice.warnings == []
    assert advice.recommendations == [
        "This script follows good practices. "
        "Consider periodic reviews for optimization opportunities."
    ]


def test_bare_function() -> None:
    advice = _advice("function ping(){ return true; }")

    assert advice.suggestions == [
        "Add try-catch error handling for better reliability",
        "Add logging for easier debugging",
    ]
    assert advice.warnings == [
        "No error handling detected. Consider adding try-catch blocks for robustness.",
        "No logging detected. Consider adding logging for debugging and monitoring.",
    ]
    assert advice.recommendations == [
        "Add error handling with try-catch blocks to gracefully handle failures.",
        "Add logging statements to track execution progress and debug issues.",
        "Use Script Properties to store configuration values instead of hardcoding.",
        "Add JSDoc comments and inline documentation for better code understanding.",
    ]


def test_words_containing_try_are_not_error_handling() -> None:
    advice = _advice("var country = 'SA';\nvar entry = retryCount;\n")

    assert "No error handling detected. Consider adding try-catch blocks for robustness." in (
        advice.warnings
    )


def test_long_functions_are_named() -> None:
    body = "".join(f"  var v{i} = {i};\n" for i in range(60))
    text = CAREFUL + f"function buildReport() {{\n{body}}}\nfunction tidy() {{\n}}\n"

    advice = _advice(text)

    assert advice.suggestions == ["Consider breaking down long functions: buildReport"]


def test_external_calls_want_throttling_and_caching() -> None:
    text = CAREFUL + "UrlFetchApp.fetch(url);\n"

    advice = _advice(text, calls=_calls(3))

    assert advice.suggestions == [
        "Consider adding rate limiting (Utilities.sleep) for external API calls",
        "Consider using CacheService to cache external API responses",
    ]
    assert advice.warnings == ["Multiple API calls without rate limiting may hit quota limits."]
    assert advice.recommendations == [
        "Consider caching API responses to reduce external calls and improve performance."
    ]


def test_throttled_and_cached_calls_are_quiet() -> None:
    text = CAREFUL + "CacheService.getScriptCache();\nUtilities.sleep(500);\nUrlFetchApp.fetch(url);\n"

    advice = _advice(text, calls=_calls(3))

    assert advice.suggestions == []
    assert advice.warnings == []


def test_hardcoded_values() -> None:
    text = (
        CAREFUL
        + "var apiKey = 'sk-live-123';\n"
        + "var sheetId = '1234567890';\n"
        + "var first = sheet.getRange(2, 1).getValue();\n"
    )

    advice = _advice(text)

    assert advice.suggestions == [
        "Move hardcoded IDs to PropertiesService for flexibility",
        "Use getValues() for batch reads instead of individual getValue() calls",
    ]
    assert advice.warnings == [
        "Potential hardcoded credentials detected. "
        "Consider using Script Properties for sensitive data."
    ]


def test_credentials_read_from_properties_are_fine() -> None:
    text = CAREFUL + "var password = PropertiesService.getScriptProperties().getProperty('pw');\n"

    assert _advice(text).warnings == []


def test_whole_sheet_reads() -> None:
    text = CAREFUL + "var rows = sheet.getDataRange().getValues();\n"

    assert _advice(text).warnings == [
        "Reading entire data range may cause performance issues with large datasets."
    ]


def test_large_units_should_be_split() -> None:
    split = (
        "Consider splitting this script into smaller, more focused functions "
        "for better maintainability."
    )

    assert _advice(CAREFUL, complexity="high").recommendations == [split]
    assert _advice(CAREFUL, lines=501).recommendations == [split]


def test_urls_are_not_comments() -> None:
    advice = _advice("var url = 'https://example.com';\n")

    assert (
        "Add JSDoc comments and inline documentation for better code understanding."
        in advice.recommendations
    )


def test_no_code_no_advice() -> None:
    assert build_advice([], [], [], "low", 0) == ProjectAdvice()
    assert build_advice(_files("  \n"), [], [], "low", 0) == ProjectAdvice()
