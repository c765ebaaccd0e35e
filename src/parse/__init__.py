"""Lexical extractors for script source text."""

from parse.dependencies import extract_dependencies
from parse.external_calls import extract_external_calls, extract_google_services
from parse.functions import extract_functions, function_body
from parse.resources import extract_connected_resources
from parse.triggers import extract_triggers

__all__ = [
    "extract_connected_resources",
    "extract_dependencies",
    "extract_external_calls",
    "extract_functions",
    "extract_google_services",
    "extract_triggers",
    "function_body",
]
