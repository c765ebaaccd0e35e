"""Plain-language rewriting of conditions and formulas.

Pure string rewriting: operators become words, identifiers become spaced
lowercase words and ``object.property`` becomes ``object's property``. There
is no semantic understanding here.
"""

from __future__ import annotations

import re

from logic.vocabulary import format_variable_name, humanize

_TOKEN = re.compile(
    r"""
    (?P<string>(['"`])(?:\\.|(?!\2).)*\2)
  | (?P<chain>[A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*)
  | (?P<number>\d+(?:\.\d+)?)
  | (?P<op>===|!==|==|!=|>=|<=|&&|\|\||[<>!])
  | (?P<other>\S)
    """,
    re.VERBOSE,
)

CONDITION_OPERATORS = {
    "===": "equals",
    "==": "equals",
    "!==": "does not equal",
    "!=": "does not equal",
    ">=": "is greater than or equal to",
    "<=": "is less than or equal to",
    ">": "is greater than",
    "<": "is less than",
    "&&": "AND",
    "||": "OR",
}

FORMULA_OPERATORS = {
    "+": "plus",
    "-": "minus",
    "*": "multiplied by",
    "/": "divided by",
    "%": "modulo",
}

_SPACE_BEFORE = re.compile(r"\s+([),\]])")
_SPACE_AFTER = re.compile(r"([(\[])\s+")
_WHITESPACE_RUN = re.compile(r"\s+")


def _tidy(pieces: list[str]) -> str:
    text = _WHITESPACE_RUN.sub(" ", " ".join(pieces)).strip()
    text = _SPACE_BEFORE.sub(r"\1", text)
    return _SPACE_AFTER.sub(r"\1", text)


def _chain_parts(chain: str) -> list[str]:
    return [part.strip() for part in chain.split(".")]


def describe_chain(chain: str) -> str:
    """``leave.balance`` -> ``leave's balance``."""
    return "'s ".join(humanize(part) for part in _chain_parts(chain))


def explain_condition(condition: str) -> str:
    """Rewrite a boolean expression into words.

    >>> explain_condition("leaveBalance < requestedDays")
    'leave balance is less than requested days'
    """
    tokens = list(_TOKEN.finditer(condition))
    pieces: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        kind = token.lastgroup
        value = token.group(kind)

        if kind == "string":
            pieces.append(value[1:-1])
        elif kind == "chain":
            pieces.append(describe_chain(value))
        elif kind == "op" and value == "!":
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if following is not None and following.lastgroup == "chain":
                pieces.append(f"{describe_chain(following.group('chain'))} is false/empty")
                index += 1
            else:
                pieces.append("not")
        elif kind == "op":
            pieces.append(CONDITION_OPERATORS[value])
        else:
            pieces.append(value)
        index += 1

    return _tidy(pieces)


def explain_formula(formula: str) -> str:
    """Rewrite an arithmetic expression with operator words and readable names."""
    pieces: list[str] = []
    for token in _TOKEN.finditer(formula):
        kind = token.lastgroup
        value = token.group(kind)
        if kind == "chain":
            pieces.append("'s ".join(format_variable_name(p) for p in _chain_parts(value)))
        elif kind == "string":
            pieces.append(value[1:-1])
        elif value in FORMULA_OPERATORS:
            pieces.append(FORMULA_OPERATORS[value])
        else:
            pieces.append(value)
    return _tidy(pieces)


__all__ = [
    "CONDITION_OPERATORS",
    "FORMULA_OPERATORS",
    "describe_chain",
    "explain_condition",
    "explain_formula",
]
