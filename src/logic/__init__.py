"""Business-logic reconstruction from script source text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.artifacts.logic import BusinessLogic
from logic.calculations import extract_calculations
from logic.decisions import extract_decision_tree
from logic.requirements import generate_business_requirements
from logic.rules import extract_business_rules
from logic.status_flows import extract_status_flows
from logic.transformations import extract_data_transformations
from logic.validations import extract_validations

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.source import SourceFile
    from rules.config import ScriptMapConfig

logger = logging.getLogger(__name__)


def extract_business_logic(
    name: str,
    files: Sequence[SourceFile],
    functions: Sequence[FunctionRecord],
    config: ScriptMapConfig | None = None,
) -> BusinessLogic:
    """Run every business-logic extractor over the analyzable files of a unit."""
    validation_scan = extract_validations(files, functions)
    calculations = extract_calculations(files)

    logic = BusinessLogic(
        business_rules=extract_business_rules(files),
        validations=validation_scan.checks,
        status_flows=extract_status_flows(files, config),
        calculations=calculations,
        decision_tree=extract_decision_tree(files, validation_scan.consumed),
        data_transformations=extract_data_transformations(files),
        business_requirements=generate_business_requirements(
            name,
            "\n".join(source.text for source in files),
            validation_scan.checks,
            calculations,
            functions,
        ),
    )
    logger.debug(
        "Business logic for %s: %d rule(s), %d validation(s), %d calculation(s)",
        name,
        len(logic.business_rules),
        len(logic.validations),
        len(logic.calculations),
    )
    return logic


__all__ = ["extract_business_logic"]
