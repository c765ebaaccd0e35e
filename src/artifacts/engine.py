"""Pure analysis engine: one SourceUnit in, one AnalysisResult out.

The engine performs no I/O and keeps no state between calls. It is total
over arbitrary text: a unit with nothing recognisable (or no files at all)
yields a valid result whose lists are empty.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.generators import (
    AdviceGenerator,
    CallsGenerator,
    DepsGenerator,
    FunctionsGenerator,
    LogicGenerator,
    ResourcesGenerator,
    TriggersGenerator,
)
from artifacts.models.artifacts.analysis import AnalysisResult
from artifacts.summaries.builders import build_functional_summary, build_one_line_summary
from parse.text import count_lines
from rules.config import ScriptMapConfig

if TYPE_CHECKING:
    from artifacts.models.artifacts.source import SourceUnit

logger = logging.getLogger(__name__)


def analyze_source_unit(
    unit: SourceUnit,
    config: ScriptMapConfig | None = None,
) -> AnalysisResult:
    """Analyze one automation project.

    Args:
        unit: The project's files and logical name
        config: Optional heuristics configuration (``None`` means defaults)

    Returns:
        The complete, immutable analysis of ``unit``.
    """
    if config is None:
        config = ScriptMapConfig()

    functions = FunctionsGenerator().generate(unit, config=config)
    external_calls, google_services = CallsGenerator().generate(unit, config=config)
    triggers = TriggersGenerator().generate(unit, config=config)
    resources = ResourcesGenerator().generate(unit, config=config)
    dependencies = DepsGenerator().generate(unit, config=config, resources=resources)
    logic = LogicGenerator().generate(unit, config=config, functions=functions)

    lines_of_code = sum(count_lines(f.text) for f in unit.analyzable_files())
    complexity = config.complexity.tier(lines_of_code)
    advice = AdviceGenerator().generate(
        unit,
        functions=functions,
        external_calls=external_calls,
        complexity=complexity,
        lines_of_code=lines_of_code,
    )

    result = AnalysisResult(
        name=unit.name,
        lines_of_code=lines_of_code,
        complexity=complexity,
        entry_mode="triggered" if triggers else "manual",
        summary=build_one_line_summary(unit.name, functions, external_calls, google_services),
        functional_summary=build_functional_summary(
            unit.name,
            functions,
            external_calls,
            google_services,
            triggers,
            resources,
        ),
        functions=functions,
        external_calls=external_calls,
        google_services=google_services,
        triggers=triggers,
        connected_resources=resources,
        dependencies=dependencies,
        business_rules=logic.business_rules,
        validations=logic.validations,
        status_flows=logic.status_flows,
        calculations=logic.calculations,
        decision_tree=logic.decision_tree,
        data_transformations=logic.data_transformations,
        business_requirements=logic.business_requirements,
        suggestions=advice.suggestions,
        warnings=advice.warnings,
        recommendations=advice.recommendations,
    )
    logger.debug(
        "Analyzed %s: %d line(s), %d function(s), %d trigger(s), %d external call(s)",
        unit.name,
        lines_of_code,
        len(functions),
        len(triggers),
        len(external_calls),
    )
    return result


__all__ = ["analyze_source_unit"]
