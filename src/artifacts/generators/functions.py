"""Functions artifact generator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from parse.functions import extract_functions

if TYPE_CHECKING:
    from artifacts.models.artifacts.functions import FunctionRecord
    from artifacts.models.artifacts.source import SourceUnit

logger = logging.getLogger(__name__)


class FunctionsGenerator:
    """Generates function records from every analyzable file of a unit."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "functions"

    def generate(self, unit: SourceUnit, **kwargs: Any) -> list[FunctionRecord]:
        """Generate function records in file order, then text order."""
        functions: list[FunctionRecord] = []
        for source in unit.analyzable_files():
            found = extract_functions(source.text, source.name)
            logger.debug("%s: %d function(s)", source.name, len(found))
            functions.extend(found)
        return functions
