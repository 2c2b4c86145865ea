from __future__ import annotations
import logging
import re
from typing import Iterable, List, Optional

from ..patterns.base import CompiledMatcher, PatternDefinition


logger = logging.getLogger("spooky.loader")


def select_definitions(
    definitions: Iterable[PatternDefinition], selector: str
) -> List[PatternDefinition]:
    selector = (selector or "").strip()
    if not selector or selector.lower() == "all":
        return list(definitions)
    wanted = selector.lower()
    return [d for d in definitions if d.category.lower() == wanted]


def compile_matchers(
    category: str = "all",
    definitions: Optional[Iterable[PatternDefinition]] = None,
) -> List[CompiledMatcher]:
    """Compile the registry, optionally narrowed to one category.

    Definitions whose expression fails to compile are left out of the result;
    the run carries on with whatever compiled.
    """
    if definitions is None:
        from ..patterns.registry import PATTERNS  # lazy import
        definitions = PATTERNS

    compiled: List[CompiledMatcher] = []
    for definition in select_definitions(definitions, category):
        try:
            compiled.append(CompiledMatcher.compile(definition))
        except re.error as exc:
            logger.debug("Dropping pattern %r: %s", definition.name, exc)
    return compiled
