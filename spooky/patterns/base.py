from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Pattern


@dataclass(frozen=True)
class PatternDefinition:
    """
    One entry of the pattern registry. The display name, risk level and impact
    are attached here when the pattern is written, so a match is classified by
    the definition that produced it and never by inspecting the regex text.
    """
    name: str
    category: str
    pattern: str
    risk_level: str
    impact: str


@dataclass(frozen=True)
class CompiledMatcher:
    definition: PatternDefinition
    regex: Pattern[str]

    @property
    def category(self) -> str:
        return self.definition.category

    @property
    def pattern_type(self) -> str:
        return self.definition.name

    @classmethod
    def compile(cls, definition: PatternDefinition) -> "CompiledMatcher":
        # raises re.error for invalid expressions; callers decide what to drop
        return cls(definition=definition, regex=re.compile(definition.pattern))
