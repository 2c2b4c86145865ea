from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Secret:
    category: str
    pattern_type: str
    value: str
    uri: str  # "<url>:<line>" of the first occurrence
    risk_level: str
    impact: str
    line_num: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "pattern_type": self.pattern_type,
            "value": self.value,
            "uri": self.uri,
            "risk_level": self.risk_level,
            "impact": self.impact,
        }


@dataclass
class URLFindings:
    url: str
    secrets: List[Secret] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "secrets": [s.to_dict() for s in self.secrets]}


@dataclass
class ScanConfig:
    """Plain run parameters handed to the core by the command line layer."""
    silent: bool = False
    workers: int = 50
    user_agent: str = "Spooky"
    detailed: bool = False
    bulk: bool = False
    percent: int = 100
    category: str = "all"
    output: Optional[str] = None
    timeout: float = 10.0
    stream_output: bool = True
    verbose: bool = False
    no_progress: bool = False

    @property
    def echo_findings(self) -> bool:
        return not self.silent and not self.bulk
