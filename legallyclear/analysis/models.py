from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """Risk tier of a red flag."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class RiskFlag:
    """One identified risk clause."""

    risk: str
    severity: Severity

    def to_dict(self) -> dict[str, str]:
        return {"risk": self.risk, "severity": self.severity.value}


@dataclass(frozen=True)
class AnalysisResult:
    """Output of the document analysis call."""

    summary: str
    red_flags: tuple[RiskFlag, ...] = field(default_factory=tuple)
    action_items: tuple[str, ...] = field(default_factory=tuple)
    reasoning: str = ""

    def count_by_severity(self, severity: Severity) -> int:
        return sum(1 for flag in self.red_flags if flag.severity is severity)
