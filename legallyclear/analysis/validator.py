"""Validates the model's parsed JSON answer against the analysis invariants."""

from typing import Any

from legallyclear.analysis.exceptions import AnalysisValidationError
from legallyclear.analysis.models import AnalysisResult, RiskFlag, Severity

_REQUIRED_FIELDS = ("summary", "redFlags", "actionItems", "reasoning")
_VALID_SEVERITIES = frozenset(s.value for s in Severity)


def validate_and_build(data: dict[str, Any]) -> AnalysisResult:
    """Validate raw parsed JSON and build an AnalysisResult.

    Raises:
        AnalysisValidationError: on any validation failure.
    """
    _require_top_level_fields(data)
    summary = _require_string(data["summary"], "summary")
    reasoning = _require_string(data["reasoning"], "reasoning")
    red_flags = _build_red_flags(data["redFlags"])
    action_items = _build_action_items(data["actionItems"])
    return AnalysisResult(
        summary=summary,
        red_flags=red_flags,
        action_items=action_items,
        reasoning=reasoning,
    )


def _require_top_level_fields(data: dict[str, Any]) -> None:
    for field in _REQUIRED_FIELDS:
        if field not in data:
            raise AnalysisValidationError(f"Missing required top-level field: {field}")


def _require_string(raw: Any, name: str) -> str:
    if not isinstance(raw, str):
        raise AnalysisValidationError(f"'{name}' must be a string")
    return raw


def _build_red_flags(raw: Any) -> tuple[RiskFlag, ...]:
    if not isinstance(raw, list):
        raise AnalysisValidationError("'redFlags' must be a list")
    return tuple(_build_red_flag(item, i) for i, item in enumerate(raw))


def _build_red_flag(raw: Any, index: int) -> RiskFlag:
    if not isinstance(raw, dict):
        raise AnalysisValidationError(f"Red flag at index {index} must be an object")
    risk = raw.get("risk")
    if not risk or not isinstance(risk, str):
        raise AnalysisValidationError(
            f"Red flag at index {index}: 'risk' must be a non-empty string"
        )
    severity = raw.get("severity")
    normalized = severity.strip().lower() if isinstance(severity, str) else None
    if normalized not in _VALID_SEVERITIES:
        raise AnalysisValidationError(
            f"Red flag at index {index}: 'severity' must be one of "
            f"{sorted(_VALID_SEVERITIES)}, got {severity!r}"
        )
    return RiskFlag(risk=risk, severity=Severity(normalized))


def _build_action_items(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise AnalysisValidationError("'actionItems' must be a list")
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise AnalysisValidationError(f"Action item at index {i} must be a string")
    return tuple(raw)
