"""Scoring functions: materiality level, goal progress and scenario risk.

Each function is a pure calculation with no side effects.
"""

from __future__ import annotations

from typing import Optional, Union

from grc_backend.engine.normalize import clamp, coerce_number, optional_number
from grc_backend.engine.result import MaterialityResult
from grc_backend.models.enums import (
    PROBABILITY_ORDINAL,
    SEVERITY_ORDINAL,
    MaterialityLevel,
    Probability,
    Severity,
    parse_enum,
)


# (minimum combined score, level), checked top-down
MATERIALITY_THRESHOLDS: list[tuple[float, MaterialityLevel]] = [
    (4.5, MaterialityLevel.CRITICAL),
    (3.5, MaterialityLevel.HIGH),
    (2.5, MaterialityLevel.MEDIUM),
]


def materiality_level_for(combined_score: float) -> MaterialityLevel:
    """Map a combined score to its level. Boundaries are inclusive upward."""
    for minimum, level in MATERIALITY_THRESHOLDS:
        if combined_score >= minimum:
            return level
    return MaterialityLevel.LOW


def classify_materiality(
    impact_score: Optional[float],
    financial_score: Optional[float],
) -> MaterialityResult:
    """Combined = (impact + financial) / 2, level from the fixed ladder.

    A missing score counts as 0 so the result always has a level, but
    ``has_sufficient_data`` is False so callers can tell a real "low" from
    one produced by absent data.
    """
    sufficient = (
        optional_number(impact_score) is not None
        and optional_number(financial_score) is not None
    )
    combined = (coerce_number(impact_score) + coerce_number(financial_score)) / 2
    return MaterialityResult(
        combined_score=combined,
        level=materiality_level_for(combined),
        has_sufficient_data=sufficient,
    )


def compute_goal_progress(
    baseline: Optional[float],
    target: Optional[float],
    current: Optional[float],
) -> float:
    """Progress = (current - baseline) / (target - baseline) * 100, clamped to 0-100.

    Returns 0 when baseline or target is missing, or when they are equal.
    Regression past the baseline reports 0 and overshoot reports 100.
    """
    if baseline is None or target is None:
        return 0.0
    if target == baseline:
        return 0.0
    total_change = target - baseline
    current_change = coerce_number(current) - baseline
    return clamp((current_change / total_change) * 100, 0.0, 100.0)


def compute_scenario_risk_score(
    severity: Union[Severity, str],
    probability: Union[Probability, str],
) -> int:
    """Risk_Score = severity_ordinal (1-4) x probability_ordinal (1-5), range 1-20.

    Raises InvalidEnumValue for unrecognized values instead of defaulting.
    """
    sev = parse_enum(Severity, severity, "severity")
    prob = parse_enum(Probability, probability, "probability")
    return SEVERITY_ORDINAL[sev] * PROBABILITY_ORDINAL[prob]
