"""Immutable result structures returned by the scoring and aggregation engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from grc_backend.models.enums import MaterialityLevel


@dataclass(frozen=True)
class MaterialityResult:
    """Combined double materiality score for one topic."""

    combined_score: float
    level: MaterialityLevel
    # False when a score was missing and coerced to 0
    has_sufficient_data: bool = True


@dataclass(frozen=True)
class ProgramMetrics:
    total_programs: int
    active_programs: int
    draft_programs: int
    inactive_programs: int
    avg_maturity_score: int
    programs_needing_review: int
    upcoming_reviews: int


@dataclass(frozen=True)
class IncidentMetrics:
    total_incidents: int
    open_incidents: int
    investigating_incidents: int
    resolved_incidents: int
    critical_incidents: int
    high_priority_incidents: int
    avg_resolution_time_hours: float


@dataclass(frozen=True)
class CrisisMetrics:
    total_crises: int
    active_crises: int
    resolved_crises: int
    critical_crises: int
    avg_resolution_time_hours: float


@dataclass(frozen=True)
class CarbonSummary:
    scope1_total: float
    scope2_total: float
    scope3_total: float
    total_emissions: float


@dataclass(frozen=True)
class GoalStats:
    total: int
    achieved: int
    active: int
    at_risk: int
    avg_progress: float
    completion_rate: float


@dataclass(frozen=True)
class ScenarioSummary:
    total_analyses: int
    active_analyses: int
    draft_analyses: int
    high_risk_scenarios: int
    avg_risk_score: int


@dataclass(frozen=True)
class PortfolioStats:
    total: int
    total_value: float
    avg_esg_score: float
    high_risk: int


@dataclass(frozen=True)
class EngagementStats:
    total: int
    completed: int
    ongoing: int
    planned: int
    upcoming: int


@dataclass(frozen=True)
class MaterialityMatrixEntry:
    topic_name: str
    category: str | None
    impact_score: float | None
    financial_score: float | None
    result: MaterialityResult


@dataclass(frozen=True)
class ProgramPerformance:
    total: int
    active: int
    completed: int
    total_budget: float
    total_spent: float
    budget_utilization: float


@dataclass(frozen=True)
class ESGAnalytics:
    """Top-level ESG analytics rollup behind the ESG dashboard and report."""

    overall_score: float
    environmental_score: float
    social_score: float
    governance_score: float
    goal_stats: GoalStats
    program_performance: ProgramPerformance
    warnings: list[str] = field(default_factory=list)
