"""Dashboard rollups for the ESG and resilience domains.

Each function takes the typed records of its table plus the evaluation time
and settings, and delegates to the pure engine functions.
"""

from __future__ import annotations

from datetime import datetime

from grc_backend.config.settings import Settings
from grc_backend.engine.aggregation import (
    compute_carbon_summary,
    compute_crisis_metrics,
    compute_incident_metrics,
    compute_program_metrics,
)
from grc_backend.engine.esg_analytics import (
    build_materiality_matrix,
    compute_engagement_stats,
    compute_goal_stats,
    compute_portfolio_stats,
    compute_scenario_summary,
)
from grc_backend.engine.result import (
    CarbonSummary,
    CrisisMetrics,
    EngagementStats,
    GoalStats,
    IncidentMetrics,
    MaterialityMatrixEntry,
    PortfolioStats,
    ProgramMetrics,
    ScenarioSummary,
)
from grc_backend.metric_library.registry import register_rollup
from grc_backend.models.records import (
    CarbonRecord,
    Crisis,
    Goal,
    Incident,
    MaterialityAssessment,
    PortfolioAssessment,
    ResilienceProgram,
    ScenarioAnalysis,
    StakeholderEngagement,
)


@register_rollup(
    rollup_id="program_metrics",
    label="Resilience Programs",
    description=(
        "Program counts by status, average maturity score (basic=25 .. "
        "world_class=100) and overdue / upcoming reviews."
    ),
    table="resilience_programs",
    record_type=ResilienceProgram,
    domain="resilience",
)
def program_metrics(
    records: list[ResilienceProgram], now: datetime, settings: Settings
) -> ProgramMetrics:
    return compute_program_metrics(
        records, now=now, review_window_days=settings.review_window_days
    )


@register_rollup(
    rollup_id="incident_metrics",
    label="Incidents",
    description="Incident counts by status, severity and priority; mean resolution hours.",
    table="resilience_incidents",
    record_type=Incident,
    domain="resilience",
)
def incident_metrics(
    records: list[Incident], now: datetime, settings: Settings
) -> IncidentMetrics:
    return compute_incident_metrics(records)


@register_rollup(
    rollup_id="crisis_metrics",
    label="Crises",
    description="Crisis counts by status and severity; mean hours from declaration to resolution.",
    table="crises",
    record_type=Crisis,
    domain="resilience",
)
def crisis_metrics(
    records: list[Crisis], now: datetime, settings: Settings
) -> CrisisMetrics:
    return compute_crisis_metrics(records)


@register_rollup(
    rollup_id="scenario_summary",
    label="Scenario Analyses",
    description="Risk score (severity x probability) summary and high-risk scenario count.",
    table="scenario_analyses",
    record_type=ScenarioAnalysis,
    domain="resilience",
)
def scenario_summary(
    records: list[ScenarioAnalysis], now: datetime, settings: Settings
) -> ScenarioSummary:
    return compute_scenario_summary(
        records, high_risk_threshold=settings.high_risk_scenario_threshold
    )


@register_rollup(
    rollup_id="carbon_summary",
    label="Carbon Footprint",
    description="Scope 1/2/3 co2-equivalent totals and combined emissions.",
    table="carbon_management",
    record_type=CarbonRecord,
    domain="esg",
)
def carbon_summary(
    records: list[CarbonRecord], now: datetime, settings: Settings
) -> CarbonSummary:
    return compute_carbon_summary(records)


@register_rollup(
    rollup_id="goal_stats",
    label="ESG Goals",
    description="Goal counts by status, average progress and completion rate.",
    table="esg_goals",
    record_type=Goal,
    domain="esg",
)
def goal_stats(records: list[Goal], now: datetime, settings: Settings) -> GoalStats:
    return compute_goal_stats(records)


@register_rollup(
    rollup_id="materiality_matrix",
    label="Double Materiality",
    description="Combined impact/financial materiality score and level per topic.",
    table="double_materiality_assessments",
    record_type=MaterialityAssessment,
    domain="esg",
)
def materiality_matrix(
    records: list[MaterialityAssessment], now: datetime, settings: Settings
) -> list[MaterialityMatrixEntry]:
    return build_materiality_matrix(records)


@register_rollup(
    rollup_id="portfolio_stats",
    label="Portfolio Assessments",
    description="Portfolio value, average ESG score and high-risk count.",
    table="esg_portfolio_assessments",
    record_type=PortfolioAssessment,
    domain="esg",
)
def portfolio_stats(
    records: list[PortfolioAssessment], now: datetime, settings: Settings
) -> PortfolioStats:
    return compute_portfolio_stats(records)


@register_rollup(
    rollup_id="engagement_stats",
    label="Stakeholder Engagement",
    description="Engagement counts by status and upcoming engagements.",
    table="esg_stakeholder_engagement",
    record_type=StakeholderEngagement,
    domain="esg",
)
def engagement_stats(
    records: list[StakeholderEngagement], now: datetime, settings: Settings
) -> EngagementStats:
    return compute_engagement_stats(records, now=now)
