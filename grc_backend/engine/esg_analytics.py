"""ESG dashboard analytics: pillar scores, goal and portfolio rollups, report summary."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from grc_backend.engine.normalize import (
    coerce_number,
    round_half_up,
    safe_mean,
    to_utc,
    utc_now,
)
from grc_backend.engine.result import (
    EngagementStats,
    ESGAnalytics,
    GoalStats,
    MaterialityMatrixEntry,
    PortfolioStats,
    ProgramPerformance,
    ScenarioSummary,
)
from grc_backend.engine.scoring import (
    classify_materiality,
    compute_goal_progress,
    compute_scenario_risk_score,
)
from grc_backend.models.enums import (
    EngagementStatus,
    ESGProgramStatus,
    GoalStatus,
    RiskLevel,
    ScenarioStatus,
)
from grc_backend.models.records import (
    ESGMetricsSnapshot,
    ESGProgram,
    Goal,
    MaterialityAssessment,
    PortfolioAssessment,
    ScenarioAnalysis,
    StakeholderEngagement,
)

logger = logging.getLogger(__name__)

DEFAULT_HIGH_RISK_THRESHOLD = 12


def compute_environmental_score(m: ESGMetricsSnapshot) -> float:
    """Mean of six 0-100 sub-scores; footprint-style inputs count against the score."""
    carbon = max(0.0, 100 - m.carbon_footprint / 100)
    energy = max(0.0, 100 - m.energy_consumption * 5)
    water = max(0.0, 100 - m.water_usage / 100)
    waste = max(0.0, 100 - m.waste_generated / 10)
    return (
        carbon + energy + water + waste
        + m.renewable_energy_percentage + m.recycling_rate
    ) / 6


def compute_social_score(m: ESGMetricsSnapshot) -> float:
    satisfaction = m.employee_satisfaction
    diversity = m.diversity_percentage * 2
    training = min(100.0, m.training_hours * 3)
    community = min(100.0, m.community_investment / 100_000)
    safety = max(0.0, 100 - m.health_safety_incidents * 50)
    supplier = m.supplier_diversity * 3.57
    return (satisfaction + diversity + training + community + safety + supplier) / 6


def compute_governance_score(m: ESGMetricsSnapshot) -> float:
    board = m.board_diversity * 2.22
    compensation = max(0.0, 100 - m.executive_compensation_ratio / 2)
    return (
        board + compensation + m.ethics_compliance_score + m.transparency_score
        + m.stakeholder_engagement + m.risk_management_score
    ) / 6


def compute_goal_stats(goals: Sequence[Goal]) -> GoalStats:
    """Status counts and average progress across goals.

    ``at_risk`` counts both at_risk and behind_schedule goals.
    """
    total = len(goals)
    achieved = sum(1 for g in goals if g.status == GoalStatus.ACHIEVED)
    progress = [
        compute_goal_progress(g.baseline_value, g.target_value, g.current_value)
        for g in goals
    ]
    return GoalStats(
        total=total,
        achieved=achieved,
        active=sum(1 for g in goals if g.status == GoalStatus.ACTIVE),
        at_risk=sum(
            1 for g in goals
            if g.status in (GoalStatus.AT_RISK, GoalStatus.BEHIND_SCHEDULE)
        ),
        avg_progress=safe_mean(progress),
        completion_rate=(achieved / total) * 100 if total > 0 else 0.0,
    )


def compute_program_performance(programs: Sequence[ESGProgram]) -> ProgramPerformance:
    total_budget = sum(coerce_number(p.budget) for p in programs)
    total_spent = sum(coerce_number(p.spent) for p in programs)
    return ProgramPerformance(
        total=len(programs),
        active=sum(1 for p in programs if p.status == ESGProgramStatus.ACTIVE),
        completed=sum(1 for p in programs if p.status == ESGProgramStatus.COMPLETED),
        total_budget=total_budget,
        total_spent=total_spent,
        budget_utilization=(total_spent / total_budget) * 100 if total_budget > 0 else 0.0,
    )


def compute_scenario_summary(
    analyses: Sequence[ScenarioAnalysis],
    high_risk_threshold: int = DEFAULT_HIGH_RISK_THRESHOLD,
) -> ScenarioSummary:
    scores = [compute_scenario_risk_score(a.severity, a.probability) for a in analyses]
    return ScenarioSummary(
        total_analyses=len(analyses),
        active_analyses=sum(1 for a in analyses if a.status == ScenarioStatus.ACTIVE),
        draft_analyses=sum(1 for a in analyses if a.status == ScenarioStatus.DRAFT),
        high_risk_scenarios=sum(1 for s in scores if s >= high_risk_threshold),
        avg_risk_score=round_half_up(safe_mean(scores)),
    )


def compute_portfolio_stats(portfolios: Sequence[PortfolioAssessment]) -> PortfolioStats:
    return PortfolioStats(
        total=len(portfolios),
        total_value=sum(coerce_number(p.total_value) for p in portfolios),
        avg_esg_score=safe_mean([coerce_number(p.esg_score) for p in portfolios]),
        high_risk=sum(
            1 for p in portfolios
            if p.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL)
        ),
    )


def compute_engagement_stats(
    engagements: Sequence[StakeholderEngagement],
    now: Optional[datetime] = None,
) -> EngagementStats:
    now = to_utc(now) if now is not None else utc_now()
    return EngagementStats(
        total=len(engagements),
        completed=sum(1 for e in engagements if e.status == EngagementStatus.COMPLETED),
        ongoing=sum(1 for e in engagements if e.status == EngagementStatus.ONGOING),
        planned=sum(1 for e in engagements if e.status == EngagementStatus.PLANNED),
        upcoming=sum(
            1 for e in engagements
            if e.next_engagement_date is not None and e.next_engagement_date > now
        ),
    )


def build_materiality_matrix(
    assessments: Sequence[MaterialityAssessment],
) -> list[MaterialityMatrixEntry]:
    """Score every topic, highest combined score first."""
    entries = [
        MaterialityMatrixEntry(
            topic_name=a.topic_name,
            category=a.category,
            impact_score=a.impact_score,
            financial_score=a.financial_score,
            result=classify_materiality(a.impact_score, a.financial_score),
        )
        for a in assessments
    ]
    incomplete = sum(1 for e in entries if not e.result.has_sufficient_data)
    if incomplete:
        logger.warning(f"{incomplete} materiality topic(s) scored with missing inputs")
    entries.sort(key=lambda e: e.result.combined_score, reverse=True)
    return entries


def compute_esg_analytics(
    snapshot: ESGMetricsSnapshot,
    goals: Sequence[Goal],
    programs: Sequence[ESGProgram],
) -> ESGAnalytics:
    """Overall ESG score (mean of the three pillars) with goal and program rollups."""
    environmental = compute_environmental_score(snapshot)
    social = compute_social_score(snapshot)
    governance = compute_governance_score(snapshot)

    warnings: list[str] = []
    if not goals:
        warnings.append("No goals supplied; goal completion rate is 0.")
    if not programs:
        warnings.append("No programs supplied; budget utilization is 0.")

    return ESGAnalytics(
        overall_score=(environmental + social + governance) / 3,
        environmental_score=environmental,
        social_score=social,
        governance_score=governance,
        goal_stats=compute_goal_stats(goals),
        program_performance=compute_program_performance(programs),
        warnings=warnings,
    )


def build_report_summary(analytics: ESGAnalytics) -> str:
    """One-line narrative for the top of an ESG report."""
    return (
        f"ESG Performance Summary: Overall ESG score of {analytics.overall_score:.1f}% "
        f"with {analytics.goal_stats.completion_rate:.1f}% goal completion rate "
        f"and {analytics.program_performance.active} active programs."
    )
