"""Tests for ESG analytics: pillar scores, goal stats, scenarios, portfolios."""

from datetime import timedelta

import pytest

from conftest import NOW
from grc_backend.engine.esg_analytics import (
    build_materiality_matrix,
    build_report_summary,
    compute_engagement_stats,
    compute_environmental_score,
    compute_esg_analytics,
    compute_goal_stats,
    compute_governance_score,
    compute_portfolio_stats,
    compute_program_performance,
    compute_scenario_summary,
    compute_social_score,
)
from grc_backend.errors import InvalidEnumValue
from grc_backend.models.enums import MaterialityLevel
from grc_backend.models.records import (
    ESGMetricsSnapshot,
    ESGProgram,
    Goal,
    MaterialityAssessment,
    PortfolioAssessment,
    ScenarioAnalysis,
    StakeholderEngagement,
)


@pytest.fixture
def snapshot() -> ESGMetricsSnapshot:
    return ESGMetricsSnapshot(
        carbon_footprint=2000,
        energy_consumption=4,
        water_usage=3000,
        waste_generated=200,
        renewable_energy_percentage=60,
        recycling_rate=70,
        employee_satisfaction=80,
        diversity_percentage=40,
        training_hours=20,
        community_investment=5_000_000,
        health_safety_incidents=1,
        supplier_diversity=20,
        board_diversity=40,
        executive_compensation_ratio=100,
        ethics_compliance_score=90,
        transparency_score=80,
        stakeholder_engagement=70,
        risk_management_score=85,
    )


class TestPillarScores:
    def test_environmental(self, snapshot):
        # 80 + 80 + 70 + 80 + 60 + 70 = 440 / 6
        assert compute_environmental_score(snapshot) == pytest.approx(440 / 6)

    def test_environmental_subscores_floor_at_zero(self):
        heavy = ESGMetricsSnapshot(carbon_footprint=1_000_000, energy_consumption=1000)
        # carbon and energy floor at 0; water and waste stay at 100
        assert compute_environmental_score(heavy) == pytest.approx(200 / 6)

    def test_social(self, snapshot):
        # 80 + 80 + 60 + 50 + 50 + 71.4 = 391.4 / 6
        assert compute_social_score(snapshot) == pytest.approx(391.4 / 6)

    def test_governance(self, snapshot):
        # 88.8 + 50 + 90 + 80 + 70 + 85 = 463.8 / 6
        assert compute_governance_score(snapshot) == pytest.approx(463.8 / 6)


class TestGoalStats:
    def test_counts_and_progress(self):
        goals = [
            Goal(baseline_value=0, target_value=100, current_value=100, status="achieved"),
            Goal(baseline_value=0, target_value=100, current_value=50, status="active"),
            Goal(baseline_value=0, target_value=100, current_value=20, status="at_risk"),
            Goal(baseline_value=None, target_value=100, current_value=20, status="behind_schedule"),
        ]
        stats = compute_goal_stats(goals)
        assert stats.total == 4
        assert stats.achieved == 1
        assert stats.active == 1
        assert stats.at_risk == 2
        assert stats.avg_progress == pytest.approx((100 + 50 + 20 + 0) / 4)
        assert stats.completion_rate == pytest.approx(25.0)

    def test_empty(self):
        stats = compute_goal_stats([])
        assert stats.total == 0
        assert stats.avg_progress == 0
        assert stats.completion_rate == 0

    def test_unknown_goal_status_raises(self):
        with pytest.raises(InvalidEnumValue):
            Goal(status="on-track")


class TestScenarioSummary:
    def test_high_risk_and_average(self):
        analyses = [
            ScenarioAnalysis(severity="critical", probability="very_high", status="active"),
            ScenarioAnalysis(severity="high", probability="high", status="active"),
            ScenarioAnalysis(severity="low", probability="low", status="draft"),
        ]
        summary = compute_scenario_summary(analyses)
        assert summary.total_analyses == 3
        assert summary.active_analyses == 2
        assert summary.draft_analyses == 1
        # 20 and 12 meet the default threshold of 12
        assert summary.high_risk_scenarios == 2
        # (20 + 12 + 2) / 3 = 11.33
        assert summary.avg_risk_score == 11

    def test_custom_threshold(self):
        analyses = [ScenarioAnalysis(severity="medium", probability="medium")]
        assert compute_scenario_summary(analyses, high_risk_threshold=6).high_risk_scenarios == 1
        assert compute_scenario_summary(analyses, high_risk_threshold=7).high_risk_scenarios == 0

    def test_empty(self):
        summary = compute_scenario_summary([])
        assert summary.avg_risk_score == 0
        assert summary.high_risk_scenarios == 0


class TestPortfolioAndEngagement:
    def test_portfolio_stats(self):
        portfolios = [
            PortfolioAssessment(risk_level="high", total_value=1_000_000, esg_score=60),
            PortfolioAssessment(risk_level="critical", total_value=None, esg_score=40),
            PortfolioAssessment(risk_level="low", total_value=500_000, esg_score=None),
        ]
        stats = compute_portfolio_stats(portfolios)
        assert stats.total == 3
        assert stats.total_value == 1_500_000
        assert stats.avg_esg_score == pytest.approx(100 / 3)
        assert stats.high_risk == 2

    def test_engagement_stats(self):
        engagements = [
            StakeholderEngagement(status="completed"),
            StakeholderEngagement(status="ongoing", next_engagement_date=NOW + timedelta(days=5)),
            StakeholderEngagement(status="planned", next_engagement_date=NOW - timedelta(days=5)),
            StakeholderEngagement(status="planned", next_engagement_date="2027-01-15"),
        ]
        stats = compute_engagement_stats(engagements, now=NOW)
        assert stats.total == 4
        assert stats.completed == 1
        assert stats.ongoing == 1
        assert stats.planned == 2
        assert stats.upcoming == 2


class TestMaterialityMatrix:
    def test_sorted_by_combined_score(self):
        assessments = [
            MaterialityAssessment(topic_name="Water", impact_score=2, financial_score=2),
            MaterialityAssessment(topic_name="Climate", impact_score=5, financial_score=4),
            MaterialityAssessment(topic_name="Labour", impact_score=3, financial_score=4),
        ]
        matrix = build_materiality_matrix(assessments)
        assert [e.topic_name for e in matrix] == ["Climate", "Labour", "Water"]
        assert matrix[0].result.level == MaterialityLevel.CRITICAL
        assert matrix[1].result.level == MaterialityLevel.HIGH
        assert matrix[2].result.level == MaterialityLevel.LOW

    def test_missing_scores_flagged(self):
        matrix = build_materiality_matrix(
            [MaterialityAssessment(topic_name="Biodiversity", impact_score=4)]
        )
        assert matrix[0].result.has_sufficient_data is False


class TestESGAnalytics:
    def test_overall_is_mean_of_pillars(self, snapshot):
        analytics = compute_esg_analytics(snapshot, goals=[], programs=[])
        expected = (
            analytics.environmental_score + analytics.social_score + analytics.governance_score
        ) / 3
        assert analytics.overall_score == pytest.approx(expected)
        assert len(analytics.warnings) == 2

    def test_program_performance(self):
        programs = [
            ESGProgram(status="active", budget=100_000, spent=40_000),
            ESGProgram(status="completed", budget=50_000, spent=50_000),
            ESGProgram(status="draft", budget=None, spent=None),
        ]
        perf = compute_program_performance(programs)
        assert perf.total == 3
        assert perf.active == 1
        assert perf.completed == 1
        assert perf.total_budget == 150_000
        assert perf.total_spent == 90_000
        assert perf.budget_utilization == pytest.approx(60.0)

    def test_no_budget_gives_zero_utilization(self):
        perf = compute_program_performance([ESGProgram(status="active")])
        assert perf.budget_utilization == 0

    def test_report_summary(self, snapshot):
        goals = [
            Goal(status="achieved"),
            Goal(status="active"),
        ]
        programs = [ESGProgram(status="active"), ESGProgram(status="completed")]
        analytics = compute_esg_analytics(snapshot, goals, programs)
        summary = build_report_summary(analytics)
        assert summary.startswith("ESG Performance Summary: Overall ESG score of ")
        assert f"{analytics.overall_score:.1f}%" in summary
        assert "50.0% goal completion rate" in summary
        assert summary.endswith("and 1 active programs.")
