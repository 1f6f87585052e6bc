"""Tests for the rollup registry."""

import grc_backend.metric_library.rollups  # noqa: F401
from grc_backend.metric_library.registry import (
    get_all_rollups,
    get_domain_rollups,
    get_rollup,
)
from grc_backend.models.records import (
    CarbonRecord,
    MaterialityAssessment,
    ResilienceProgram,
)


RESILIENCE_ROLLUPS = {"program_metrics", "incident_metrics", "crisis_metrics", "scenario_summary"}
ESG_ROLLUPS = {
    "carbon_summary",
    "goal_stats",
    "materiality_matrix",
    "portfolio_stats",
    "engagement_stats",
}


class TestRegistry:
    def test_all_rollups_registered(self):
        assert set(get_all_rollups()) == RESILIENCE_ROLLUPS | ESG_ROLLUPS

    def test_domains(self):
        assert {d.id for d in get_domain_rollups("resilience")} == RESILIENCE_ROLLUPS
        assert {d.id for d in get_domain_rollups("esg")} == ESG_ROLLUPS
        assert get_domain_rollups("finance") == []

    def test_definition_fields(self):
        programs = get_rollup("program_metrics")
        assert programs.table == "resilience_programs"
        assert programs.record_type is ResilienceProgram
        assert programs.label

        assert get_rollup("carbon_summary").record_type is CarbonRecord
        assert get_rollup("materiality_matrix").record_type is MaterialityAssessment

    def test_unknown_rollup_is_none(self):
        assert get_rollup("nonexistent") is None

    def test_get_all_returns_copy(self):
        rollups = get_all_rollups()
        rollups.pop("goal_stats")
        assert get_rollup("goal_stats") is not None

    def test_every_table_is_distinct(self):
        tables = [d.table for d in get_all_rollups().values()]
        assert len(tables) == len(set(tables))
