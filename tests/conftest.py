"""Shared test fixtures for the GRC metrics test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from grc_backend.models.records import Incident, ResilienceProgram

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_program(name, status="active", maturity="basic", updated_days_ago=0, **kwargs):
    """Helper to create a ResilienceProgram with minimal boilerplate."""
    return ResilienceProgram(
        name=name,
        status=status,
        maturity_level=maturity,
        updated_at=NOW - timedelta(days=updated_days_ago),
        **kwargs,
    )


def make_incident(status="open", severity="low", priority="low", resolved_after_hours=None):
    created = NOW - timedelta(days=10)
    resolved = None
    if resolved_after_hours is not None:
        resolved = created + timedelta(hours=resolved_after_hours)
    return Incident(
        status=status,
        severity=severity,
        priority=priority,
        created_at=created,
        resolved_at=resolved,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def program_portfolio() -> list[ResilienceProgram]:
    """Five programs covering every status and maturity level."""
    return [
        make_program(
            "Cyber Recovery", "active", "advanced", updated_days_ago=3,
            owner="Dana Reyes", description="Ransomware recovery runbooks",
            next_review_date=NOW - timedelta(days=2),
        ),
        make_program(
            "Supply Chain Continuity", "draft", "basic", updated_days_ago=1,
            owner="Sam Okafor", description="Tier 1 supplier alternates",
            next_review_date=NOW + timedelta(days=10),
        ),
        make_program(
            "pandemic response", "inactive", "intermediate", updated_days_ago=30,
            owner="Dana Reyes", description="Remote work playbook",
            next_review_date=NOW + timedelta(days=45),
        ),
        make_program(
            "Data Centre Failover", "under_review", "world_class", updated_days_ago=7,
            owner="Priya Nair", description="Active-active replication",
        ),
        make_program(
            "Crisis Communications", "active", "advanced", updated_days_ago=14,
            owner="Lee Park", description="Press and staff notification tree",
            next_review_date=NOW + timedelta(days=30),
        ),
    ]
