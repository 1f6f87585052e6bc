"""Closed record types for the rows the dashboards compute on.

Records are built from raw database rows with ``from_row`` or constructed
directly. Either way, enum fields are validated and timestamps normalized to
UTC in ``__post_init__``, so the engine never sees an unrecognized status or a
naive datetime.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from grc_backend.engine.normalize import optional_number, to_utc
from grc_backend.models.enums import (
    CarbonScope,
    CrisisStatus,
    EngagementStatus,
    ESGProgramStatus,
    GoalStatus,
    IncidentStatus,
    MaturityLevel,
    Probability,
    ProgramStatus,
    RiskLevel,
    ScenarioStatus,
    Severity,
    parse_enum,
    parse_optional_enum,
)


def _set_enum(record: Any, name: str, enum_cls: type, optional: bool = False) -> None:
    raw = getattr(record, name)
    if optional:
        value = parse_optional_enum(enum_cls, raw, name)
    else:
        value = parse_enum(enum_cls, raw, name)
    object.__setattr__(record, name, value)


def _set_timestamp(record: Any, name: str, optional: bool = False) -> None:
    value = to_utc(getattr(record, name))
    if value is None and not optional:
        raise ValueError(f"'{name}' is required")
    object.__setattr__(record, name, value)


@dataclass(frozen=True)
class MaterialityAssessment:
    """One topic in a double materiality assessment (scores 1-5)."""

    impact_score: Optional[float] = None
    financial_score: Optional[float] = None
    topic_name: str = ""
    category: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> MaterialityAssessment:
        return cls(
            impact_score=optional_number(row.get("impact_score")),
            financial_score=optional_number(row.get("financial_score")),
            topic_name=row.get("topic_name") or "",
            category=row.get("category") or row.get("topic_category"),
        )


@dataclass(frozen=True)
class Goal:
    baseline_value: Optional[float] = None
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    status: Optional[GoalStatus] = None
    goal_name: str = ""

    def __post_init__(self) -> None:
        _set_enum(self, "status", GoalStatus, optional=True)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Goal:
        return cls(
            baseline_value=optional_number(row.get("baseline_value")),
            target_value=optional_number(row.get("target_value")),
            current_value=optional_number(row.get("current_value")),
            status=row.get("status"),
            goal_name=row.get("goal_name") or "",
        )


@dataclass(frozen=True)
class ScenarioAnalysis:
    """Severity/probability pair of an operational scenario analysis."""

    severity: Severity
    probability: Probability
    status: Optional[ScenarioStatus] = None
    name: str = ""

    def __post_init__(self) -> None:
        _set_enum(self, "severity", Severity)
        _set_enum(self, "probability", Probability)
        _set_enum(self, "status", ScenarioStatus, optional=True)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ScenarioAnalysis:
        return cls(
            severity=row.get("severity"),
            probability=row.get("probability"),
            status=row.get("status"),
            name=row.get("name") or "",
        )


@dataclass(frozen=True)
class CarbonRecord:
    scope: CarbonScope
    co2_equivalent: Optional[float] = None

    def __post_init__(self) -> None:
        _set_enum(self, "scope", CarbonScope)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> CarbonRecord:
        return cls(
            scope=row.get("scope"),
            co2_equivalent=optional_number(row.get("co2_equivalent")),
        )


@dataclass(frozen=True)
class ResilienceProgram:
    name: str
    status: ProgramStatus
    maturity_level: MaturityLevel
    updated_at: datetime
    description: Optional[str] = None
    owner: Optional[str] = None
    next_review_date: Optional[datetime] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        _set_enum(self, "status", ProgramStatus)
        _set_enum(self, "maturity_level", MaturityLevel)
        _set_timestamp(self, "updated_at")
        _set_timestamp(self, "next_review_date", optional=True)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ResilienceProgram:
        return cls(
            name=row.get("name") or "",
            status=row.get("status"),
            maturity_level=row.get("maturity_level"),
            updated_at=row.get("updated_at"),
            description=row.get("description"),
            owner=row.get("owner"),
            next_review_date=row.get("next_review_date"),
            id=row.get("id"),
        )


@dataclass(frozen=True)
class Incident:
    status: IncidentStatus
    severity: Severity
    priority: Severity
    created_at: datetime
    resolved_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _set_enum(self, "status", IncidentStatus)
        _set_enum(self, "severity", Severity)
        _set_enum(self, "priority", Severity)
        _set_timestamp(self, "created_at")
        _set_timestamp(self, "resolved_at", optional=True)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Incident:
        return cls(
            status=row.get("status"),
            severity=row.get("severity"),
            priority=row.get("priority"),
            created_at=row.get("created_at"),
            resolved_at=row.get("resolved_at"),
        )


@dataclass(frozen=True)
class Crisis:
    status: CrisisStatus
    severity: Severity
    declared_at: datetime
    resolved_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _set_enum(self, "status", CrisisStatus)
        _set_enum(self, "severity", Severity)
        _set_timestamp(self, "declared_at")
        _set_timestamp(self, "resolved_at", optional=True)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Crisis:
        return cls(
            status=row.get("status"),
            severity=row.get("severity"),
            declared_at=row.get("declared_at"),
            resolved_at=row.get("resolved_at"),
        )


@dataclass(frozen=True)
class ESGProgram:
    status: ESGProgramStatus
    name: str = ""
    budget: Optional[float] = None
    spent: Optional[float] = None

    def __post_init__(self) -> None:
        _set_enum(self, "status", ESGProgramStatus)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ESGProgram:
        return cls(
            status=row.get("status"),
            name=row.get("name") or "",
            budget=optional_number(row.get("budget")),
            spent=optional_number(row.get("spent")),
        )


@dataclass(frozen=True)
class PortfolioAssessment:
    risk_level: RiskLevel
    portfolio_name: str = ""
    total_value: Optional[float] = None
    esg_score: Optional[float] = None

    def __post_init__(self) -> None:
        _set_enum(self, "risk_level", RiskLevel)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> PortfolioAssessment:
        return cls(
            risk_level=row.get("risk_level"),
            portfolio_name=row.get("portfolio_name") or "",
            total_value=optional_number(row.get("total_value")),
            esg_score=optional_number(row.get("esg_score")),
        )


@dataclass(frozen=True)
class StakeholderEngagement:
    status: EngagementStatus
    stakeholder_name: str = ""
    next_engagement_date: Optional[datetime] = None

    def __post_init__(self) -> None:
        _set_enum(self, "status", EngagementStatus)
        _set_timestamp(self, "next_engagement_date", optional=True)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> StakeholderEngagement:
        return cls(
            status=row.get("status"),
            stakeholder_name=row.get("stakeholder_name") or "",
            next_engagement_date=row.get("next_engagement_date"),
        )


@dataclass(frozen=True)
class ESGMetricsSnapshot:
    """Point-in-time environmental, social and governance indicators."""

    # Environmental
    carbon_footprint: float = 0.0
    energy_consumption: float = 0.0
    water_usage: float = 0.0
    waste_generated: float = 0.0
    renewable_energy_percentage: float = 0.0
    recycling_rate: float = 0.0

    # Social
    employee_satisfaction: float = 0.0
    diversity_percentage: float = 0.0
    training_hours: float = 0.0
    community_investment: float = 0.0
    health_safety_incidents: float = 0.0
    supplier_diversity: float = 0.0

    # Governance
    board_diversity: float = 0.0
    executive_compensation_ratio: float = 0.0
    ethics_compliance_score: float = 0.0
    transparency_score: float = 0.0
    stakeholder_engagement: float = 0.0
    risk_management_score: float = 0.0
