from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from grc_backend.errors import InvalidEnumValue

E = TypeVar("E", bound=Enum)


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Probability(str, Enum):
    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class MaterialityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ProgramStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"
    UNDER_REVIEW = "under_review"


class MaturityLevel(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    WORLD_CLASS = "world_class"


class IncidentStatus(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    CONTAINED = "contained"
    RESOLVED = "resolved"
    CLOSED = "closed"


class CrisisStatus(str, Enum):
    DECLARED = "declared"
    ACTIVE = "active"
    CONTAINED = "contained"
    RECOVERING = "recovering"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ScenarioStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class CarbonScope(str, Enum):
    SCOPE1 = "scope1"
    SCOPE2 = "scope2"
    SCOPE3 = "scope3"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    ACHIEVED = "achieved"
    BEHIND_SCHEDULE = "behind_schedule"
    AT_RISK = "at_risk"
    CANCELLED = "cancelled"


class ESGProgramStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"
    COMPLETED = "completed"


class EngagementStatus(str, Enum):
    PLANNED = "planned"
    COMPLETED = "completed"
    ONGOING = "ongoing"
    CANCELLED = "cancelled"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SortField(str, Enum):
    UPDATED = "updated"
    NAME = "name"
    MATURITY = "maturity"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Ordinal ranks -- the only place these orderings are defined.
SEVERITY_ORDINAL: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}

PROBABILITY_ORDINAL: dict[Probability, int] = {
    Probability.VERY_LOW: 1,
    Probability.LOW: 2,
    Probability.MEDIUM: 3,
    Probability.HIGH: 4,
    Probability.VERY_HIGH: 5,
}

MATURITY_ORDINAL: dict[MaturityLevel, int] = {
    MaturityLevel.BASIC: 1,
    MaturityLevel.INTERMEDIATE: 2,
    MaturityLevel.ADVANCED: 3,
    MaturityLevel.WORLD_CLASS: 4,
}

MATURITY_SCORE: dict[MaturityLevel, int] = {
    MaturityLevel.BASIC: 25,
    MaturityLevel.INTERMEDIATE: 50,
    MaturityLevel.ADVANCED: 75,
    MaturityLevel.WORLD_CLASS: 100,
}

PROGRAM_STATUS_ORDINAL: dict[ProgramStatus, int] = {
    ProgramStatus.DRAFT: 1,
    ProgramStatus.ACTIVE: 2,
    ProgramStatus.INACTIVE: 3,
    ProgramStatus.UNDER_REVIEW: 4,
}


def parse_enum(enum_cls: type[E], value: Any, field: str) -> E:
    """Coerce a raw value into ``enum_cls`` or raise InvalidEnumValue.

    Accepts an existing member or its string value. Anything else, including
    ``None``, is rejected rather than defaulted to some rank.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidEnumValue(field, value) from None


def parse_optional_enum(enum_cls: type[E], value: Any, field: str) -> E | None:
    if value is None:
        return None
    return parse_enum(enum_cls, value, field)
