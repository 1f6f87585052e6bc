"""Aggregation functions that fold record collections into dashboard rollups.

Callers pass already-fetched records; nothing here performs I/O or mutates
its inputs. Time-dependent rollups take an explicit ``now`` (UTC).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, Union

from grc_backend.engine.normalize import (
    coerce_number,
    round_half_up,
    safe_mean,
    to_utc,
    utc_now,
)
from grc_backend.engine.result import (
    CarbonSummary,
    CrisisMetrics,
    IncidentMetrics,
    ProgramMetrics,
)
from grc_backend.models.enums import (
    MATURITY_ORDINAL,
    MATURITY_SCORE,
    PROGRAM_STATUS_ORDINAL,
    CarbonScope,
    CrisisStatus,
    IncidentStatus,
    MaturityLevel,
    ProgramStatus,
    Severity,
    SortDirection,
    SortField,
    parse_enum,
)
from grc_backend.models.records import (
    CarbonRecord,
    Crisis,
    Incident,
    ResilienceProgram,
)

logger = logging.getLogger(__name__)

DEFAULT_REVIEW_WINDOW_DAYS = 30
_SECONDS_PER_HOUR = 3600.0
_NO_FILTER = "all"


def compute_program_metrics(
    programs: Sequence[ResilienceProgram],
    now: Optional[datetime] = None,
    review_window_days: int = DEFAULT_REVIEW_WINDOW_DAYS,
) -> ProgramMetrics:
    """Counts by status, average maturity score and review-date windows."""
    now = to_utc(now) if now is not None else utc_now()
    window_end = now + timedelta(days=review_window_days)

    maturity_scores = [MATURITY_SCORE[p.maturity_level] for p in programs]

    needing_review = 0
    upcoming = 0
    for program in programs:
        review = program.next_review_date
        if review is None:
            continue
        if review <= now:
            needing_review += 1
        elif review <= window_end:
            upcoming += 1

    return ProgramMetrics(
        total_programs=len(programs),
        active_programs=_count_status(programs, ProgramStatus.ACTIVE),
        draft_programs=_count_status(programs, ProgramStatus.DRAFT),
        inactive_programs=_count_status(programs, ProgramStatus.INACTIVE),
        avg_maturity_score=round_half_up(safe_mean(maturity_scores)),
        programs_needing_review=needing_review,
        upcoming_reviews=upcoming,
    )


def compute_incident_metrics(incidents: Sequence[Incident]) -> IncidentMetrics:
    """Counts by status, severity and priority plus mean resolution time."""
    durations = [
        _hours_between(i.created_at, i.resolved_at)
        for i in incidents
        if i.resolved_at is not None
    ]
    return IncidentMetrics(
        total_incidents=len(incidents),
        open_incidents=_count_status(incidents, IncidentStatus.OPEN),
        investigating_incidents=_count_status(incidents, IncidentStatus.INVESTIGATING),
        resolved_incidents=_count_status(incidents, IncidentStatus.RESOLVED),
        critical_incidents=sum(1 for i in incidents if i.severity == Severity.CRITICAL),
        high_priority_incidents=sum(
            1 for i in incidents if i.priority in (Severity.CRITICAL, Severity.HIGH)
        ),
        avg_resolution_time_hours=safe_mean(durations),
    )


def compute_crisis_metrics(crises: Sequence[Crisis]) -> CrisisMetrics:
    """Same shape as incident metrics, measured from ``declared_at``."""
    durations = [
        _hours_between(c.declared_at, c.resolved_at)
        for c in crises
        if c.resolved_at is not None
    ]
    return CrisisMetrics(
        total_crises=len(crises),
        active_crises=_count_status(crises, CrisisStatus.ACTIVE),
        resolved_crises=_count_status(crises, CrisisStatus.RESOLVED),
        critical_crises=sum(1 for c in crises if c.severity == Severity.CRITICAL),
        avg_resolution_time_hours=safe_mean(durations),
    )


def compute_carbon_summary(records: Iterable[CarbonRecord]) -> CarbonSummary:
    """Sum co2_equivalent per scope; a null value contributes 0."""
    totals = {scope: 0.0 for scope in CarbonScope}
    for record in records:
        totals[record.scope] += coerce_number(record.co2_equivalent)

    return CarbonSummary(
        scope1_total=totals[CarbonScope.SCOPE1],
        scope2_total=totals[CarbonScope.SCOPE2],
        scope3_total=totals[CarbonScope.SCOPE3],
        total_emissions=sum(totals.values()),
    )


def filter_and_sort_programs(
    programs: Sequence[ResilienceProgram],
    query: Optional[str] = None,
    status: Union[ProgramStatus, str, None] = None,
    maturity_level: Union[MaturityLevel, str, None] = None,
    owner: Optional[str] = None,
    sort_by: Union[SortField, str, None] = SortField.UPDATED,
    sort_dir: Union[SortDirection, str, None] = SortDirection.DESC,
) -> list[ResilienceProgram]:
    """Filter programs conjunctively, then stable-sort them.

    ``status`` / ``maturity_level`` of ``"all"`` or None disable that filter.
    Returns a new list; the input sequence is left untouched.
    """
    status_filter = _optional_filter(ProgramStatus, status, "status")
    maturity_filter = _optional_filter(MaturityLevel, maturity_level, "maturity_level")
    sort_field = parse_enum(SortField, sort_by or SortField.UPDATED, "sort_by")
    direction = parse_enum(SortDirection, sort_dir or SortDirection.DESC, "sort_dir")

    filtered = list(programs)

    if query:
        needle = query.lower()
        filtered = [
            p for p in filtered
            if needle in p.name.lower()
            or needle in (p.description or "").lower()
            or needle in (p.owner or "").lower()
        ]

    if status_filter is not None:
        filtered = [p for p in filtered if p.status == status_filter]

    if maturity_filter is not None:
        filtered = [p for p in filtered if p.maturity_level == maturity_filter]

    if owner:
        owner_needle = owner.lower()
        filtered = [p for p in filtered if owner_needle in (p.owner or "").lower()]

    # list.sort is stable, and stays stable with reverse=True
    filtered.sort(
        key=_SORT_KEYS[sort_field],
        reverse=direction == SortDirection.DESC,
    )
    return filtered


_SORT_KEYS = {
    SortField.NAME: lambda p: p.name.lower(),
    SortField.MATURITY: lambda p: MATURITY_ORDINAL[p.maturity_level],
    SortField.STATUS: lambda p: PROGRAM_STATUS_ORDINAL[p.status],
    SortField.UPDATED: lambda p: p.updated_at,
}


def _optional_filter(enum_cls, value, field: str):
    if value is None or value == "" or value == _NO_FILTER:
        return None
    return parse_enum(enum_cls, value, field)


def _count_status(records: Iterable, status) -> int:
    return sum(1 for r in records if r.status == status)


def _hours_between(start: datetime, end: datetime) -> float:
    hours = (end - start).total_seconds() / _SECONDS_PER_HOUR
    if hours < 0:
        logger.warning(f"Resolution recorded before start ({start} > {end})")
    return hours
