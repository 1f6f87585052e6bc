"""FastAPI application for the GRC dashboards -- scoring endpoints and rollups."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from grc_backend.config.settings import Settings
from grc_backend.engine.aggregation import filter_and_sort_programs
from grc_backend.engine.esg_analytics import build_report_summary, compute_esg_analytics
from grc_backend.engine.scoring import (
    classify_materiality,
    compute_goal_progress,
    compute_scenario_risk_score,
)
from grc_backend.errors import (
    InvalidEnumValue,
    RecordSourceError,
    UnknownDomainError,
    UnknownRollupError,
)
from grc_backend.metric_library.registry import get_all_rollups
from grc_backend.models.records import (
    ESGMetricsSnapshot,
    ESGProgram,
    Goal,
    ResilienceProgram,
)
from grc_backend.services.dashboard import DashboardService
from grc_backend.sources.supabase_rest import SupabaseRestSource

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Close the Supabase client only if a request ever created the service
    if get_dashboard_service.cache_info().currsize:
        await get_dashboard_service().aclose()
        get_dashboard_service.cache_clear()


app = FastAPI(title="GRC Metrics API", version="0.1.0", lifespan=lifespan)

# CORS -- allow the dashboard dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_dashboard_service() -> DashboardService:
    """Singleton service wired to Supabase; overridden in tests."""
    settings = get_settings()
    return DashboardService(SupabaseRestSource(settings), settings)


class MaterialityRequest(BaseModel):
    impact_score: Optional[float] = None
    financial_score: Optional[float] = None


class GoalProgressRequest(BaseModel):
    baseline_value: Optional[float] = None
    target_value: Optional[float] = None
    current_value: Optional[float] = None


class ScenarioRiskRequest(BaseModel):
    severity: str
    probability: str


class ProgramSearchRequest(BaseModel):
    programs: list[dict[str, Any]]
    query: Optional[str] = None
    status: Optional[str] = None
    maturity_level: Optional[str] = None
    owner: Optional[str] = None
    sort_by: str = "updated"
    sort_dir: str = "desc"


class SnapshotBody(BaseModel):
    """Mirrors ESGMetricsSnapshot; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    carbon_footprint: float = 0.0
    energy_consumption: float = 0.0
    water_usage: float = 0.0
    waste_generated: float = 0.0
    renewable_energy_percentage: float = 0.0
    recycling_rate: float = 0.0

    employee_satisfaction: float = 0.0
    diversity_percentage: float = 0.0
    training_hours: float = 0.0
    community_investment: float = 0.0
    health_safety_incidents: float = 0.0
    supplier_diversity: float = 0.0

    board_diversity: float = 0.0
    executive_compensation_ratio: float = 0.0
    ethics_compliance_score: float = 0.0
    transparency_score: float = 0.0
    stakeholder_engagement: float = 0.0
    risk_management_score: float = 0.0


class ESGAnalyticsRequest(BaseModel):
    snapshot: SnapshotBody = SnapshotBody()
    goals: list[dict[str, Any]] = []
    programs: list[dict[str, Any]] = []


@app.exception_handler(InvalidEnumValue)
async def invalid_enum_handler(request: Request, exc: InvalidEnumValue):
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"error": str(exc), "field": exc.field, "value": str(exc.value)},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"error": str(exc)})


@app.exception_handler(UnknownRollupError)
async def unknown_rollup_handler(request: Request, exc: UnknownRollupError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(UnknownDomainError)
async def unknown_domain_handler(request: Request, exc: UnknownDomainError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(RecordSourceError)
async def record_source_handler(request: Request, exc: RecordSourceError):
    logger.error(f"Record source failure: {exc}")
    return JSONResponse(status_code=502, content={"error": str(exc), "table": exc.table})


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/rollups")
async def list_rollups():
    """Registered dashboard rollups."""
    return [
        {"id": d.id, "label": d.label, "domain": d.domain, "table": d.table}
        for d in get_all_rollups().values()
    ]


@app.get("/api/rollups/{rollup_id}")
async def get_rollup_result(
    rollup_id: str, service: DashboardService = Depends(get_dashboard_service)
):
    return {"rollup_id": rollup_id, "result": await service.compute(rollup_id)}


@app.get("/api/dashboards/{domain}")
async def get_dashboard(
    domain: str, service: DashboardService = Depends(get_dashboard_service)
):
    """Every rollup for one domain ("esg" or "resilience")."""
    return await service.compute_domain(domain)


@app.post("/api/score/materiality")
async def score_materiality(body: MaterialityRequest):
    return classify_materiality(body.impact_score, body.financial_score)


@app.post("/api/score/goal-progress")
async def score_goal_progress(body: GoalProgressRequest):
    progress = compute_goal_progress(
        body.baseline_value, body.target_value, body.current_value
    )
    return {"progress_percentage": progress}


@app.post("/api/score/scenario-risk")
async def score_scenario_risk(body: ScenarioRiskRequest):
    return {"risk_score": compute_scenario_risk_score(body.severity, body.probability)}


@app.post("/api/programs/search")
async def search_programs(body: ProgramSearchRequest):
    """Filter and sort posted program rows; rows come back in display order."""
    programs = [ResilienceProgram.from_row(row) for row in body.programs]
    ordered = filter_and_sort_programs(
        programs,
        query=body.query,
        status=body.status,
        maturity_level=body.maturity_level,
        owner=body.owner,
        sort_by=body.sort_by,
        sort_dir=body.sort_dir,
    )
    return {"programs": ordered, "count": len(ordered)}


@app.post("/api/esg/analytics")
async def esg_analytics(body: ESGAnalyticsRequest):
    """Pillar scores, goal and program rollups, plus the report summary line."""
    analytics = compute_esg_analytics(
        ESGMetricsSnapshot(**body.snapshot.model_dump()),
        [Goal.from_row(row) for row in body.goals],
        [ESGProgram.from_row(row) for row in body.programs],
    )
    return {"analytics": analytics, "summary": build_report_summary(analytics)}
