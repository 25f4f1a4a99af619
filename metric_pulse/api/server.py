"""FastAPI server exposing period reports and growth simulations as JSON endpoints."""
import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from metric_pulse.config import load_scoring_config
from metric_pulse.errors import MetricPulseError
from metric_pulse.models import (
    Category,
    GrowthSimulationResult,
    MetricRecord,
    PeriodKind,
    PeriodReport,
    SimulationInput,
)
from metric_pulse.report import compute_period_report, simulate_growth
from metric_pulse.store import JsonRecordStore

_log = logging.getLogger(__name__)

app = FastAPI(title="metric-pulse API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Optional JSON record store used when a request names an owner instead of
# sending its records inline.
RECORDS_PATH = os.getenv("METRIC_PULSE_RECORDS_PATH")


class ReportRequest(BaseModel):
    period: PeriodKind = "monthly"
    anchor: Optional[str] = None
    category: Optional[Category] = None
    owner_id: Optional[str] = None
    records: Optional[list[MetricRecord]] = None
    post_types: dict[str, Category] = {}
    reference_time: Optional[datetime] = None


class SimulationRequest(SimulationInput):
    reference_date: Optional[date] = None


@app.exception_handler(MetricPulseError)
async def metric_pulse_error_handler(request: Request, exc: MetricPulseError):
    _log.warning("%s rejected: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "code": exc.code})


def _load_records(req: ReportRequest) -> list[MetricRecord]:
    if req.records is not None:
        return req.records
    if not RECORDS_PATH:
        raise HTTPException(status_code=400, detail="Send records inline or set METRIC_PULSE_RECORDS_PATH")
    return JsonRecordStore(Path(RECORDS_PATH)).list_records(owner_id=req.owner_id)


@app.get("/api/health")
def health():
    return {"status": "ok", "record_store": "json" if RECORDS_PATH else "inline"}


@app.post("/api/reports", response_model=PeriodReport)
def create_report(req: ReportRequest):
    """Current-vs-previous period report for the supplied or stored records."""
    records = _load_records(req)
    report = compute_period_report(
        records,
        req.period,
        req.anchor,
        req.category,
        reference_time=req.reference_time or datetime.now(),
        post_types=req.post_types,
        config=load_scoring_config(),
    )
    _log.info("report %s %s: %d posts", report.kind, report.anchor, report.aggregate.total_posts)
    return report


@app.post("/api/simulations", response_model=GrowthSimulationResult)
def create_simulation(req: SimulationRequest):
    """Realistic-vs-target follower projection."""
    params = SimulationInput(**req.model_dump(exclude={"reference_date"}))
    return simulate_growth(params, req.reference_date or date.today())
