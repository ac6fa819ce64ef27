"""Liveness, readiness and metrics endpoints (open, plain text)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from musicbox.api.deps import get_counters
from musicbox.core.database import check_db_connected, get_db
from musicbox.services.counters import EventCounters

router = APIRouter()

PROMETHEUS_CONTENT_TYPE = "text/plain; version=0.0.4"


@router.get("/healthz", response_class=PlainTextResponse)
def healthz() -> str:
    return "ok"


@router.get("/readyz", response_class=PlainTextResponse)
def readyz(db: Annotated[Session, Depends(get_db)]) -> PlainTextResponse:
    """Ready once the database answers; 503 otherwise. Used by load balancers."""
    if not check_db_connected(db):
        return PlainTextResponse("not ready", status_code=503)
    return PlainTextResponse("ready")


@router.get("/metrics", response_class=PlainTextResponse)
def metrics(
    counters: Annotated[EventCounters, Depends(get_counters)],
) -> PlainTextResponse:
    """Process-local counters in Prometheus text format. Reset on restart."""
    return PlainTextResponse(
        counters.render_prometheus(),
        media_type=PROMETHEUS_CONTENT_TYPE,
    )
