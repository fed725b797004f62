"""Health and metrics endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from starlette.responses import Response

from app.telemetry.metrics import get_metrics

router = APIRouter()

_start_time = datetime.now(timezone.utc)


@router.get("/health")
async def health(request: Request):
    state = request.app.state
    uptime = (datetime.now(timezone.utc) - _start_time).total_seconds()
    return {
        "status": "healthy",
        "pipeline": state.engine.pipeline,
        "credential_configured": state.credential_configured,
        "history_size": len(state.history),
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/metrics", include_in_schema=False)
async def metrics():
    body, content_type = get_metrics()
    return Response(content=body, media_type=content_type)
