import time

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from feedback_hub.domains.base import utcnow

router = APIRouter()


@router.get("/")
async def root():
    return {"message": "Feedback Hub API", "status": "running"}


@router.get("/health", response_class=PlainTextResponse)
async def health():
    return "healthy"


@router.get("/api/health")
async def api_health(request: Request):
    return {
        "status": "OK",
        "timestamp": utcnow().isoformat(),
        "uptime": time.monotonic() - request.app.state.started_at,
    }
