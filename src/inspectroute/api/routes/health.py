"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request):
    cache = getattr(request.app.state, "cache", None)
    cache_ok = cache is None or cache.ping()
    body = {"status": "ready" if cache_ok else "degraded", "cache": "ok" if cache_ok else "unreachable"}
    return JSONResponse(body, status_code=200 if cache_ok else 503)
