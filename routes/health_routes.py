"""
Health check endpoint.

GET /health — checks that the link store answers.
Rules:
- store failure → "unhealthy" (503); the registry cannot function without it.
- otherwise → "healthy" (200).
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(request: Request) -> JSONResponse:
    checks: dict[str, str] = {}
    overall = "healthy"

    try:
        ok = request.app.state.registry.store.ping()
    except Exception:
        ok = False
    checks["storage"] = "ok" if ok else "error"
    if not ok:
        overall = "unhealthy"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content={"status": overall, "checks": checks},
    )
