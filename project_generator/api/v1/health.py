"""
Health check endpoints.
"""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Response

from project_generator.api.deps import container
from project_generator.core.config import settings
from project_generator.core.constants import SERVICE_NAME
from project_generator.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

_STARTED_AT = time.monotonic()

NO_CACHE = "no-cache, no-store, must-revalidate"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check(response: Response) -> dict[str, Any]:
    """
    Basic health check endpoint.
    Returns application status.
    """
    response.headers["Cache-Control"] = NO_CACHE
    return {
        "status": "ok",
        "timestamp": _now(),
        "version": settings.version,
        "environment": settings.app_env,
        "service": SERVICE_NAME,
        "uptime": int(time.monotonic() - _STARTED_AT),
        "checks": {
            "api": "operational",
            "auth": "operational",
            "mcp": "ready",
        },
    }


@router.head("/health")
async def health_head() -> Response:
    """Lightweight health check (headers only)."""
    return Response(status_code=200, headers={"Cache-Control": NO_CACHE})


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check endpoint.
    AI availability is reported but does not affect readiness.
    """
    checks = {
        "app": True,
        "ai": container.claude_client.is_available,
    }

    return {
        "status": "ready" if checks["app"] else "not_ready",
        "checks": checks,
        "timestamp": _now(),
    }


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """
    Liveness check endpoint.
    Simple check that the application is running.
    """
    return {"status": "alive"}
