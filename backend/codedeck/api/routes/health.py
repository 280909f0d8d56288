"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable or the git
      working tree is unconfigured/invalid (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Readiness never raises ConfigurationError: it reports, the recorder enforces
"""

import asyncio
import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from codedeck.api.dependencies import get_attempt_recorder
from codedeck.infrastructure import database
from codedeck.services.attempt_recorder import AttemptRecorder

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "codedeck-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """Readiness probe — database connectivity plus git working tree."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    repo_ok = await asyncio.to_thread(recorder.repository_ready)
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "git_repository": "healthy" if repo_ok else "unavailable",
    }
    if not (db_ok and repo_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
