"""Attempts — record a solution (file + git commit) and view code at its commit.

Invariants:
    - POST writes the file and commits BEFORE inserting the row: a row always
      points at an existing commit
    - Push failures do not fail the request; the outcome is returned in "push"
    - Code is always read at the attempt's own commit, never from the live file
      (falls back to the live file only for rows without a hash)

Design Decisions:
    - Recorder calls run via asyncio.to_thread: git is blocking subprocess work
      and must not stall the event loop
    - Recorder errors propagate to the global CodeDeckError handler
      (400 input/config, 404 not-found-at-commit, 500 repository/IO/commit)
"""

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from codedeck.api.dependencies import get_attempt_recorder
from codedeck.api.routes.problems import get_problem_or_404
from codedeck.core.errors import ResourceNotFoundError
from codedeck.infrastructure.database import get_db
from codedeck.models.attempt import Attempt
from codedeck.schemas.attempt import (
    AttemptCodeResponse,
    AttemptCreate,
    AttemptCreatedResponse,
    AttemptResponse,
    PushResponse,
)
from codedeck.services.attempt_recorder import AttemptRecorder

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["attempts"])


@router.get(
    "/problems/{problem_id}/attempts", response_model=list[AttemptResponse],
)
async def list_attempts(
    problem_id: int = Path(gt=0), db: AsyncSession = Depends(get_db),
):
    """List attempts for a problem, newest first."""
    await get_problem_or_404(problem_id, db)
    result = await db.execute(
        select(Attempt)
        .where(Attempt.problem_id == problem_id)
        .order_by(Attempt.timestamp.desc(), Attempt.id.desc()),
    )
    return result.scalars().all()


@router.post(
    "/problems/{problem_id}/attempts",
    response_model=AttemptCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_attempt(
    body: AttemptCreate,
    problem_id: int = Path(gt=0),
    db: AsyncSession = Depends(get_db),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """Write the code, commit (and push) it, then store the attempt row."""
    problem = await get_problem_or_404(problem_id, db)
    recorded = await asyncio.to_thread(
        recorder.record_attempt, problem.id, problem.name, body.code, body.note,
    )

    attempt = Attempt(
        problem_id=problem.id,
        commit_hash=recorded.commit_hash,
        note=body.note,
        file_path=recorded.file_path,
    )
    db.add(attempt)
    problem.updated_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(attempt)
    logger.info(
        f"Created attempt {attempt.id} for problem {problem.id}",
        extra={"attempt_id": attempt.id, "problem_id": problem.id},
    )
    return AttemptCreatedResponse(
        attempt=AttemptResponse.model_validate(attempt),
        commit_hash=recorded.commit_hash,
        push=PushResponse(
            status=recorded.push.status, detail=recorded.push.detail,
        ),
    )


@router.get("/attempts/{attempt_id}/code", response_model=AttemptCodeResponse)
async def get_attempt_code(
    attempt_id: int = Path(gt=0),
    db: AsyncSession = Depends(get_db),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """Code exactly as submitted for this attempt."""
    result = await db.execute(select(Attempt).where(Attempt.id == attempt_id))
    attempt = result.scalar_one_or_none()
    if not attempt:
        raise ResourceNotFoundError("Attempt", str(attempt_id))
    if not attempt.file_path:
        raise ResourceNotFoundError("Code file for attempt", str(attempt_id))

    problem = await get_problem_or_404(attempt.problem_id, db)
    code = await asyncio.to_thread(
        recorder.read_code, attempt.file_path, attempt.commit_hash or None,
    )
    return AttemptCodeResponse(
        code=code,
        file_path=attempt.file_path,
        attempt=AttemptResponse.model_validate(attempt),
        problem={"id": problem.id, "name": problem.name},
    )
