"""Problems — CRUD for coding-practice problems (the flashcards).

Invariants:
    - List order: unsolved first, then least recently updated (next card to review on top)
    - Every response embeds attempts newest first
    - Deleting a problem deletes its attempt rows; git history is left untouched
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from codedeck.core.errors import ResourceNotFoundError
from codedeck.infrastructure.database import get_db
from codedeck.models.problem import Problem
from codedeck.schemas.problem import ProblemCreate, ProblemResponse, ProblemUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/problems", tags=["problems"])


async def get_problem_or_404(problem_id: int, db: AsyncSession) -> Problem:
    """Load problem (attempts included, fresh from the DB) or raise 404. Shared with attempts routes."""
    result = await db.execute(
        select(Problem)
        .where(Problem.id == problem_id)
        .execution_options(populate_existing=True),
    )
    problem = result.scalar_one_or_none()
    if not problem:
        raise ResourceNotFoundError("Problem", str(problem_id))
    return problem


@router.get("", response_model=list[ProblemResponse])
async def list_problems(db: AsyncSession = Depends(get_db)):
    """List all problems with their attempts."""
    result = await db.execute(
        select(Problem).order_by(Problem.solved.asc(), Problem.updated_at.asc()),
    )
    return result.scalars().all()


@router.post(
    "", response_model=ProblemResponse, status_code=status.HTTP_201_CREATED,
)
async def create_problem(body: ProblemCreate, db: AsyncSession = Depends(get_db)):
    problem = Problem(name=body.name, description=body.description)
    db.add(problem)
    await db.commit()
    logger.info(f"Created problem {problem.id}", extra={"problem_id": problem.id})
    return await get_problem_or_404(problem.id, db)


@router.get("/{problem_id}", response_model=ProblemResponse)
async def get_problem(
    problem_id: int = Path(gt=0), db: AsyncSession = Depends(get_db),
):
    return await get_problem_or_404(problem_id, db)


@router.put("/{problem_id}", response_model=ProblemResponse)
async def update_problem(
    body: ProblemUpdate,
    problem_id: int = Path(gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Update trick summary, notes, and/or solved flag."""
    problem = await get_problem_or_404(problem_id, db)
    for field, value in body.changes().items():
        setattr(problem, field, value)
    await db.commit()
    return await get_problem_or_404(problem_id, db)


@router.delete("/{problem_id}")
async def delete_problem(
    problem_id: int = Path(gt=0), db: AsyncSession = Depends(get_db),
):
    """Delete a problem and its attempt records."""
    problem = await get_problem_or_404(problem_id, db)
    name = problem.name
    attempt_count = len(problem.attempts)
    await db.delete(problem)
    await db.commit()
    logger.info(
        f"Deleted problem {problem_id} with {attempt_count} attempts",
        extra={"problem_id": problem_id},
    )
    return {
        "id": problem_id,
        "deleted_attempts": attempt_count,
        "message": (
            f'Problem "{name}" and {attempt_count} attempts deleted successfully'
        ),
    }
