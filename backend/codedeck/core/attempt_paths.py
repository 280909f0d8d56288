"""Attempt Paths — deterministic on-disk layout and input validation for attempt files.

Invariants:
    - attempt_relative_path depends on problem_id only: attempts/problem-{id}/attempt.py
    - Returned paths are relative to the working tree root, POSIX separators
    - resolve_in_tree never returns a path outside the working tree
    - validate_commit_hash accepts hex object names only, so a hash can never be read as a git option

Design Decisions:
    - One fixed file per problem, overwritten per attempt: git history keeps every
      version, and the {path, commit_hash} pair recovers any of them
    - bool rejected as problem_id even though it is an int subclass
"""

import re
from pathlib import Path, PurePosixPath

from codedeck.core.domain_types import ProblemId, RelativePath
from codedeck.core.errors import InvalidInputError
from codedeck.core.recorder_config import ATTEMPTS_DIR, ATTEMPT_FILENAME

# Abbreviated or full object name (SHA-1 or SHA-256); never an option or revision expression
_COMMIT_HASH = re.compile(r"^[0-9a-fA-F]{4,64}$")


def validate_problem_id(problem_id: object, operation: str) -> ProblemId:
    if isinstance(problem_id, bool) or not isinstance(problem_id, int) or problem_id <= 0:
        raise InvalidInputError(
            "Problem ID must be a positive integer", "problem_id", operation,
        )
    return ProblemId(problem_id)


def validate_code(code: object, operation: str) -> str:
    if not isinstance(code, str) or not code.strip():
        raise InvalidInputError("Code cannot be empty", "code", operation)
    return code


def require_text(value: object, field: str, operation: str) -> str:
    """Trimmed non-empty string or InvalidInputError."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} cannot be empty", field, operation)
    return value.strip()


def validate_commit_hash(commit_hash: object, operation: str) -> str:
    """Trimmed hex object name or InvalidInputError."""
    value = require_text(commit_hash, "commit_hash", operation)
    if not _COMMIT_HASH.match(value):
        raise InvalidInputError(
            "Commit hash must be a hexadecimal object name", "commit_hash", operation,
        )
    return value


def attempt_relative_path(problem_id: ProblemId) -> RelativePath:
    return RelativePath(
        str(PurePosixPath(ATTEMPTS_DIR, f"problem-{problem_id}", ATTEMPT_FILENAME)),
    )


def resolve_in_tree(repo_root: Path, relative_path: str, operation: str) -> Path:
    """Join relative_path onto repo_root, rejecting absolute or escaping paths."""
    candidate = PurePosixPath(relative_path.replace("\\", "/"))
    if candidate.is_absolute() or ".." in candidate.parts:
        raise InvalidInputError(
            f"Path must stay inside the working tree: {relative_path}",
            "file_path", operation,
        )
    return repo_root.joinpath(*candidate.parts)
