"""Attempt File Writer — writes the latest submitted code for a problem into the working tree.

Invariants:
    - Configuration validated before any filesystem access
    - Exactly one file mutated per call; git state never touched
    - Same problem_id → same returned path; each write fully overwrites the previous one
    - Code is written as given (validation trims, the content does not)
"""

import logging

from codedeck.core.attempt_paths import (
    attempt_relative_path,
    resolve_in_tree,
    validate_code,
    validate_problem_id,
)
from codedeck.core.domain_types import RelativePath
from codedeck.core.errors import ErrorContext, IOFailureError
from codedeck.core.recorder_config import RecorderConfig

logger = logging.getLogger(__name__)

_OPERATION = "write_attempt_file"


class AttemptFileWriter:
    def __init__(self, config: RecorderConfig):
        self.config = config

    def write_attempt_file(self, problem_id: int, code: str) -> RelativePath:
        self.config.require_valid(_OPERATION)
        pid = validate_problem_id(problem_id, _OPERATION)
        validate_code(code, _OPERATION)

        relative_path = attempt_relative_path(pid)
        repo_root = self.config.repo_root
        target = resolve_in_tree(repo_root, relative_path, _OPERATION)
        ctx = ErrorContext(problem_id=pid, file_path=relative_path)

        if not repo_root.is_dir():
            raise IOFailureError(
                f"working tree {repo_root} does not exist", _OPERATION, ctx,
            )
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps the submitted line endings byte-for-byte
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(code)
        except OSError as e:
            raise IOFailureError(str(e), _OPERATION, ctx) from e

        logger.info(
            f"Wrote attempt file {relative_path}",
            extra={"problem_id": pid, "file_path": relative_path},
        )
        return relative_path
