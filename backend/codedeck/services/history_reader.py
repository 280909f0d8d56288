"""Historical Content Reader — file content as it existed at a given commit.

Invariants:
    - Empty path, or a hash that is not a hex object name → InvalidInputError,
      before touching the repository
    - Path absent from the commit's tree → NotFoundAtCommitError (never IOFailureError)
    - Any other failure (unknown hash, corrupt object, unreadable repo) → IOFailureError
    - No caching: every call goes back to the object store
"""

import logging

from codedeck.core.attempt_paths import (
    require_text,
    resolve_in_tree,
    validate_commit_hash,
)
from codedeck.core.errors import (
    ErrorContext,
    IOFailureError,
    ResourceNotFoundError,
)
from codedeck.core.recorder_config import RecorderConfig
from codedeck.core.repository_protocols import GitBackend

logger = logging.getLogger(__name__)


def _decode(raw: bytes, operation: str, ctx: ErrorContext) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise IOFailureError(f"content is not valid UTF-8: {e}", operation, ctx) from e


class HistoryReader:
    def __init__(self, config: RecorderConfig, git: GitBackend):
        self.config = config
        self.git = git

    def read_at_commit(self, relative_path: str, commit_hash: str) -> str:
        operation = "read_at_commit"
        self.config.require_valid(operation)
        path = require_text(relative_path, "file_path", operation)
        ref = validate_commit_hash(commit_hash, operation)
        # Validates the path shape; git resolves it against the commit's tree
        resolve_in_tree(self.config.repo_root, path, operation)
        path = path.replace("\\", "/")

        raw = self.git.show_file_at_ref(self.config.repo_root, ref, path)
        ctx = ErrorContext(operation=operation, file_path=path, commit_hash=ref)
        contents = _decode(raw, operation, ctx)
        logger.info(
            f"Read file from commit {ref[:8]}: {path}",
            extra={"commit_hash": ref, "file_path": path},
        )
        return contents

    def read_current_or_at_commit(
        self, relative_path: str, commit_hash: str | None = None,
    ) -> str:
        """Read at commit_hash when given, otherwise the live working-tree copy."""
        if commit_hash:
            return self.read_at_commit(relative_path, commit_hash)

        operation = "read_current"
        self.config.require_valid(operation)
        path = require_text(relative_path, "file_path", operation)
        full_path = resolve_in_tree(self.config.repo_root, path, operation)
        ctx = ErrorContext(operation=operation, file_path=path)
        if not full_path.is_file():
            raise ResourceNotFoundError("Attempt file", path, ctx)
        try:
            raw = full_path.read_bytes()
        except OSError as e:
            raise IOFailureError(str(e), operation, ctx) from e
        logger.info(f"Read attempt file: {path}", extra={"file_path": path})
        return _decode(raw, operation, ctx)
