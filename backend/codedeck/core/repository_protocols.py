"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Version control is accessed only through GitBackend
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Synchronous methods: every operation is a short blocking subprocess call;
      the API layer moves the whole record/read sequence onto a worker thread
    - Failure contract: implementations raise IOFailureError for generic failures,
      NotFoundAtCommitError from show_file_at_ref, PushFailureError from push
"""

from pathlib import Path
from typing import Protocol


class GitBackend(Protocol):
    """Narrow capability interface over one working tree."""

    def is_valid_repository(self, repo_path: Path) -> bool: ...

    def configure_identity(self, repo_path: Path, name: str, email: str) -> None: ...

    def stage_all(self, repo_path: Path) -> None: ...

    def has_staged_changes(self, repo_path: Path) -> bool: ...

    def commit(self, repo_path: Path, message: str) -> str | None:
        """Create the commit; return its hash or None when it cannot be determined."""
        ...

    def head_hash(self, repo_path: Path) -> str | None: ...

    def get_remote_url(self, repo_path: Path, remote_name: str) -> str | None: ...

    def set_remote_url(self, repo_path: Path, remote_name: str, url: str) -> None: ...

    def push(
        self, repo_path: Path, remote_name: str, branch: str, timeout: float,
    ) -> None: ...

    def show_file_at_ref(self, repo_path: Path, commit_hash: str, file_path: str) -> bytes: ...
