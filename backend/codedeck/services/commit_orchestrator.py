"""Commit/Push Orchestrator — stages, commits, and best-effort pushes the working tree.

Invariants:
    - Order per call: config → message → repository → identity → stage → (fallback) → commit → push
    - ConfigurationError raised before any filesystem or subprocess call
    - Returned hash never depends on the push: a failed or timed-out push yields
      PushOutcome(FAILED) with the same hash, never an exception
    - The auth token never appears in logs or in PushOutcome.detail
    - History is only appended to: no amend, reset, or force push

Design Decisions:
    - allow_empty_commit_via_log (default on): a clean tree gets one timestamped line
      appended to the attempt log so every accepted attempt maps to a commit.
      Turning it off makes clean-tree calls fail with CommitFailureError
    - No retry around commit creation; callers retry if they want to
    - Clock injected for deterministic log lines in tests
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from codedeck.core.attempt_paths import require_text
from codedeck.core.commit_text import (
    authenticated_remote_url,
    format_log_entry,
    redact_remote_url,
)
from codedeck.core.domain_types import CommitHash, CommitResult, PushOutcome
from codedeck.core.errors import (
    CodeDeckError,
    CommitFailureError,
    ErrorContext,
    IOFailureError,
    RepositoryInvalidError,
)
from codedeck.core.recorder_config import ATTEMPT_LOG_FILENAME, RecorderConfig
from codedeck.core.repository_protocols import GitBackend

logger = logging.getLogger(__name__)

_OPERATION = "commit_and_push"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CommitOrchestrator:
    def __init__(
        self,
        config: RecorderConfig,
        git: GitBackend,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.config = config
        self.git = git
        self.clock = clock

    def commit_and_push(self, message: str, auto_push: bool = True) -> CommitResult:
        """Commit everything in the working tree and push it if asked to."""
        self.config.require_valid(_OPERATION)
        message = require_text(message, "message", _OPERATION)

        repo = self.config.repo_root
        if not self.git.is_valid_repository(repo):
            raise RepositoryInvalidError(str(repo), _OPERATION)

        self.git.configure_identity(
            repo, self.config.author_name, self.config.author_email,
        )
        logger.info(
            f"Configured Git user: {self.config.author_name} <{self.config.author_email}>",
        )

        self.git.stage_all(repo)
        synthetic = False
        if not self.git.has_staged_changes(repo):
            if not self.config.allow_empty_commit_via_log:
                raise CommitFailureError("no changes to commit")
            logger.warning("No changes detected, appending to attempt log")
            self._append_attempt_log(message)
            self.git.stage_all(repo)
            if not self.git.has_staged_changes(repo):
                raise CommitFailureError(
                    "no changes to commit even after appending to attempt log",
                )
            synthetic = True

        commit_hash = self.git.commit(repo, message)
        if not commit_hash:
            raise CommitFailureError("could not determine the new commit hash")
        commit_hash = CommitHash(commit_hash)
        logger.info(
            f"Git commit created: {commit_hash}",
            extra={"commit_hash": commit_hash, "operation": _OPERATION},
        )

        push = self._push() if auto_push else PushOutcome.skipped("auto_push disabled")
        return CommitResult(commit_hash=commit_hash, push=push, synthetic=synthetic)

    def _append_attempt_log(self, message: str) -> None:
        entry = format_log_entry(message, self.clock())
        try:
            with open(self.config.attempt_log_path, "a", encoding="utf-8") as f:
                f.write(entry)
        except OSError as e:
            raise IOFailureError(
                str(e), _OPERATION, ErrorContext(file_path=ATTEMPT_LOG_FILENAME),
            ) from e
        logger.info(f"Attempt log entry: {entry.strip()}")

    def _push(self) -> PushOutcome:
        """Best-effort push. Every failure becomes PushOutcome(FAILED)."""
        remote = self.config.remote_name
        branch = self.config.branch
        repo = self.config.repo_root
        try:
            url = self.git.get_remote_url(repo, remote)
            if url:
                authed = authenticated_remote_url(url, self.config.auth_token)
                if authed != url:
                    logger.info(
                        f"Configuring authenticated remote URL for {remote}: "
                        f"{redact_remote_url(authed)}",
                    )
                    self.git.set_remote_url(repo, remote, authed)
            self.git.push(
                repo, remote, branch, timeout=self.config.push_timeout_seconds,
            )
        except CodeDeckError as e:
            detail = self._redact(e.message)
            logger.warning(
                f"Commit created but push failed: {detail}",
                extra={"push_status": "failed", "error_code": e.code},
            )
            return PushOutcome.failed(detail)
        except Exception as e:
            detail = self._redact(f"{type(e).__name__}: {e}")
            logger.warning(
                f"Commit created but push failed unexpectedly: {detail}",
                extra={"push_status": "failed"},
            )
            return PushOutcome.failed(detail)
        logger.info(
            f"Pushed to {remote}/{branch}", extra={"push_status": "pushed"},
        )
        return PushOutcome.pushed()

    def _redact(self, text: str) -> str:
        token = self.config.auth_token
        return text.replace(token, "***") if token else text
