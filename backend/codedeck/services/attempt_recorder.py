"""Attempt Recorder — writer + orchestrator + reader behind one serialized entry point.

Invariants:
    - record_attempt holds the working tree's lock from file write through commit,
      so the commit always contains the file this call wrote
    - One lock per resolved working-tree path, shared by every recorder in the process
    - Push outcome travels back to the caller; it never turns a recorded attempt into an error

Design Decisions:
    - threading.Lock, not asyncio.Lock: routes run the blocking git sequence via
      asyncio.to_thread, so the critical section lives in worker threads
      (ADR: single-user tool — in-process serialization is enough, no file locks)
"""

import logging
import threading
from pathlib import Path

from codedeck.core.commit_text import build_commit_message
from codedeck.core.domain_types import CommitResult, RecordedAttempt
from codedeck.core.recorder_config import RecorderConfig
from codedeck.core.repository_protocols import GitBackend
from codedeck.services.attempt_writer import AttemptFileWriter
from codedeck.services.commit_orchestrator import CommitOrchestrator
from codedeck.services.history_reader import HistoryReader

logger = logging.getLogger(__name__)

_tree_locks: dict[str, threading.Lock] = {}
_tree_locks_guard = threading.Lock()


def working_tree_lock(repo_path: Path) -> threading.Lock:
    key = str(repo_path.expanduser().resolve())
    with _tree_locks_guard:
        lock = _tree_locks.get(key)
        if lock is None:
            lock = _tree_locks[key] = threading.Lock()
        return lock


class AttemptRecorder:
    """Entry point used by the attempts API."""

    def __init__(self, config: RecorderConfig, git: GitBackend):
        self.config = config
        self.git = git
        self.writer = AttemptFileWriter(config)
        self.orchestrator = CommitOrchestrator(config, git)
        self.reader = HistoryReader(config, git)

    def record_attempt(
        self,
        problem_id: int,
        problem_name: str,
        code: str,
        note: str | None = None,
        auto_push: bool = True,
    ) -> RecordedAttempt:
        self.config.require_valid("record_attempt")
        message = build_commit_message(problem_name, note)
        with working_tree_lock(self.config.repo_root):
            file_path = self.writer.write_attempt_file(problem_id, code)
            result = self.orchestrator.commit_and_push(message, auto_push=auto_push)
        logger.info(
            f"Recorded attempt for problem {problem_id} at {result.commit_hash[:8]}",
            extra={
                "problem_id": problem_id,
                "commit_hash": result.commit_hash,
                "file_path": file_path,
                "push_status": result.push.status.value,
            },
        )
        return RecordedAttempt(
            file_path=file_path, commit_hash=result.commit_hash, push=result.push,
        )

    def commit(self, message: str, auto_push: bool = True) -> CommitResult:
        with working_tree_lock(self.config.repo_root):
            return self.orchestrator.commit_and_push(message, auto_push=auto_push)

    def read_code(self, file_path: str, commit_hash: str | None = None) -> str:
        return self.reader.read_current_or_at_commit(file_path, commit_hash)

    def repository_ready(self) -> bool:
        """Readiness check: config complete and working tree is a git repository."""
        if self.config.missing_settings():
            return False
        try:
            return self.git.is_valid_repository(self.config.repo_root)
        except Exception as e:
            logger.error(f"Repository readiness check failed: {e}")
            return False
