"""Subprocess Git Backend — GitBackend implementation that shells out to the git executable.

Invariants:
    - Every call runs with cwd=repo_path, captured output, and a timeout
    - GIT_TERMINAL_PROMPT=0: a missing credential fails the command instead of blocking
    - LC_ALL=C: stderr is matched against English git messages
    - Command arguments are never logged or echoed in errors (set-url carries the token)
    - repo_path must be the working tree's top level, not a subdirectory of another repository
    - Commit hashes are checked as hex object names and for existence before git show;
      an unknown commit is IOFailureError, never NotFoundAtCommitError
    - Failure mapping: generic → IOFailureError, missing path at ref → NotFoundAtCommitError,
      push problems (including timeout) → PushFailureError, rejected commit → CommitFailureError

Design Decisions:
    - subprocess over a git library: the git CLI is already required on the host and
      its porcelain output is stable enough for the handful of commands used here
    - Raw bytes from git show: file content is decoded by the reader, unchanged
"""

import logging
import os
import subprocess
from pathlib import Path

from codedeck.core.attempt_paths import validate_commit_hash
from codedeck.core.errors import (
    CommitFailureError,
    IOFailureError,
    NotFoundAtCommitError,
    PushFailureError,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_MARKERS = ("does not exist in", "exists on disk, but not in")


def _stderr(proc: subprocess.CompletedProcess) -> str:
    return proc.stderr.decode("utf-8", errors="replace").strip()


class SubprocessGitBackend:
    """Runs git commands against a working tree."""

    def __init__(self, git_executable: str = "git", timeout_seconds: float = 30.0):
        self.git_executable = git_executable
        self.timeout_seconds = timeout_seconds
        self._env = {
            **os.environ,
            "GIT_TERMINAL_PROMPT": "0",
            "LC_ALL": "C",
            "LANGUAGE": "C",
        }

    def _run(
        self,
        repo_path: Path,
        *args: str,
        check: bool = True,
        timeout: float | None = None,
        operation: str = "git",
    ) -> subprocess.CompletedProcess:
        command = args[0]
        try:
            proc = subprocess.run(
                [self.git_executable, *args],
                cwd=repo_path,
                capture_output=True,
                timeout=timeout or self.timeout_seconds,
                env=self._env,
            )
        except subprocess.TimeoutExpired as e:
            raise IOFailureError(
                f"git {command} timed out after {e.timeout}s", operation,
            ) from e
        except OSError as e:
            raise IOFailureError(
                f"cannot run git {command} in {repo_path}: {e}", operation,
            ) from e
        if check and proc.returncode != 0:
            raise IOFailureError(
                f"git {command} exited with {proc.returncode}: {_stderr(proc)}",
                operation,
            )
        return proc

    def is_valid_repository(self, repo_path: Path) -> bool:
        """True only when repo_path is the top level of a non-bare working tree."""
        if not repo_path.is_dir():
            return False
        proc = self._run(
            repo_path, "rev-parse", "--show-toplevel",
            check=False, operation="validate_repository",
        )
        if proc.returncode != 0:
            return False
        toplevel = proc.stdout.decode("utf-8", errors="replace").strip()
        # A subdirectory of another repository would stage and resolve paths
        # relative to that repository's root
        return bool(toplevel) and Path(toplevel).resolve() == repo_path.resolve()

    def configure_identity(self, repo_path: Path, name: str, email: str) -> None:
        self._run(repo_path, "config", "user.name", name, operation="configure_identity")
        self._run(repo_path, "config", "user.email", email, operation="configure_identity")

    def stage_all(self, repo_path: Path) -> None:
        self._run(repo_path, "add", "-A", operation="stage_all")

    def has_staged_changes(self, repo_path: Path) -> bool:
        # diff --quiet: 0 = index matches HEAD, 1 = staged differences
        proc = self._run(
            repo_path, "diff", "--cached", "--quiet",
            check=False, operation="stage_all",
        )
        if proc.returncode not in (0, 1):
            raise IOFailureError(
                f"git diff exited with {proc.returncode}: {_stderr(proc)}", "stage_all",
            )
        return proc.returncode == 1

    def commit(self, repo_path: Path, message: str) -> str | None:
        proc = self._run(
            repo_path, "commit", "--quiet", "-m", message,
            check=False, operation="commit_and_push",
        )
        if proc.returncode != 0:
            raise CommitFailureError(
                f"git commit exited with {proc.returncode}: {_stderr(proc)}",
            )
        return self.head_hash(repo_path)

    def head_hash(self, repo_path: Path) -> str | None:
        proc = self._run(
            repo_path, "rev-parse", "--verify", "HEAD",
            check=False, operation="commit_and_push",
        )
        if proc.returncode != 0:
            return None
        return proc.stdout.decode("ascii", errors="replace").strip() or None

    def get_remote_url(self, repo_path: Path, remote_name: str) -> str | None:
        proc = self._run(
            repo_path, "remote", "get-url", "--push", remote_name,
            check=False, operation="push",
        )
        if proc.returncode != 0:
            return None
        return proc.stdout.decode("utf-8", errors="replace").strip() or None

    def set_remote_url(self, repo_path: Path, remote_name: str, url: str) -> None:
        self._run(repo_path, "remote", "set-url", remote_name, url, operation="push")

    def push(
        self, repo_path: Path, remote_name: str, branch: str, timeout: float,
    ) -> None:
        try:
            proc = self._run(
                repo_path, "push", remote_name, f"HEAD:refs/heads/{branch}",
                check=False, timeout=timeout, operation="push",
            )
        except IOFailureError as e:
            raise PushFailureError(e.message) from e
        if proc.returncode != 0:
            raise PushFailureError(
                f"git push exited with {proc.returncode}: {_stderr(proc)}",
            )
        logger.info(f"Pushed HEAD to {remote_name}/{branch}")

    def show_file_at_ref(self, repo_path: Path, commit_hash: str, file_path: str) -> bytes:
        commit_hash = validate_commit_hash(commit_hash, "read_at_commit")
        # The not-found markers below are only meaningful once the commit is known
        # to exist: git reports an unknown hash as "exists on disk, but not in"
        exists = self._run(
            repo_path, "cat-file", "-e", f"{commit_hash}^{{commit}}",
            check=False, operation="read_at_commit",
        )
        if exists.returncode != 0:
            raise IOFailureError(
                f"commit {commit_hash[:8]} does not exist in the repository",
                "read_at_commit",
            )
        proc = self._run(
            repo_path, "show", "--end-of-options", f"{commit_hash}:{file_path}",
            check=False, operation="read_at_commit",
        )
        if proc.returncode == 0:
            return proc.stdout
        err = _stderr(proc)
        if any(marker in err for marker in _NOT_FOUND_MARKERS):
            raise NotFoundAtCommitError(file_path, commit_hash)
        raise IOFailureError(
            f"git show exited with {proc.returncode}: {err}", "read_at_commit",
        )
