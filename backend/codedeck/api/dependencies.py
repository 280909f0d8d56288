"""API Dependencies — process-wide AttemptRecorder wired from settings.

Invariants:
    - One recorder per process, built lazily on first request
    - Configuration is NOT validated here: each recorder operation validates it,
      so a misconfigured deployment still serves problem CRUD

Design Decisions:
    - lru_cache over a module global: tests swap it via app.dependency_overrides
"""

from functools import lru_cache

from codedeck.config import get_settings
from codedeck.infrastructure.git_cli import SubprocessGitBackend
from codedeck.services.attempt_recorder import AttemptRecorder


@lru_cache
def get_attempt_recorder() -> AttemptRecorder:
    config = get_settings().recorder_config()
    git = SubprocessGitBackend(timeout_seconds=config.command_timeout_seconds)
    return AttemptRecorder(config, git)
