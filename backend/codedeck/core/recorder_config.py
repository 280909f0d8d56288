"""Recorder Configuration — explicit settings for the git-backed attempt recorder.

Invariants:
    - Built once per process (from Settings) and injected; never read from os.environ here
    - Validated lazily: require_valid() runs at the start of every recorder operation,
      before any filesystem or subprocess call
    - A placeholder value is rejected exactly like an absent one

Design Decisions:
    - Frozen dataclass: tests build fixture configs directly, no env patching
    - Placeholder detection is pattern-based (template markers from .env.example files)
"""

import re
from dataclasses import dataclass
from pathlib import Path

from codedeck.core.errors import ConfigurationError

ATTEMPTS_DIR = "attempts"
ATTEMPT_FILENAME = "attempt.py"
ATTEMPT_LOG_FILENAME = ".codedeck-attempts.log"

_PLACEHOLDER_PATTERNS = (
    re.compile(r"placeholder", re.IGNORECASE),
    re.compile(r"^your[-_ ]", re.IGNORECASE),
    re.compile(r"^changeme$", re.IGNORECASE),
    re.compile(r"^<.*>$"),
    re.compile(r"^\$\{.*\}$"),
    re.compile(r"^x{3,}$", re.IGNORECASE),
    re.compile(r"@example\.(com|org|net)$", re.IGNORECASE),
    re.compile(r"^/path/to/"),
)


def is_placeholder(value: str | None) -> bool:
    """True for absent, blank, or template-looking values."""
    if value is None:
        return True
    stripped = value.strip()
    if not stripped:
        return True
    return any(p.search(stripped) for p in _PLACEHOLDER_PATTERNS)


@dataclass(frozen=True)
class RecorderConfig:
    auth_token: str | None
    repo_path: str | None
    author_name: str | None
    author_email: str | None
    remote_name: str = "origin"
    branch: str = "main"
    push_timeout_seconds: float = 60.0
    command_timeout_seconds: float = 30.0
    allow_empty_commit_via_log: bool = True

    def missing_settings(self) -> list[str]:
        """Names of the environment variables that still need a real value."""
        required = (
            ("GITHUB_PAT", self.auth_token),
            ("GIT_REPO_PATH", self.repo_path),
            ("GIT_USER_NAME", self.author_name),
            ("GIT_USER_EMAIL", self.author_email),
        )
        return [name for name, value in required if is_placeholder(value)]

    def require_valid(self, operation: str) -> None:
        missing = self.missing_settings()
        if missing:
            raise ConfigurationError(missing, operation=operation)

    @property
    def repo_root(self) -> Path:
        # Only meaningful after require_valid()
        return Path(self.repo_path or "").expanduser()

    @property
    def attempt_log_path(self) -> Path:
        return self.repo_root / ATTEMPT_LOG_FILENAME
