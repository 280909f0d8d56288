"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProblemId and AttemptId wrap positive ints (database primary keys)
    - CommitHash is opaque: never parsed, truncated only for display
    - RelativePath is always relative to the working tree root, POSIX separators
    - CommitResult always carries a hash; push outcome never changes it

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - PushOutcome in the result type instead of throw-then-catch: the
      "push is best-effort" contract is visible to every caller
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProblemId = NewType("ProblemId", int)
AttemptId = NewType("AttemptId", int)
CommitHash = NewType("CommitHash", str)
RelativePath = NewType("RelativePath", str)


# ─── Enums ───────────────────────────────────────────────────────

class PushStatus(str, Enum):
    """Outcome of the best-effort push that follows every commit."""
    PUSHED = "pushed"
    FAILED = "failed"
    SKIPPED = "skipped"


# ─── Results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class PushOutcome:
    status: PushStatus
    detail: str | None = None

    @classmethod
    def pushed(cls) -> "PushOutcome":
        return cls(PushStatus.PUSHED)

    @classmethod
    def skipped(cls, detail: str | None = None) -> "PushOutcome":
        return cls(PushStatus.SKIPPED, detail)

    @classmethod
    def failed(cls, detail: str) -> "PushOutcome":
        return cls(PushStatus.FAILED, detail)


@dataclass(frozen=True)
class CommitResult:
    """Commit hash plus what happened to the push."""
    commit_hash: CommitHash
    push: PushOutcome = field(default_factory=PushOutcome.skipped)
    synthetic: bool = False  # commit carried only the fallback log line


@dataclass(frozen=True)
class RecordedAttempt:
    """What the record store persists for one attempt."""
    file_path: RelativePath
    commit_hash: CommitHash
    push: PushOutcome
