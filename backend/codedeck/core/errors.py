"""Error Hierarchy — typed, categorized exceptions for all CodeDeck failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller mistakes (InvalidInputError, ConfigurationError) are 400-level
    - Repository, filesystem and commit failures are 500-level
    - PushFailureError is never raised past the orchestrator (logged and swallowed)
    - Every message carries the operation name plus the underlying cause

Design Decisions:
    - Single hierarchy with CodeDeckError base: FastAPI global handler catches all (ADR: uniform error shape)
    - NotFoundAtCommitError is its own type (404), not an IOFailureError subclass:
      UIs render "file unavailable at this commit" instead of a generic error
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    REPOSITORY = "repository"
    FILESYSTEM = "filesystem"
    VERSION_CONTROL = "version_control"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    problem_id: int | None = None
    file_path: str | None = None
    commit_hash: str | None = None
    debug_info: dict[str, Any] | None = None


class CodeDeckError(Exception):
    """Base exception for all CodeDeck errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "problem_id": self.context.problem_id,
                    "file_path": self.context.file_path,
                    "commit_hash": self.context.commit_hash,
                },
            }
        }


def _with_operation(
    context: ErrorContext | None, operation: str | None,
) -> ErrorContext:
    ctx = context or ErrorContext()
    if operation and not ctx.operation:
        ctx.operation = operation
    return ctx


def _prefixed(operation: str | None, message: str) -> str:
    return f"{operation} failed: {message}" if operation else message


# ─── Caller Errors (400-level) ──────────────────────────────────

class ConfigurationError(CodeDeckError):
    """Required git setting is missing or still a placeholder."""
    def __init__(
        self, missing: list[str], operation: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            _prefixed(
                operation,
                "missing or placeholder configuration: " + ", ".join(missing),
            ),
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, _with_operation(context, operation), 400,
        )
        self.missing = missing


class InvalidInputError(CodeDeckError):
    """Caller passed a malformed identifier, empty code, or empty path/hash."""
    def __init__(
        self, message: str, field: str, operation: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            _prefixed(operation, message),
            "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, _with_operation(context, operation), 400,
        )
        self.field = field


class ResourceNotFoundError(CodeDeckError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class NotFoundAtCommitError(CodeDeckError):
    """File path did not exist in the requested commit."""
    def __init__(
        self, file_path: str, commit_hash: str, context: ErrorContext | None = None,
    ):
        ctx = _with_operation(context, "read_at_commit")
        ctx.file_path = file_path
        ctx.commit_hash = commit_hash
        super().__init__(
            f'File "{file_path}" not found in commit {commit_hash[:8]}',
            "NOT_FOUND_AT_COMMIT", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.file_path = file_path
        self.commit_hash = commit_hash


# ─── Infrastructure Errors (500-level) ──────────────────────────

class RepositoryInvalidError(CodeDeckError):
    """Working tree path is not a valid git repository."""
    def __init__(
        self, repo_path: str, operation: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            _prefixed(
                operation, f"directory {repo_path} is not a valid Git repository",
            ),
            "REPOSITORY_INVALID", ErrorCategory.REPOSITORY,
            ErrorSeverity.CRITICAL, _with_operation(context, operation), 500,
        )
        self.repo_path = repo_path


class IOFailureError(CodeDeckError):
    """Filesystem or object-store read/write failed."""
    def __init__(
        self, message: str, operation: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            _prefixed(operation, message),
            "IO_FAILURE", ErrorCategory.FILESYSTEM,
            ErrorSeverity.CRITICAL, _with_operation(context, operation), 500,
        )


class CommitFailureError(CodeDeckError):
    """Nothing to commit after the synthetic fallback, or hash not extractable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            _prefixed("commit_and_push", message),
            "COMMIT_FAILURE", ErrorCategory.VERSION_CONTROL,
            ErrorSeverity.CRITICAL, _with_operation(context, "commit_and_push"), 500,
        )


class PushFailureError(CodeDeckError):
    """Push to the remote failed. Raised by the backend, swallowed by the orchestrator."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            _prefixed("push", message),
            "PUSH_FAILURE", ErrorCategory.VERSION_CONTROL,
            ErrorSeverity.WARNING, _with_operation(context, "push"), 502,
        )


class DatabaseError(CodeDeckError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
