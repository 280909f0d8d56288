"""Commit Text — pure string builders for commit messages, log entries, and remote URLs.

Invariants:
    - Commit message format: codedeck attempt for "{name}"[: {note}]
    - Log entry format: "{ISO-8601 timestamp}: {message}\\n", exactly one line
    - authenticated_remote_url only rewrites https:// URLs; anything else is returned as-is
    - redact_remote_url never returns a string containing credentials

Design Decisions:
    - Token embedded as the userinfo part (https://{token}@host/...): git sends it
      without an interactive credential prompt
    - Existing userinfo is replaced, not stacked, so repeated calls are idempotent
"""

from datetime import datetime
from urllib.parse import urlsplit, urlunsplit


def build_commit_message(problem_name: str, note: str | None = None) -> str:
    trimmed_note = note.strip() if note else ""
    base = f'codedeck attempt for "{problem_name.strip()}"'
    return f"{base}: {trimmed_note}" if trimmed_note else base


def format_log_entry(message: str, now: datetime) -> str:
    # Multi-line commit messages would break the one-line-per-entry format
    flat = " ".join(message.split())
    return f"{now.isoformat()}: {flat}\n"


def authenticated_remote_url(url: str, token: str) -> str:
    parts = urlsplit(url)
    if parts.scheme != "https" or not parts.hostname:
        return url
    host = parts.hostname
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit(
        (parts.scheme, f"{token}@{host}", parts.path, parts.query, parts.fragment),
    )


def redact_remote_url(url: str) -> str:
    parts = urlsplit(url)
    if "@" not in parts.netloc:
        return url
    host = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit(
        (parts.scheme, f"***@{host}", parts.path, parts.query, parts.fragment),
    )


def generate_commit_url(commit_hash: str, repo_owner: str, repo_name: str) -> str:
    """GitHub web URL for a commit."""
    return f"https://github.com/{repo_owner}/{repo_name}/commit/{commit_hash}"
