"""Structured Logging — JSON log lines with attempt/commit fields and credential scrubbing.

Invariants:
    - Every line carries timestamp, level, logger, message
    - Attempt fields (problem_id, commit_hash, file_path, push_status, ...) appear only when set
    - URL userinfo (https://{token}@host) is scrubbed from messages and exception text
      before formatting, whatever the caller forgot to redact
    - setup_logging is idempotent: a second call replaces the handler it installed

Design Decisions:
    - Hand-rolled JSONFormatter on stdlib logging, no structlog dependency
    - Scrubbing as a logging.Filter on the handler so third-party loggers are covered too
"""

import json
import logging
import re
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "operation", "problem_id", "attempt_id", "commit_hash", "file_path",
    "error_code", "push_status", "path",
)
_USERINFO = re.compile(r"(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*://)[^/@\s]+@")


def scrub_credentials(text: str) -> str:
    return _USERINFO.sub(r"\g<scheme>***@", text)


class CredentialScrubFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        scrubbed = scrub_credentials(message)
        if scrubbed != message:
            record.msg, record.args = scrubbed, None
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key])
            for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exception"] = scrub_credentials(self.formatException(record.exc_info))
        return json.dumps(entry, ensure_ascii=False, default=str)


class _CodeDeckHandler(logging.StreamHandler):
    """Marker type so setup_logging can find and replace its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _CodeDeckHandler)]:
        root.removeHandler(existing)

    handler = _CodeDeckHandler()
    handler.addFilter(CredentialScrubFilter())
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
