"""Structured Logging — JSON output shape, credential scrubbing, repeatable setup."""

import json
import logging

from codedeck.infrastructure.observability import (
    CredentialScrubFilter,
    JSONFormatter,
    scrub_credentials,
    setup_logging,
)


def _record(msg="Recorded attempt %s", args=("x",), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "codedeck.test", logging.INFO, __file__, 1, msg, args, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "codedeck.test"
    assert out["message"] == "Recorded attempt x"
    assert "timestamp" in out


def test_known_extras_included_unknown_dropped():
    out = json.loads(JSONFormatter().format(
        _record(problem_id=3, commit_hash="abc", push_status="failed", secret="nope"),
    ))
    assert out["problem_id"] == 3
    assert out["commit_hash"] == "abc"
    assert out["push_status"] == "failed"
    assert "secret" not in out


def test_scrub_credentials_in_urls():
    text = "unable to access 'https://ghp_abc123@github.com/ada/solutions.git/'"
    assert scrub_credentials(text) == "unable to access 'https://***@github.com/ada/solutions.git/'"
    assert scrub_credentials("no url here") == "no url here"
    assert scrub_credentials("git@github.com:ada/solutions.git") == "git@github.com:ada/solutions.git"


def test_filter_scrubs_formatted_message():
    record = _record("push to %s failed", ("https://ghp_abc123@github.com/a/b.git",))
    assert CredentialScrubFilter().filter(record) is True
    assert "ghp_abc123" not in record.getMessage()
    assert "https://***@github.com/a/b.git" in record.getMessage()


def test_setup_logging_replaces_its_own_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("INFO", "text")
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.INFO
    finally:
        root.removeHandler(second)
        root.handlers[:] = before
        root.setLevel(level)
