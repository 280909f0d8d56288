"""Attempt Recorder — end-to-end against a real temporary git repository.

Invariants:
    - Two attempts for one problem → two distinct hashes, each reading back its own code
    - Re-submitting identical code still yields a new commit (attempt log line)
    - Unreachable remote → same result shape as a successful push, push FAILED
    - A path added later is NotFoundAtCommitError at the earlier commit
    - A working tree nested inside another repository is rejected before staging
"""

import pytest

from codedeck.core.domain_types import PushStatus
from codedeck.core.errors import (
    IOFailureError,
    NotFoundAtCommitError,
    RepositoryInvalidError,
)
from codedeck.core.recorder_config import ATTEMPT_LOG_FILENAME, RecorderConfig
from codedeck.infrastructure.git_cli import SubprocessGitBackend
from codedeck.services.attempt_recorder import AttemptRecorder, working_tree_lock

from tests.git_helpers import TEST_TOKEN, run_git


def _commit_count(repo) -> int:
    return int(run_git(repo, "rev-list", "--count", "HEAD"))


def test_two_attempts_read_back_independently(recorder, git_repo):
    first = recorder.record_attempt(42, "Two Sum", "print(1)", auto_push=False)
    second = recorder.record_attempt(42, "Two Sum", "print(2)", auto_push=False)

    assert first.file_path == second.file_path == "attempts/problem-42/attempt.py"
    assert first.commit_hash != second.commit_hash
    assert recorder.read_code(first.file_path, first.commit_hash) == "print(1)"
    assert recorder.read_code(second.file_path, second.commit_hash) == "print(2)"
    assert recorder.read_code(first.file_path) == "print(2)"
    assert run_git(git_repo, "rev-parse", "HEAD") == second.commit_hash


def test_commit_message_and_author(recorder, git_repo):
    recorder.record_attempt(3, "Valid Anagram", "x = 1", note="sorted keys", auto_push=False)

    assert run_git(git_repo, "log", "-1", "--format=%s") == (
        'codedeck attempt for "Valid Anagram": sorted keys'
    )
    assert run_git(git_repo, "log", "-1", "--format=%an <%ae>") == (
        "Test Coder <coder@codedeck.test>"
    )


def test_identical_code_still_gets_new_commit(recorder, git_repo):
    first = recorder.record_attempt(1, "Two Sum", "print(1)", auto_push=False)
    log_path = git_repo / ATTEMPT_LOG_FILENAME
    assert not log_path.exists()

    second = recorder.record_attempt(1, "Two Sum", "print(1)", auto_push=False)

    assert second.commit_hash != first.commit_hash
    assert _commit_count(git_repo) == 2
    assert len(log_path.read_text(encoding="utf-8").splitlines()) == 1
    assert recorder.read_code(second.file_path, second.commit_hash) == "print(1)"


def test_clean_tree_commit_appends_one_log_line(recorder, git_repo):
    recorder.record_attempt(1, "Two Sum", "print(1)", auto_push=False)

    result = recorder.commit("manual checkpoint", auto_push=False)

    assert result.synthetic is True
    lines = (git_repo / ATTEMPT_LOG_FILENAME).read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith(": manual checkpoint")
    assert run_git(git_repo, "status", "--porcelain") == ""


def test_no_remote_commit_kept_push_failed(recorder, git_repo):
    recorded = recorder.record_attempt(1, "Two Sum", "print(1)")

    assert recorded.push.status == PushStatus.FAILED
    assert run_git(git_repo, "rev-parse", "HEAD") == recorded.commit_hash


def test_unreachable_remote_is_non_fatal_and_token_redacted(recorder, git_repo):
    run_git(git_repo, "remote", "add", "origin", "https://127.0.0.1:9/ada/solutions.git")

    recorded = recorder.record_attempt(1, "Two Sum", "print(1)")

    assert recorded.push.status == PushStatus.FAILED
    assert TEST_TOKEN not in (recorded.push.detail or "")
    assert recorder.read_code(recorded.file_path, recorded.commit_hash) == "print(1)"
    # Remote rewritten with the token for the push attempt
    assert TEST_TOKEN in run_git(git_repo, "remote", "get-url", "origin")


def test_push_to_local_bare_remote(recorder, git_repo, tmp_path):
    bare = tmp_path / "remote.git"
    run_git(tmp_path, "init", "--quiet", "--bare", str(bare))
    run_git(git_repo, "remote", "add", "origin", str(bare))

    recorded = recorder.record_attempt(7, "Climbing Stairs", "def f(): pass")

    assert recorded.push.status == PushStatus.PUSHED
    assert run_git(bare, "rev-parse", "refs/heads/main") == recorded.commit_hash


def test_path_added_later_not_found_at_earlier_commit(recorder):
    early = recorder.record_attempt(1, "Two Sum", "print(1)", auto_push=False)
    later = recorder.record_attempt(2, "Three Sum", "print(3)", auto_push=False)

    with pytest.raises(NotFoundAtCommitError):
        recorder.read_code(later.file_path, early.commit_hash)


def test_repository_ready(recorder, recorder_config, tmp_path):
    assert recorder.repository_ready() is True

    not_a_repo = tmp_path / "plain"
    not_a_repo.mkdir()
    other = AttemptRecorder(
        RecorderConfig(
            auth_token=TEST_TOKEN, repo_path=str(not_a_repo),
            author_name="Test Coder", author_email="coder@codedeck.test",
        ),
        SubprocessGitBackend(),
    )
    assert other.repository_ready() is False

    unconfigured = AttemptRecorder(
        RecorderConfig(
            auth_token=None, repo_path=recorder_config.repo_path,
            author_name="Test Coder", author_email="coder@codedeck.test",
        ),
        SubprocessGitBackend(),
    )
    assert unconfigured.repository_ready() is False


def test_working_tree_lock_shared_per_path(git_repo, tmp_path):
    assert working_tree_lock(git_repo) is working_tree_lock(git_repo / ".")
    assert working_tree_lock(git_repo) is not working_tree_lock(tmp_path)


def test_nested_working_tree_rejected_without_committing(git_repo):
    deck = git_repo / "deck"
    deck.mkdir()
    (git_repo / "unrelated.txt").write_text("not ours", encoding="utf-8")
    nested = AttemptRecorder(
        RecorderConfig(
            auth_token=TEST_TOKEN, repo_path=str(deck),
            author_name="Test Coder", author_email="coder@codedeck.test",
        ),
        SubprocessGitBackend(),
    )

    with pytest.raises(RepositoryInvalidError):
        nested.record_attempt(42, "Two Sum", "print(1)", auto_push=False)

    assert run_git(git_repo, "rev-list", "--all") == ""
    assert nested.repository_ready() is False


def test_hash_missing_from_history_is_io_failure(recorder):
    recorded = recorder.record_attempt(1, "Two Sum", "print(1)", auto_push=False)

    with pytest.raises(IOFailureError) as exc_info:
        recorder.read_code(recorded.file_path, "f" * 40)
    assert not isinstance(exc_info.value, NotFoundAtCommitError)
