"""Root conftest — shared test configuration and git working-tree fixtures.

Invariants:
    - Tests never see a real GitHub token or a developer's .env git settings
    - git_repo is a fresh repository on branch main with no commits
    - Tests needing the git executable are skipped when it is not installed
"""

import os
import shutil

import pytest

from codedeck.core.recorder_config import RecorderConfig
from tests.git_helpers import TEST_TOKEN, run_git

# Ensure tests don't accidentally use real credentials
os.environ.setdefault("GITHUB_PAT", "ghp-test-placeholder")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)


@pytest.fixture
def git_repo(tmp_path):
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    repo = tmp_path / "solutions"
    repo.mkdir()
    run_git(repo, "init", "--quiet")
    run_git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    run_git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def recorder_config(git_repo) -> RecorderConfig:
    return RecorderConfig(
        auth_token=TEST_TOKEN,
        repo_path=str(git_repo),
        author_name="Test Coder",
        author_email="coder@codedeck.test",
        push_timeout_seconds=15,
    )
