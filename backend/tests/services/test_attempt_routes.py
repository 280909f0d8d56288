"""Attempt Routes — record code through the API and read it back at its commit.

Invariants:
    - POST returns 201 with the commit hash even when the push fails
    - GET /attempts/{id}/code returns the code of THAT attempt, not the latest
    - Recorder configuration errors surface as 400 before anything is written
"""

from sqlalchemy import select

from codedeck.api.dependencies import get_attempt_recorder
from codedeck.core.recorder_config import RecorderConfig
from codedeck.infrastructure.git_cli import SubprocessGitBackend
from codedeck.main import app
from codedeck.models.attempt import Attempt
from codedeck.services.attempt_recorder import AttemptRecorder

from tests.git_helpers import run_git


async def _problem(client, name="Two Sum"):
    res = await client.post(
        "/api/v1/problems", json={"name": name, "description": "desc"},
    )
    return res.json()["id"]


async def test_record_attempt_commits_and_stores_row(client, git_repo, test_db):
    problem_id = await _problem(client)

    res = await client.post(
        f"/api/v1/problems/{problem_id}/attempts",
        json={"code": "print('hi')\n", "note": "first try"},
    )

    assert res.status_code == 201
    body = res.json()
    assert body["commit_hash"] == run_git(git_repo, "rev-parse", "HEAD")
    assert body["attempt"]["file_path"] == f"attempts/problem-{problem_id}/attempt.py"
    assert body["attempt"]["note"] == "first try"
    # No remote configured on the test repository
    assert body["push"]["status"] == "failed"

    rows = (await test_db.execute(select(Attempt))).scalars().all()
    assert [r.commit_hash for r in rows] == [body["commit_hash"]]


async def test_each_attempt_reads_back_its_own_code(client):
    problem_id = await _problem(client)
    first = (await client.post(
        f"/api/v1/problems/{problem_id}/attempts", json={"code": "print(1)"},
    )).json()
    second = (await client.post(
        f"/api/v1/problems/{problem_id}/attempts", json={"code": "print(2)"},
    )).json()

    res1 = await client.get(f"/api/v1/attempts/{first['attempt']['id']}/code")
    res2 = await client.get(f"/api/v1/attempts/{second['attempt']['id']}/code")

    assert res1.json()["code"] == "print(1)"
    assert res2.json()["code"] == "print(2)"
    assert res1.json()["problem"] == {"id": problem_id, "name": "Two Sum"}


async def test_list_attempts_newest_first(client):
    problem_id = await _problem(client)
    for code in ("a = 1", "a = 2"):
        await client.post(
            f"/api/v1/problems/{problem_id}/attempts", json={"code": code},
        )

    res = await client.get(f"/api/v1/problems/{problem_id}/attempts")

    ids = [a["id"] for a in res.json()]
    assert len(ids) == 2
    assert ids == sorted(ids, reverse=True)

    problem = (await client.get(f"/api/v1/problems/{problem_id}")).json()
    assert [a["id"] for a in problem["attempts"]] == ids


async def test_blank_code_rejected(client, git_repo):
    problem_id = await _problem(client)
    res = await client.post(
        f"/api/v1/problems/{problem_id}/attempts", json={"code": "   "},
    )
    assert res.status_code == 400
    assert not (git_repo / "attempts").exists()


async def test_note_too_long_rejected(client):
    problem_id = await _problem(client)
    res = await client.post(
        f"/api/v1/problems/{problem_id}/attempts",
        json={"code": "x = 1", "note": "n" * 501},
    )
    assert res.status_code == 400


async def test_attempt_for_unknown_problem_is_404(client):
    res = await client.post("/api/v1/problems/77/attempts", json={"code": "x = 1"})
    assert res.status_code == 404


async def test_unknown_attempt_code_is_404(client):
    res = await client.get("/api/v1/attempts/123/code")
    assert res.status_code == 404


async def test_missing_configuration_is_400(client, git_repo):
    problem_id = await _problem(client)
    unconfigured = AttemptRecorder(
        RecorderConfig(
            auth_token="ghp-placeholder", repo_path=str(git_repo),
            author_name="Test Coder", author_email="coder@codedeck.test",
        ),
        SubprocessGitBackend(),
    )
    app.dependency_overrides[get_attempt_recorder] = lambda: unconfigured

    res = await client.post(
        f"/api/v1/problems/{problem_id}/attempts", json={"code": "x = 1"},
    )

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "CONFIGURATION_ERROR"
    assert "GITHUB_PAT" in error["message"]
    assert not (git_repo / "attempts").exists()


async def test_code_at_commit_missing_path_is_404(client, test_db):
    problem_id = await _problem(client)
    created = (await client.post(
        f"/api/v1/problems/{problem_id}/attempts", json={"code": "x = 1"},
    )).json()
    stray = Attempt(
        problem_id=problem_id, commit_hash=created["commit_hash"],
        file_path="attempts/problem-999/attempt.py",
    )
    test_db.add(stray)
    await test_db.commit()
    await test_db.refresh(stray)

    res = await client.get(f"/api/v1/attempts/{stray.id}/code")

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND_AT_COMMIT"


async def test_code_for_commit_missing_from_history_is_500(client, test_db):
    problem_id = await _problem(client)
    await client.post(
        f"/api/v1/problems/{problem_id}/attempts", json={"code": "x = 1"},
    )
    lost = Attempt(
        problem_id=problem_id, commit_hash="f" * 40,
        file_path=f"attempts/problem-{problem_id}/attempt.py",
    )
    test_db.add(lost)
    await test_db.commit()
    await test_db.refresh(lost)

    res = await client.get(f"/api/v1/attempts/{lost.id}/code")

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "IO_FAILURE"
