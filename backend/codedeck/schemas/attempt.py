"""Attempt Schemas — submission input and attempt/code responses.

Invariants:
    - AttemptCreate.code: non-empty after strip (stored stripped)
    - AttemptCreate.note: ≤ 500 chars after strip; empty → None
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from codedeck.core.domain_types import PushStatus

NOTE_MAX_LENGTH = 500


class AttemptCreate(BaseModel):
    code: str
    note: str | None = None

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("code is required and must be a non-empty string")
        return v

    @field_validator("note")
    @classmethod
    def check_note(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) > NOTE_MAX_LENGTH:
            raise ValueError(
                f"note must be {NOTE_MAX_LENGTH} characters or less "
                f"(currently {len(v)} characters)",
            )
        return v or None


class AttemptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    problem_id: int
    timestamp: datetime
    commit_hash: str
    note: str | None
    file_path: str


class PushResponse(BaseModel):
    status: PushStatus
    detail: str | None = None


class AttemptCreatedResponse(BaseModel):
    attempt: AttemptResponse
    commit_hash: str
    push: PushResponse


class AttemptCodeResponse(BaseModel):
    code: str
    file_path: str
    attempt: AttemptResponse
    problem: dict
