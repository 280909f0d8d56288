"""Problem Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProblemCreate.name: 1-100 chars after strip; description: 1-1000 chars after strip
    - ProblemUpdate: at least one of trick_summary, notes, solved present
    - trick_summary ≤ 50 words, notes ≤ 2000 chars; empty strings stored as None

Design Decisions:
    - model_fields_set distinguishes "omitted" from "explicit null" for partial updates
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from codedeck.schemas.attempt import AttemptResponse

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
TRICK_SUMMARY_MAX_WORDS = 50
NOTES_MAX_CHARACTERS = 2000


def count_words(text: str) -> int:
    return len(text.split())


def _strip_required(v: str, field: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field} cannot be empty or whitespace")
    return v


class ProblemCreate(BaseModel):
    """Problem creation — trims and length-checks name and description."""
    name: str
    description: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = _strip_required(v, "name")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(
                f"name must be {NAME_MAX_LENGTH} characters or less "
                f"(currently {len(v)} characters)",
            )
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = _strip_required(v, "description")
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"description must be {DESCRIPTION_MAX_LENGTH} characters or less "
                f"(currently {len(v)} characters)",
            )
        return v


class ProblemUpdate(BaseModel):
    """Partial update of the flashcard back side and solved flag."""
    trick_summary: str | None = None
    notes: str | None = None
    solved: bool | None = Field(None, strict=True)

    @field_validator("trick_summary")
    @classmethod
    def check_trick_summary(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        words = count_words(v)
        if words > TRICK_SUMMARY_MAX_WORDS:
            raise ValueError(
                f"trick_summary must be {TRICK_SUMMARY_MAX_WORDS} words or less "
                f"(currently {words} words)",
            )
        return v or None

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) > NOTES_MAX_CHARACTERS:
            raise ValueError(
                f"notes must be {NOTES_MAX_CHARACTERS} characters or less "
                f"(currently {len(v)} characters)",
            )
        return v or None

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set & {"trick_summary", "notes", "solved"}:
            raise ValueError(
                "At least one field (trick_summary, notes, or solved) must be provided",
            )
        if "solved" in self.model_fields_set and self.solved is None:
            raise ValueError("solved must be a boolean value")
        return self

    def changes(self) -> dict:
        return {name: getattr(self, name) for name in self.model_fields_set}


class ProblemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    trick_summary: str | None
    notes: str | None
    solved: bool
    created_at: datetime
    updated_at: datetime
    attempts: list[AttemptResponse] = []
