"""Problem ORM — a coding-practice problem tracked as a flashcard.

Invariants:
    - name and description are non-nullable, trimmed at the API boundary
    - trick_summary / notes are nullable (empty input stored as NULL)
    - updated_at bumped on edits and on every new attempt

Design Decisions:
    - Integer autoincrement id: attempt files are laid out by it (attempts/problem-{id}/)
    - cascade delete for attempts: a problem owns its attempt records
      (the git history itself is never touched)
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from codedeck.db.base import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Problem(Base):
    """Problem aggregate root — owns its attempts."""
    __tablename__ = "problems"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    trick_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    solved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now,
    )

    attempts: Mapped[list["Attempt"]] = relationship(
        "Attempt", back_populates="problem",
        cascade="all, delete-orphan",
        lazy="selectin", order_by="Attempt.id.desc()",
    )
