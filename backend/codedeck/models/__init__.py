"""ORM Models — SQLAlchemy declarative models for problems and attempts.

Invariants:
    - All models inherit from Base (db/base.py)
    - Problem is the aggregate root; attempts are deleted with their problem

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from codedeck.models.problem import Problem  # noqa: F401
from codedeck.models.attempt import Attempt  # noqa: F401
