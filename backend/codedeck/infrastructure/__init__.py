"""Infrastructure Layer — external process/database clients and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; it never imports services/ or api/
    - All external calls wrapped with timeout/error mapping onto core/errors.py

Design Decisions:
    - Thin wrappers over raw tools (git CLI, SQLAlchemy)
"""
