"""Database Package — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite driver by default (single-user tool, one file on disk);
      asyncpg when DATABASE_URL points at PostgreSQL
"""
