"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All models register on a single Base.metadata

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
