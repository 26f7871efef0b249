"""Declarative Base — shared metadata for the four entity tables and course_student.

Invariants:
    - Every ORM model and association Table registers on Base.metadata
    - Alembic and the test fixtures both build the schema from this metadata
    - Surrogate keys and the columns referencing them are 64-bit (EntityId)

Design Decisions:
    - EntityId falls back to INTEGER on SQLite: only "INTEGER PRIMARY KEY"
      aliases the rowid there, so BIGINT keys would never autoincrement
"""

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

EntityId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    pass
