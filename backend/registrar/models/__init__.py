"""ORM Models — SQLAlchemy declarative models for the academic-records tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relationships are stored as plain foreign-key columns; nothing here
      loads related rows (joins belong to the graph assembler)

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from registrar.models.teacher import Teacher  # noqa: F401
from registrar.models.course import Course  # noqa: F401
from registrar.models.student import Student, course_student  # noqa: F401
from registrar.models.department import Department  # noqa: F401
