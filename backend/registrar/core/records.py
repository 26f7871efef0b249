"""Flat Records — the store's row shapes, decoupled from the ORM.

Invariants:
    - Records are immutable and carry only their own table's columns
    - Foreign keys are plain ints (or None), never loaded objects
    - LinkedRow.key is the foreign-key value the row was found through

Design Decisions:
    - Frozen dataclasses over ORM instances: the assembler never touches a
      live session, so lazy loading can never fire inside a join
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StudentRecord:
    id: int
    name: str
    email: str


@dataclass(frozen=True)
class CourseRecord:
    id: int
    title: str
    teacher_id: int | None = None


@dataclass(frozen=True)
class TeacherRecord:
    id: int
    name: str


@dataclass(frozen=True)
class DepartmentRecord:
    id: int
    name: str
    head_of_department_id: int | None = None


Record = StudentRecord | CourseRecord | TeacherRecord | DepartmentRecord


@dataclass(frozen=True)
class LinkedRow:
    """A row returned by a foreign-key lookup, tagged with the matching key.

    For students found through course_student, key is the course id; for
    courses found by teacher, key is the teacher id.
    """
    key: int
    row: Record
