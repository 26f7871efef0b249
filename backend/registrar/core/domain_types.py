"""Domain Types — identity types and closed enums for the academic-records domain.

Invariants:
    - StudentId, CourseId, TeacherId, DepartmentId wrap int surrogate keys
    - EntityKind, Relation, EdgeKind are closed sets; no runtime discovery
    - Every Relation and EdgeKind names the entity kinds on both of its ends

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and match path/env values without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

StudentId = NewType("StudentId", int)
CourseId = NewType("CourseId", int)
TeacherId = NewType("TeacherId", int)
DepartmentId = NewType("DepartmentId", int)


# ─── Enums ───────────────────────────────────────────────────────

class EntityKind(str, Enum):
    """The four stored entity kinds."""
    STUDENT = "student"
    COURSE = "course"
    TEACHER = "teacher"
    DEPARTMENT = "department"


class Relation(str, Enum):
    """Foreign-key paths the store can resolve in one batched call.

    The value reads "<fetched kind>_by_<key kind>": COURSES_BY_TEACHER returns
    courses whose teacher_id is in the key set, each tagged with that key.
    """
    COURSES_BY_TEACHER = "courses_by_teacher"
    COURSES_BY_STUDENT = "courses_by_student"
    STUDENTS_BY_COURSE = "students_by_course"
    DEPARTMENTS_BY_HEAD = "departments_by_head"

    @property
    def fetched_kind(self) -> EntityKind:
        return _RELATION_KINDS[self][0]

    @property
    def key_kind(self) -> EntityKind:
        return _RELATION_KINDS[self][1]


_RELATION_KINDS: dict[Relation, tuple[EntityKind, EntityKind]] = {
    Relation.COURSES_BY_TEACHER: (EntityKind.COURSE, EntityKind.TEACHER),
    Relation.COURSES_BY_STUDENT: (EntityKind.COURSE, EntityKind.STUDENT),
    Relation.STUDENTS_BY_COURSE: (EntityKind.STUDENT, EntityKind.COURSE),
    Relation.DEPARTMENTS_BY_HEAD: (EntityKind.DEPARTMENT, EntityKind.TEACHER),
}


class EdgeKind(str, Enum):
    """Mutable association edges changed by the association mutator."""
    COURSE_TEACHER = "course_teacher"
    DEPARTMENT_HEAD = "department_head"
    STUDENT_COURSE = "student_course"

    @property
    def owner_kind(self) -> EntityKind:
        return _EDGE_KINDS[self][0]

    @property
    def target_kind(self) -> EntityKind:
        return _EDGE_KINDS[self][1]


_EDGE_KINDS: dict[EdgeKind, tuple[EntityKind, EntityKind]] = {
    EdgeKind.COURSE_TEACHER: (EntityKind.COURSE, EntityKind.TEACHER),
    EdgeKind.DEPARTMENT_HEAD: (EntityKind.DEPARTMENT, EntityKind.TEACHER),
    EdgeKind.STUDENT_COURSE: (EntityKind.STUDENT, EntityKind.COURSE),
}


class MissingRelationPolicy(str, Enum):
    """What the assembler does when a referenced row is absent from a batch.

    DROP leaves the relation unset (a vanished teacher renders as no teacher).
    FAIL raises MissingRelationError and aborts the whole assembly.
    """
    DROP = "drop"
    FAIL = "fail"
