"""View Schemas — the nested, fully joined shapes returned by the API.

Invariants:
    - Nested references never nest further than one level (no cycles)
    - Unset to-one relations are None; unset to-many relations are []

Design Decisions:
    - Separate *Ref models for embedded entities: a course inside a student
      view carries its teacher but not its roster (ADR: bounded payloads)
"""

from pydantic import BaseModel


# ─── Embedded references ─────────────────────────────────────────

class TeacherRef(BaseModel):
    id: int
    name: str


class StudentRef(BaseModel):
    id: int
    name: str
    email: str


class DepartmentRef(BaseModel):
    id: int
    name: str


class CourseRef(BaseModel):
    """Course as seen from its teacher: no teacher, no roster."""
    id: int
    title: str


class EnrolledCourse(CourseRef):
    """Course as seen from an enrolled student: carries its teacher."""
    teacher: TeacherRef | None = None


# ─── Root views ──────────────────────────────────────────────────

class CourseView(BaseModel):
    """Course with its teacher and roster."""
    id: int
    title: str
    teacher: TeacherRef | None = None
    students: list[StudentRef] = []


class StudentView(BaseModel):
    """Student with every enrolled course, each carrying its teacher."""
    id: int
    name: str
    email: str
    courses: list[EnrolledCourse] = []


class TeacherView(BaseModel):
    """Teacher with taught courses and headed department."""
    id: int
    name: str
    courses: list[CourseRef] = []
    department: DepartmentRef | None = None


class DepartmentView(BaseModel):
    """Department with its head."""
    id: int
    name: str
    head_of_department: TeacherRef | None = None


View = CourseView | StudentView | TeacherView | DepartmentView
