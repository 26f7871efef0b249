"""Entity Schemas — Pydantic models for single-row create/update and flat responses.

Invariants:
    - Text fields are stripped and must be non-empty after stripping
    - *Update models are partial: only fields sent are applied (PATCH);
      an explicit null is a validation error, never a write of NULL
    - Relationship columns are not writable here; association endpoints own them

Design Decisions:
    - Annotated StringConstraints over per-model validators: one definition of "a name"
    - Flat responses mirror core/records.py so create can return without assembly
"""

from typing import Annotated

from pydantic import BaseModel, StringConstraints, field_validator

Text = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
]
Email = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
    ),
]


class PartialUpdate(BaseModel):
    """PATCH body: omitted fields are left alone, explicit nulls are refused."""

    @field_validator("*", mode="before")
    @classmethod
    def _refuse_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


# ─── Student ─────────────────────────────────────────────────────

class StudentCreate(BaseModel):
    name: Text
    email: Email


class StudentUpdate(PartialUpdate):
    name: Text | None = None
    email: Email | None = None


class StudentResponse(BaseModel):
    id: int
    name: str
    email: str


# ─── Course ──────────────────────────────────────────────────────

class CourseCreate(BaseModel):
    title: Text


class CourseUpdate(PartialUpdate):
    title: Text | None = None


class CourseResponse(BaseModel):
    id: int
    title: str
    teacher_id: int | None = None


# ─── Teacher ─────────────────────────────────────────────────────

class TeacherCreate(BaseModel):
    name: Text


class TeacherUpdate(PartialUpdate):
    name: Text | None = None


class TeacherResponse(BaseModel):
    id: int
    name: str


# ─── Department ──────────────────────────────────────────────────

class DepartmentCreate(BaseModel):
    name: Text


class DepartmentUpdate(PartialUpdate):
    name: Text | None = None


class DepartmentResponse(BaseModel):
    id: int
    name: str
    head_of_department_id: int | None = None
