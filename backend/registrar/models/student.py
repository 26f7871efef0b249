"""Student ORM and the course_student join table.

Invariants:
    - email is unique
    - course_student has no attributes of its own; (course_id, student_id)
      is its primary key, so a duplicate enrollment is an IntegrityError
    - Join rows follow their student or course on delete (ON DELETE CASCADE)
"""

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column

from registrar.db.base import Base, EntityId


course_student = Table(
    "course_student",
    Base.metadata,
    Column(
        "course_id", EntityId,
        ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "student_id", EntityId,
        ForeignKey("students.id", ondelete="CASCADE"), primary_key=True,
        index=True,
    ),
)


class Student(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(EntityId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
