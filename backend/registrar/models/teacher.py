"""Teacher ORM — a teacher owns courses and at most one department headship.

Invariants:
    - Owned courses and headship live on the other tables (courses.teacher_id,
      departments.head_of_department_id); this table has no foreign keys
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from registrar.db.base import Base, EntityId


class Teacher(Base):
    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(EntityId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
