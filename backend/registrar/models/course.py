"""Course ORM — many-to-one to Teacher through a nullable teacher_id.

Invariants:
    - title is unique
    - teacher_id, when set, references teachers.id
    - No ON DELETE rule: deleting a referenced teacher is refused by the store
      (ConstraintViolation); where FKs are not enforced the dangling id is
      rendered as "no teacher" by the assembler
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from registrar.db.base import Base, EntityId


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(EntityId, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    teacher_id: Mapped[int | None] = mapped_column(
        EntityId, ForeignKey("teachers.id"), nullable=True, index=True,
    )
