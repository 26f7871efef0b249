"""Department ORM — optional one-to-one head teacher.

Invariants:
    - name is unique
    - head_of_department_id is unique across departments (one headship per teacher)
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from registrar.db.base import Base, EntityId


class Department(Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(EntityId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    head_of_department_id: Mapped[int | None] = mapped_column(
        EntityId, ForeignKey("teachers.id"), nullable=True, unique=True,
    )
