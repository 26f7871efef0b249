"""Academic schema — teachers, courses, students, departments, course_student.

Revision ID: 001_academic_schema
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_academic_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "teachers",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
    )

    op.create_table(
        "courses",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False, unique=True),
        sa.Column("teacher_id", sa.BigInteger, sa.ForeignKey("teachers.id"), nullable=True),
    )
    op.create_index("ix_courses_teacher_id", "courses", ["teacher_id"])

    op.create_table(
        "students",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
    )

    op.create_table(
        "departments",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column(
            "head_of_department_id", sa.BigInteger,
            sa.ForeignKey("teachers.id"), nullable=True, unique=True,
        ),
    )

    op.create_table(
        "course_student",
        sa.Column(
            "course_id", sa.BigInteger,
            sa.ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "student_id", sa.BigInteger,
            sa.ForeignKey("students.id", ondelete="CASCADE"), primary_key=True,
        ),
    )
    op.create_index("ix_course_student_student_id", "course_student", ["student_id"])


def downgrade() -> None:
    op.drop_index("ix_course_student_student_id", table_name="course_student")
    op.drop_table("course_student")
    op.drop_table("departments")
    op.drop_table("students")
    op.drop_index("ix_courses_teacher_id", table_name="courses")
    op.drop_table("courses")
    op.drop_table("teachers")
