"""SQL Entity Store — batched lookups and relationship writes over SQLAlchemy.

Invariants:
    - One statement per call: batched lookups use a single IN (...) predicate
    - Each call opens and closes its own session, so concurrent calls from a
      fan-out never share a connection
    - Results are flat records (core/records.py), never live ORM instances
    - Rows come back ordered by id; callers must not rely on it for joins

Design Decisions:
    - Configuration (the session manager) is passed in, no module-level lookups
    - Join-table lookups select the matching key alongside the row so the
      assembler can group without a second query
"""

import logging
from collections.abc import Collection

from sqlalchemy import insert, select, update

from registrar.core.domain_types import EdgeKind, EntityKind, Relation
from registrar.core.records import (
    CourseRecord, DepartmentRecord, LinkedRow, Record, StudentRecord, TeacherRecord,
)
from registrar.infrastructure.database import DatabaseSessionManager
from registrar.models import Course, Department, Student, Teacher, course_student

logger = logging.getLogger(__name__)

MODELS = {
    EntityKind.STUDENT: Student,
    EntityKind.COURSE: Course,
    EntityKind.TEACHER: Teacher,
    EntityKind.DEPARTMENT: Department,
}


def to_record(obj: Student | Course | Teacher | Department) -> Record:
    """Copy an ORM instance into its immutable record."""
    if isinstance(obj, Student):
        return StudentRecord(id=obj.id, name=obj.name, email=obj.email)
    if isinstance(obj, Course):
        return CourseRecord(id=obj.id, title=obj.title, teacher_id=obj.teacher_id)
    if isinstance(obj, Teacher):
        return TeacherRecord(id=obj.id, name=obj.name)
    return DepartmentRecord(
        id=obj.id, name=obj.name,
        head_of_department_id=obj.head_of_department_id,
    )


class SqlEntityStore:
    """EntityStore implementation backed by DatabaseSessionManager."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager

    async def get_by_id(self, kind: EntityKind, entity_id: int) -> Record | None:
        async with self.manager.session() as db:
            obj = await db.get(MODELS[kind], entity_id)
            return to_record(obj) if obj is not None else None

    async def get_many_by_ids(
        self, kind: EntityKind, ids: Collection[int],
    ) -> list[Record]:
        model = MODELS[kind]
        async with self.manager.session() as db:
            result = await db.execute(
                select(model).where(model.id.in_(list(ids))).order_by(model.id),
            )
            return [to_record(obj) for obj in result.scalars()]

    async def get_many_by_foreign_key(
        self, relation: Relation, keys: Collection[int],
    ) -> list[LinkedRow]:
        stmt = _foreign_key_query(relation, list(keys))
        async with self.manager.session() as db:
            result = await db.execute(stmt)
            return [LinkedRow(key=key, row=to_record(obj)) for key, obj in result.all()]

    async def exists_by_id(self, kind: EntityKind, entity_id: int) -> bool:
        model = MODELS[kind]
        async with self.manager.session() as db:
            result = await db.execute(
                select(model.id).where(model.id == entity_id).limit(1),
            )
            return result.scalar_one_or_none() is not None

    async def write_relationship(
        self, edge: EdgeKind, owner_id: int, target_id: int,
    ) -> None:
        async with self.manager.session() as db:
            await db.execute(_edge_statement(edge, owner_id, target_id))
            await db.commit()
        logger.debug(
            f"Wrote {edge.value} ({owner_id}, {target_id})",
            extra={"edge_kind": edge.value, "entity_id": owner_id},
        )


def _foreign_key_query(relation: Relation, keys: list[int]):
    if relation is Relation.COURSES_BY_TEACHER:
        return (
            select(Course.teacher_id, Course)
            .where(Course.teacher_id.in_(keys))
            .order_by(Course.id)
        )
    if relation is Relation.DEPARTMENTS_BY_HEAD:
        return (
            select(Department.head_of_department_id, Department)
            .where(Department.head_of_department_id.in_(keys))
            .order_by(Department.id)
        )
    if relation is Relation.STUDENTS_BY_COURSE:
        return (
            select(course_student.c.course_id, Student)
            .join(course_student, Student.id == course_student.c.student_id)
            .where(course_student.c.course_id.in_(keys))
            .order_by(Student.id)
        )
    return (
        select(course_student.c.student_id, Course)
        .join(course_student, Course.id == course_student.c.course_id)
        .where(course_student.c.student_id.in_(keys))
        .order_by(Course.id)
    )


def _edge_statement(edge: EdgeKind, owner_id: int, target_id: int):
    if edge is EdgeKind.COURSE_TEACHER:
        return update(Course).where(Course.id == owner_id).values(teacher_id=target_id)
    if edge is EdgeKind.DEPARTMENT_HEAD:
        return (
            update(Department)
            .where(Department.id == owner_id)
            .values(head_of_department_id=target_id)
        )
    return insert(course_student).values(course_id=target_id, student_id=owner_id)
