"""Batch Graph Assembler — rebuilds nested views for many roots in few round trips.

Invariants:
    - Empty input → [] with zero store calls
    - At most one store call per related-data kind, independent of root count
    - Independent batches run concurrently (fan_out); all-or-nothing
    - Output is one view per root, in input order
    - Null foreign keys never reach the store; an empty key set skips its call
    - A referenced row missing from its batch follows MissingRelationPolicy

Design Decisions:
    - One plan method per root kind, dispatched through a fixed dict
    - Student plan runs two stages: teacher ids are only known once the
      enrolled courses have been fetched
    - Joins happen in core/join_relations.py; this module only orchestrates IO
"""

import logging
from collections.abc import Sequence

from registrar.core.domain_types import EntityKind, MissingRelationPolicy, Relation
from registrar.core.join_relations import (
    distinct_keys, first_by_key, group_by_key, index_by_id, lookup, missing_keys,
)
from registrar.core.records import (
    CourseRecord, DepartmentRecord, LinkedRow, Record, StudentRecord, TeacherRecord,
)
from registrar.core.repository_protocols import EntityStore
from registrar.schemas.views import View
from registrar.services.concurrency import fan_out, with_deadline
from registrar.services.view_mapper import (
    to_course_view, to_department_view, to_enrolled_course, to_student_view,
    to_teacher_view,
)

logger = logging.getLogger(__name__)


class GraphAssembler:
    """Joins related rows onto root entities with batched, concurrent fetches."""

    def __init__(
        self,
        store: EntityStore,
        policy: MissingRelationPolicy = MissingRelationPolicy.DROP,
        timeout_seconds: float | None = None,
    ):
        self.store = store
        self.policy = policy
        self.timeout_seconds = timeout_seconds
        self._plans = {
            EntityKind.COURSE: self._assemble_courses,
            EntityKind.STUDENT: self._assemble_students,
            EntityKind.TEACHER: self._assemble_teachers,
            EntityKind.DEPARTMENT: self._assemble_departments,
        }

    async def assemble_many(
        self, kind: EntityKind, roots: Sequence[Record],
    ) -> list[View]:
        """Fully joined views for roots of one kind, same order as given."""
        if not roots:
            return []
        return await with_deadline(self._plans[kind](roots), self.timeout_seconds)

    async def assemble_one(self, kind: EntityKind, root: Record) -> View:
        views = await self.assemble_many(kind, [root])
        return views[0]

    # ─── Plans ───────────────────────────────────────────────────

    async def _assemble_courses(self, courses: Sequence[CourseRecord]) -> list[View]:
        teacher_ids = distinct_keys(courses, lambda c: c.teacher_id)
        course_ids = distinct_keys(courses, lambda c: c.id)
        teachers, enrolled = await fan_out(
            self._fetch_by_ids(EntityKind.TEACHER, teacher_ids),
            self._fetch_linked(Relation.STUDENTS_BY_COURSE, course_ids),
        )
        teacher_index = self._index_checked(EntityKind.TEACHER, teacher_ids, teachers)
        roster = group_by_key(enrolled)
        return [
            to_course_view(
                course,
                teacher=lookup(
                    teacher_index, course.teacher_id, EntityKind.TEACHER, self.policy,
                ),
                students=roster.get(course.id, []),
            )
            for course in courses
        ]

    async def _assemble_students(self, students: Sequence[StudentRecord]) -> list[View]:
        student_ids = distinct_keys(students, lambda s: s.id)
        (enrollments,) = await fan_out(
            self._fetch_linked(Relation.COURSES_BY_STUDENT, student_ids),
        )
        courses_by_student = group_by_key(enrollments)
        teacher_ids = distinct_keys(
            (item.row for item in enrollments), lambda c: c.teacher_id,
        )
        (teachers,) = await fan_out(
            self._fetch_by_ids(EntityKind.TEACHER, teacher_ids),
        )
        teacher_index = self._index_checked(EntityKind.TEACHER, teacher_ids, teachers)
        return [
            to_student_view(
                student,
                courses=[
                    to_enrolled_course(
                        course,
                        lookup(
                            teacher_index, course.teacher_id,
                            EntityKind.TEACHER, self.policy,
                        ),
                    )
                    for course in courses_by_student.get(student.id, [])
                ],
            )
            for student in students
        ]

    async def _assemble_teachers(self, teachers: Sequence[TeacherRecord]) -> list[View]:
        teacher_ids = distinct_keys(teachers, lambda t: t.id)
        taught, headed = await fan_out(
            self._fetch_linked(Relation.COURSES_BY_TEACHER, teacher_ids),
            self._fetch_linked(Relation.DEPARTMENTS_BY_HEAD, teacher_ids),
        )
        courses_by_teacher = group_by_key(taught)
        department_by_head = first_by_key(headed)
        return [
            to_teacher_view(
                teacher,
                courses=courses_by_teacher.get(teacher.id, []),
                department=department_by_head.get(teacher.id),
            )
            for teacher in teachers
        ]

    async def _assemble_departments(
        self, departments: Sequence[DepartmentRecord],
    ) -> list[View]:
        head_ids = distinct_keys(departments, lambda d: d.head_of_department_id)
        (heads,) = await fan_out(self._fetch_by_ids(EntityKind.TEACHER, head_ids))
        head_index = self._index_checked(EntityKind.TEACHER, head_ids, heads)
        return [
            to_department_view(
                department,
                head=lookup(
                    head_index, department.head_of_department_id,
                    EntityKind.TEACHER, self.policy,
                ),
            )
            for department in departments
        ]

    # ─── Batched fetches ─────────────────────────────────────────

    async def _fetch_by_ids(self, kind: EntityKind, ids: list[int]) -> list[Record]:
        if not ids:
            return []
        logger.debug(
            f"Batch fetch {kind.value} by id",
            extra={"entity_kind": kind.value, "key_count": len(ids)},
        )
        return await self.store.get_many_by_ids(kind, ids)

    async def _fetch_linked(self, relation: Relation, keys: list[int]) -> list[LinkedRow]:
        if not keys:
            return []
        logger.debug(
            f"Batch fetch {relation.value}",
            extra={"entity_kind": relation.fetched_kind.value, "key_count": len(keys)},
        )
        return await self.store.get_many_by_foreign_key(relation, keys)

    def _index_checked(
        self, kind: EntityKind, requested: list[int], rows: list[Record],
    ) -> dict[int, Record]:
        index = index_by_id(rows)
        lost = missing_keys(requested, index)
        if lost and self.policy is MissingRelationPolicy.DROP:
            logger.warning(
                f"Dropping {len(lost)} lost {kind.value} relation(s): {lost}",
                extra={"entity_kind": kind.value, "key_count": len(lost)},
            )
        return index
