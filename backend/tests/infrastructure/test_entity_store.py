"""SQL Entity Store — batched lookups and edge writes against a real database.

Tests:
    - get_many_by_ids returns only existing rows, one statement per call
    - get_many_by_foreign_key tags every row with the key it matched
    - exists_by_id for present and absent ids
    - write_relationship updates FK columns and inserts join rows
    - A duplicate enrollment surfaces as ConstraintViolationError
    - The SQL store drives the assembler end to end
"""

import pytest

from registrar.core.domain_types import EdgeKind, EntityKind, Relation
from registrar.core.errors import ConstraintViolationError
from registrar.core.records import CourseRecord, StudentRecord
from registrar.infrastructure.entity_store import SqlEntityStore
from registrar.services.graph_assembler import GraphAssembler


@pytest.fixture
def sql_store(db_manager):
    return SqlEntityStore(db_manager)


# ─── Reads ───────────────────────────────────────────────────────

async def test_get_by_id(sql_store, seed):
    teacher = await sql_store.get_by_id(EntityKind.TEACHER, seed["turing"])
    assert teacher.name == "Alan Turing"
    assert await sql_store.get_by_id(EntityKind.TEACHER, 999) is None


async def test_get_many_by_ids_skips_absent(sql_store, seed):
    rows = await sql_store.get_many_by_ids(
        EntityKind.TEACHER, [seed["hopper"], 999, seed["turing"]],
    )
    assert {r.id for r in rows} == {seed["turing"], seed["hopper"]}


async def test_get_many_by_ids_returns_records(sql_store, seed):
    (course,) = await sql_store.get_many_by_ids(
        EntityKind.COURSE, [seed["algorithms"]],
    )
    assert course == CourseRecord(
        id=seed["algorithms"], title="Algorithms", teacher_id=seed["turing"],
    )


async def test_courses_by_teacher(sql_store, seed):
    linked = await sql_store.get_many_by_foreign_key(
        Relation.COURSES_BY_TEACHER, [seed["turing"], seed["hopper"]],
    )
    assert {item.key for item in linked} == {seed["turing"]}
    assert sorted(item.row.title for item in linked) == ["Algorithms", "Compilers"]


async def test_students_by_course(sql_store, seed):
    linked = await sql_store.get_many_by_foreign_key(
        Relation.STUDENTS_BY_COURSE, [seed["algorithms"], seed["databases"]],
    )
    pairs = {(item.key, item.row.name) for item in linked}
    assert pairs == {
        (seed["algorithms"], "Ada"),
        (seed["algorithms"], "Grace"),
        (seed["databases"], "Ada"),
    }
    assert all(isinstance(item.row, StudentRecord) for item in linked)


async def test_courses_by_student(sql_store, seed):
    linked = await sql_store.get_many_by_foreign_key(
        Relation.COURSES_BY_STUDENT, [seed["ada"], seed["linus"]],
    )
    assert {item.key for item in linked} == {seed["ada"]}
    assert sorted(item.row.title for item in linked) == ["Algorithms", "Databases"]


async def test_departments_by_head(sql_store, seed):
    linked = await sql_store.get_many_by_foreign_key(
        Relation.DEPARTMENTS_BY_HEAD, [seed["turing"], seed["hopper"]],
    )
    assert [(item.key, item.row.name) for item in linked] == [
        (seed["turing"], "Mathematics"),
    ]


async def test_exists_by_id(sql_store, seed):
    assert await sql_store.exists_by_id(EntityKind.STUDENT, seed["ada"])
    assert not await sql_store.exists_by_id(EntityKind.STUDENT, 999)


# ─── Writes ──────────────────────────────────────────────────────

async def test_write_course_teacher(sql_store, seed):
    await sql_store.write_relationship(
        EdgeKind.COURSE_TEACHER, seed["databases"], seed["hopper"],
    )
    course = await sql_store.get_by_id(EntityKind.COURSE, seed["databases"])
    assert course.teacher_id == seed["hopper"]


async def test_write_department_head(sql_store, seed):
    await sql_store.write_relationship(
        EdgeKind.DEPARTMENT_HEAD, seed["physics"], seed["hopper"],
    )
    department = await sql_store.get_by_id(EntityKind.DEPARTMENT, seed["physics"])
    assert department.head_of_department_id == seed["hopper"]


async def test_write_enrollment(sql_store, seed):
    await sql_store.write_relationship(
        EdgeKind.STUDENT_COURSE, seed["linus"], seed["compilers"],
    )
    linked = await sql_store.get_many_by_foreign_key(
        Relation.COURSES_BY_STUDENT, [seed["linus"]],
    )
    assert [item.row.title for item in linked] == ["Compilers"]


async def test_duplicate_enrollment_is_constraint_violation(sql_store, seed):
    with pytest.raises(ConstraintViolationError):
        await sql_store.write_relationship(
            EdgeKind.STUDENT_COURSE, seed["ada"], seed["algorithms"],
        )


async def test_second_headship_is_constraint_violation(sql_store, seed):
    with pytest.raises(ConstraintViolationError):
        await sql_store.write_relationship(
            EdgeKind.DEPARTMENT_HEAD, seed["physics"], seed["turing"],
        )


# ─── End to end ──────────────────────────────────────────────────

async def test_assembler_over_sql_store(sql_store, seed):
    assembler = GraphAssembler(sql_store)
    students = await sql_store.get_many_by_ids(
        EntityKind.STUDENT, [seed["ada"], seed["grace"], seed["linus"]],
    )
    by_name = {s.name: s for s in students}
    roots = [by_name["Linus"], by_name["Ada"], by_name["Grace"]]

    views = await assembler.assemble_many(EntityKind.STUDENT, roots)

    assert [v.name for v in views] == ["Linus", "Ada", "Grace"]
    assert views[0].courses == []
    ada_courses = {c.title: c for c in views[1].courses}
    assert ada_courses["Algorithms"].teacher.name == "Alan Turing"
    assert ada_courses["Databases"].teacher is None
    assert [c.title for c in views[2].courses] == ["Algorithms"]
