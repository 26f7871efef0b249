"""In-Memory Joins — key extraction, indexing, grouping and lost-key policy.

Tests:
    - distinct_keys drops None and keeps first-seen order
    - group_by_key keeps row order inside each group
    - first_by_key keeps the first row per key
    - lookup honours MissingRelationPolicy and ignores None keys
"""

import pytest

from registrar.core.domain_types import EntityKind, MissingRelationPolicy
from registrar.core.errors import MissingRelationError
from registrar.core.join_relations import (
    distinct_keys, first_by_key, group_by_key, index_by_id, lookup, missing_keys,
)
from registrar.core.records import (
    CourseRecord, DepartmentRecord, LinkedRow, StudentRecord, TeacherRecord,
)


def _course(id, teacher_id=None):
    return CourseRecord(id=id, title=f"Course {id}", teacher_id=teacher_id)


def _student(id):
    return StudentRecord(id=id, name=f"Student {id}", email=f"s{id}@example.edu")


# ─── distinct_keys ───────────────────────────────────────────────

def test_distinct_keys_drops_none_and_duplicates():
    courses = [_course(1, 5), _course(2, None), _course(3, 5)]
    assert distinct_keys(courses, lambda c: c.teacher_id) == [5]


def test_distinct_keys_keeps_first_seen_order():
    courses = [_course(1, 9), _course(2, 3), _course(3, 9), _course(4, 1)]
    assert distinct_keys(courses, lambda c: c.teacher_id) == [9, 3, 1]


def test_distinct_keys_empty_input():
    assert distinct_keys([], lambda c: c.teacher_id) == []


def test_distinct_keys_all_none():
    assert distinct_keys([_course(1), _course(2)], lambda c: c.teacher_id) == []


# ─── Indexing and grouping ───────────────────────────────────────

def test_index_by_id_maps_each_row():
    teachers = [TeacherRecord(id=2, name="B"), TeacherRecord(id=1, name="A")]
    index = index_by_id(teachers)
    assert index[1].name == "A"
    assert index[2].name == "B"


def test_group_by_key_preserves_row_order():
    linked = [
        LinkedRow(10, _student(3)),
        LinkedRow(20, _student(1)),
        LinkedRow(10, _student(2)),
    ]
    groups = group_by_key(linked)
    assert [s.id for s in groups[10]] == [3, 2]
    assert [s.id for s in groups[20]] == [1]
    assert 30 not in groups


def test_first_by_key_keeps_first():
    linked = [
        LinkedRow(1, DepartmentRecord(id=7, name="Maths", head_of_department_id=1)),
        LinkedRow(1, DepartmentRecord(id=8, name="Logic", head_of_department_id=1)),
    ]
    assert first_by_key(linked)[1].id == 7


def test_missing_keys_lists_unresolved():
    index = {1: TeacherRecord(id=1, name="A")}
    assert missing_keys([1, 2, 3], index) == [2, 3]
    assert missing_keys([1], index) == []


# ─── lookup ──────────────────────────────────────────────────────

def test_lookup_none_key_is_none_under_both_policies():
    for policy in MissingRelationPolicy:
        assert lookup({}, None, EntityKind.TEACHER, policy) is None


def test_lookup_found_row():
    teacher = TeacherRecord(id=4, name="Hopper")
    found = lookup({4: teacher}, 4, EntityKind.TEACHER, MissingRelationPolicy.FAIL)
    assert found is teacher


def test_lookup_lost_row_dropped():
    assert lookup({}, 4, EntityKind.TEACHER, MissingRelationPolicy.DROP) is None


def test_lookup_lost_row_fails():
    with pytest.raises(MissingRelationError) as exc_info:
        lookup({}, 4, EntityKind.TEACHER, MissingRelationPolicy.FAIL)
    assert exc_info.value.context.entity_kind == "teacher"
    assert exc_info.value.context.entity_id == 4
