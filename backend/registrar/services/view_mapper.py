"""View Mapper — one pure conversion function per entity kind.

Invariants:
    - Order of list inputs is preserved in the output
    - None relations stay None; None lists become []
    - No IO, no lookups: everything needed is passed in

Design Decisions:
    - Fixed functions over a reflective mapper: the set of kinds is closed
"""

from collections.abc import Iterable

from registrar.core.records import (
    CourseRecord, DepartmentRecord, StudentRecord, TeacherRecord,
)
from registrar.schemas.views import (
    CourseRef, CourseView, DepartmentRef, DepartmentView, EnrolledCourse,
    StudentRef, StudentView, TeacherRef, TeacherView,
)


def to_teacher_ref(teacher: TeacherRecord | None) -> TeacherRef | None:
    if teacher is None:
        return None
    return TeacherRef(id=teacher.id, name=teacher.name)


def to_student_ref(student: StudentRecord) -> StudentRef:
    return StudentRef(id=student.id, name=student.name, email=student.email)


def to_department_ref(department: DepartmentRecord | None) -> DepartmentRef | None:
    if department is None:
        return None
    return DepartmentRef(id=department.id, name=department.name)


def to_enrolled_course(
    course: CourseRecord, teacher: TeacherRecord | None,
) -> EnrolledCourse:
    return EnrolledCourse(
        id=course.id, title=course.title, teacher=to_teacher_ref(teacher),
    )


def to_course_view(
    course: CourseRecord,
    teacher: TeacherRecord | None = None,
    students: Iterable[StudentRecord] | None = None,
) -> CourseView:
    return CourseView(
        id=course.id,
        title=course.title,
        teacher=to_teacher_ref(teacher),
        students=[to_student_ref(s) for s in students or ()],
    )


def to_student_view(
    student: StudentRecord,
    courses: Iterable[EnrolledCourse] | None = None,
) -> StudentView:
    return StudentView(
        id=student.id,
        name=student.name,
        email=student.email,
        courses=list(courses or ()),
    )


def to_teacher_view(
    teacher: TeacherRecord,
    courses: Iterable[CourseRecord] | None = None,
    department: DepartmentRecord | None = None,
) -> TeacherView:
    return TeacherView(
        id=teacher.id,
        name=teacher.name,
        courses=[CourseRef(id=c.id, title=c.title) for c in courses or ()],
        department=to_department_ref(department),
    )


def to_department_view(
    department: DepartmentRecord, head: TeacherRecord | None = None,
) -> DepartmentView:
    return DepartmentView(
        id=department.id,
        name=department.name,
        head_of_department=to_teacher_ref(head),
    )
