"""Student Routes — CRUD, assembled views, and course enrollment.

Invariants:
    - GET endpoints return assembled StudentView(s): courses carry their teacher
    - POST /{student_id}/courses/{course_id} goes through the association mutator
    - Missing students → 404 via ResourceNotFoundError

Design Decisions:
    - /{student_id}/courses reuses the single-root assembly instead of a
      dedicated query: same batching, same missing-teacher policy
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status

from registrar.api.dependencies import (
    EntityIdPath, crud_repository, get_assembler, get_mutator, require_record,
)
from registrar.core.domain_types import EdgeKind, EntityKind
from registrar.core.errors import ResourceNotFoundError
from registrar.infrastructure.crud import CrudRepository
from registrar.schemas.entities import StudentCreate, StudentResponse, StudentUpdate
from registrar.schemas.views import EnrolledCourse, StudentView
from registrar.services.association_mutator import AssociationMutator
from registrar.services.graph_assembler import GraphAssembler

router = APIRouter(prefix="/api/v1/students", tags=["students"])
_students = crud_repository(EntityKind.STUDENT)


@router.post(
    "", response_model=StudentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_student(
    body: StudentCreate, repo: CrudRepository = Depends(_students),
):
    record = await repo.create(body.model_dump())
    return StudentResponse(**asdict(record))


@router.get("", response_model=list[StudentView])
async def list_students(
    repo: CrudRepository = Depends(_students),
    assembler: GraphAssembler = Depends(get_assembler),
):
    return await assembler.assemble_many(EntityKind.STUDENT, await repo.list_all())


@router.get("/{student_id}", response_model=StudentView)
async def get_student(
    student_id: EntityIdPath,
    repo: CrudRepository = Depends(_students),
    assembler: GraphAssembler = Depends(get_assembler),
):
    record = await require_record(repo, student_id)
    return await assembler.assemble_one(EntityKind.STUDENT, record)


@router.get("/{student_id}/courses", response_model=list[EnrolledCourse])
async def get_student_courses(
    student_id: EntityIdPath,
    repo: CrudRepository = Depends(_students),
    assembler: GraphAssembler = Depends(get_assembler),
):
    """Courses the student is enrolled in, each with its teacher."""
    record = await require_record(repo, student_id)
    view = await assembler.assemble_one(EntityKind.STUDENT, record)
    return view.courses


@router.patch("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: EntityIdPath, body: StudentUpdate,
    repo: CrudRepository = Depends(_students),
):
    record = await repo.update(student_id, body.model_dump(exclude_unset=True))
    if record is None:
        raise ResourceNotFoundError(EntityKind.STUDENT.value, student_id)
    return StudentResponse(**asdict(record))


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: EntityIdPath, repo: CrudRepository = Depends(_students),
):
    if not await repo.delete(student_id):
        raise ResourceNotFoundError(EntityKind.STUDENT.value, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{student_id}/courses/{course_id}", response_model=StudentView)
async def enroll_student(
    student_id: EntityIdPath, course_id: EntityIdPath,
    mutator: AssociationMutator = Depends(get_mutator),
):
    """Enroll a student in a course; both must exist."""
    return await mutator.set_association(
        EdgeKind.STUDENT_COURSE, student_id, course_id,
    )
