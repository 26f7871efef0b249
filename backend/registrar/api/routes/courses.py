"""Course Routes — CRUD, assembled views, and teacher assignment.

Invariants:
    - GET endpoints return assembled CourseView(s): teacher plus roster
    - POST /{course_id}/teacher/{teacher_id} goes through the association mutator
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status

from registrar.api.dependencies import (
    EntityIdPath, crud_repository, get_assembler, get_mutator, require_record,
)
from registrar.core.domain_types import EdgeKind, EntityKind
from registrar.core.errors import ResourceNotFoundError
from registrar.infrastructure.crud import CrudRepository
from registrar.schemas.entities import CourseCreate, CourseResponse, CourseUpdate
from registrar.schemas.views import CourseView
from registrar.services.association_mutator import AssociationMutator
from registrar.services.graph_assembler import GraphAssembler

router = APIRouter(prefix="/api/v1/courses", tags=["courses"])
_courses = crud_repository(EntityKind.COURSE)


@router.post(
    "", response_model=CourseResponse, status_code=status.HTTP_201_CREATED,
)
async def create_course(
    body: CourseCreate, repo: CrudRepository = Depends(_courses),
):
    record = await repo.create(body.model_dump())
    return CourseResponse(**asdict(record))


@router.get("", response_model=list[CourseView])
async def list_courses(
    repo: CrudRepository = Depends(_courses),
    assembler: GraphAssembler = Depends(get_assembler),
):
    return await assembler.assemble_many(EntityKind.COURSE, await repo.list_all())


@router.get("/{course_id}", response_model=CourseView)
async def get_course(
    course_id: EntityIdPath,
    repo: CrudRepository = Depends(_courses),
    assembler: GraphAssembler = Depends(get_assembler),
):
    record = await require_record(repo, course_id)
    return await assembler.assemble_one(EntityKind.COURSE, record)


@router.patch("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: EntityIdPath, body: CourseUpdate,
    repo: CrudRepository = Depends(_courses),
):
    record = await repo.update(course_id, body.model_dump(exclude_unset=True))
    if record is None:
        raise ResourceNotFoundError(EntityKind.COURSE.value, course_id)
    return CourseResponse(**asdict(record))


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: EntityIdPath, repo: CrudRepository = Depends(_courses),
):
    if not await repo.delete(course_id):
        raise ResourceNotFoundError(EntityKind.COURSE.value, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{course_id}/teacher/{teacher_id}", response_model=CourseView)
async def assign_teacher(
    course_id: EntityIdPath, teacher_id: EntityIdPath,
    mutator: AssociationMutator = Depends(get_mutator),
):
    """Assign a teacher to a course; both must exist."""
    return await mutator.set_association(
        EdgeKind.COURSE_TEACHER, course_id, teacher_id,
    )
