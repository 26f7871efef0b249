"""Teacher Routes — CRUD and assembled views (taught courses, headed department)."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status

from registrar.api.dependencies import (
    EntityIdPath, crud_repository, get_assembler, require_record,
)
from registrar.core.domain_types import EntityKind
from registrar.core.errors import ResourceNotFoundError
from registrar.infrastructure.crud import CrudRepository
from registrar.schemas.entities import TeacherCreate, TeacherResponse, TeacherUpdate
from registrar.schemas.views import TeacherView
from registrar.services.graph_assembler import GraphAssembler

router = APIRouter(prefix="/api/v1/teachers", tags=["teachers"])
_teachers = crud_repository(EntityKind.TEACHER)


@router.post(
    "", response_model=TeacherResponse, status_code=status.HTTP_201_CREATED,
)
async def create_teacher(
    body: TeacherCreate, repo: CrudRepository = Depends(_teachers),
):
    record = await repo.create(body.model_dump())
    return TeacherResponse(**asdict(record))


@router.get("", response_model=list[TeacherView])
async def list_teachers(
    repo: CrudRepository = Depends(_teachers),
    assembler: GraphAssembler = Depends(get_assembler),
):
    return await assembler.assemble_many(EntityKind.TEACHER, await repo.list_all())


@router.get("/{teacher_id}", response_model=TeacherView)
async def get_teacher(
    teacher_id: EntityIdPath,
    repo: CrudRepository = Depends(_teachers),
    assembler: GraphAssembler = Depends(get_assembler),
):
    record = await require_record(repo, teacher_id)
    return await assembler.assemble_one(EntityKind.TEACHER, record)


@router.patch("/{teacher_id}", response_model=TeacherResponse)
async def update_teacher(
    teacher_id: EntityIdPath, body: TeacherUpdate,
    repo: CrudRepository = Depends(_teachers),
):
    record = await repo.update(teacher_id, body.model_dump(exclude_unset=True))
    if record is None:
        raise ResourceNotFoundError(EntityKind.TEACHER.value, teacher_id)
    return TeacherResponse(**asdict(record))


@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_teacher(
    teacher_id: EntityIdPath, repo: CrudRepository = Depends(_teachers),
):
    """Delete a teacher. Refused with 409 while a course or department still references it."""
    if not await repo.delete(teacher_id):
        raise ResourceNotFoundError(EntityKind.TEACHER.value, teacher_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
