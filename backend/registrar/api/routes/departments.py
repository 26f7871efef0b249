"""Department Routes — CRUD, assembled views, and head-of-department assignment.

Invariants:
    - POST /{department_id}/teacher/{teacher_id} goes through the association
      mutator, which also rejects a teacher already heading another department
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status

from registrar.api.dependencies import (
    EntityIdPath, crud_repository, get_assembler, get_mutator, require_record,
)
from registrar.core.domain_types import EdgeKind, EntityKind
from registrar.core.errors import ResourceNotFoundError
from registrar.infrastructure.crud import CrudRepository
from registrar.schemas.entities import (
    DepartmentCreate, DepartmentResponse, DepartmentUpdate,
)
from registrar.schemas.views import DepartmentView
from registrar.services.association_mutator import AssociationMutator
from registrar.services.graph_assembler import GraphAssembler

router = APIRouter(prefix="/api/v1/departments", tags=["departments"])
_departments = crud_repository(EntityKind.DEPARTMENT)


@router.post(
    "", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_department(
    body: DepartmentCreate, repo: CrudRepository = Depends(_departments),
):
    record = await repo.create(body.model_dump())
    return DepartmentResponse(**asdict(record))


@router.get("", response_model=list[DepartmentView])
async def list_departments(
    repo: CrudRepository = Depends(_departments),
    assembler: GraphAssembler = Depends(get_assembler),
):
    return await assembler.assemble_many(
        EntityKind.DEPARTMENT, await repo.list_all(),
    )


@router.get("/{department_id}", response_model=DepartmentView)
async def get_department(
    department_id: EntityIdPath,
    repo: CrudRepository = Depends(_departments),
    assembler: GraphAssembler = Depends(get_assembler),
):
    record = await require_record(repo, department_id)
    return await assembler.assemble_one(EntityKind.DEPARTMENT, record)


@router.patch("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: EntityIdPath, body: DepartmentUpdate,
    repo: CrudRepository = Depends(_departments),
):
    record = await repo.update(department_id, body.model_dump(exclude_unset=True))
    if record is None:
        raise ResourceNotFoundError(EntityKind.DEPARTMENT.value, department_id)
    return DepartmentResponse(**asdict(record))


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: EntityIdPath, repo: CrudRepository = Depends(_departments),
):
    if not await repo.delete(department_id):
        raise ResourceNotFoundError(EntityKind.DEPARTMENT.value, department_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{department_id}/teacher/{teacher_id}", response_model=DepartmentView,
)
async def assign_head(
    department_id: EntityIdPath, teacher_id: EntityIdPath,
    mutator: AssociationMutator = Depends(get_mutator),
):
    """Make a teacher head of a department; both must exist."""
    return await mutator.set_association(
        EdgeKind.DEPARTMENT_HEAD, department_id, teacher_id,
    )
