"""Request Dependencies — builds store, assembler, mutator and repositories per request.

Invariants:
    - Settings are read here and passed down as plain constructor values
    - A fresh AssociationMutator per request (its state machine is per call)
    - require_record raises ResourceNotFoundError, never returns None

Design Decisions:
    - FastAPI Depends over module singletons: tests override get_db_manager only
"""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Path

from registrar.config import Settings, get_settings
from registrar.core.domain_types import EntityKind
from registrar.core.errors import ResourceNotFoundError
from registrar.core.records import Record
from registrar.infrastructure.crud import CrudRepository
from registrar.infrastructure.database import DatabaseSessionManager, get_db_manager
from registrar.infrastructure.entity_store import SqlEntityStore
from registrar.services.association_mutator import AssociationMutator
from registrar.services.graph_assembler import GraphAssembler

# Ids above the BIGINT range cannot name a row; refuse them before the driver does.
MAX_ENTITY_ID = 2**63 - 1
EntityIdPath = Annotated[int, Path(le=MAX_ENTITY_ID)]


def get_entity_store(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> SqlEntityStore:
    return SqlEntityStore(manager)


def get_assembler(
    store: SqlEntityStore = Depends(get_entity_store),
    settings: Settings = Depends(get_settings),
) -> GraphAssembler:
    return GraphAssembler(
        store,
        policy=settings.missing_relation_policy,
        timeout_seconds=settings.assembly_timeout_seconds,
    )


def get_mutator(
    store: SqlEntityStore = Depends(get_entity_store),
    assembler: GraphAssembler = Depends(get_assembler),
    settings: Settings = Depends(get_settings),
) -> AssociationMutator:
    return AssociationMutator(
        store, assembler, timeout_seconds=settings.assembly_timeout_seconds,
    )


def crud_repository(kind: EntityKind) -> Callable[..., CrudRepository]:
    """Dependency factory: CrudRepository bound to one entity kind."""
    def _dependency(
        manager: DatabaseSessionManager = Depends(get_db_manager),
    ) -> CrudRepository:
        return CrudRepository(manager, kind)
    return _dependency


async def require_record(repo: CrudRepository, entity_id: int) -> Record:
    record = await repo.get(entity_id)
    if record is None:
        raise ResourceNotFoundError(repo.kind.value, entity_id)
    return record
