"""Single-Row CRUD — create, list, get, partial update, delete for one table.

Invariants:
    - Every method is one session and at most one commit
    - update applies only the fields given (PATCH semantics); unknown
      ids return None instead of raising
    - Relationship columns are writable here only at the row level; the
      association mutator is the validated path for changing them

Design Decisions:
    - One generic repository parameterized by EntityKind: the four tables
      differ only in columns, not in behaviour
"""

import logging
from typing import Any

from sqlalchemy import delete, select

from registrar.core.domain_types import EntityKind
from registrar.core.records import Record
from registrar.infrastructure.database import DatabaseSessionManager
from registrar.infrastructure.entity_store import MODELS, to_record

logger = logging.getLogger(__name__)


class CrudRepository:
    """Row-level persistence for one entity kind."""

    def __init__(self, manager: DatabaseSessionManager, kind: EntityKind):
        self.manager = manager
        self.kind = kind
        self.model = MODELS[kind]

    async def create(self, fields: dict[str, Any]) -> Record:
        async with self.manager.session() as db:
            obj = self.model(**fields)
            db.add(obj)
            await db.commit()
            await db.refresh(obj)
            logger.info(
                f"Created {self.kind.value} {obj.id}",
                extra={"entity_kind": self.kind.value, "entity_id": obj.id},
            )
            return to_record(obj)

    async def list_all(self) -> list[Record]:
        async with self.manager.session() as db:
            result = await db.execute(select(self.model).order_by(self.model.id))
            return [to_record(obj) for obj in result.scalars()]

    async def get(self, entity_id: int) -> Record | None:
        async with self.manager.session() as db:
            obj = await db.get(self.model, entity_id)
            return to_record(obj) if obj is not None else None

    async def update(self, entity_id: int, fields: dict[str, Any]) -> Record | None:
        async with self.manager.session() as db:
            obj = await db.get(self.model, entity_id)
            if obj is None:
                return None
            for name, value in fields.items():
                setattr(obj, name, value)
            await db.commit()
            await db.refresh(obj)
            return to_record(obj)

    async def delete(self, entity_id: int) -> bool:
        async with self.manager.session() as db:
            result = await db.execute(
                delete(self.model).where(self.model.id == entity_id),
            )
            await db.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info(
                f"Deleted {self.kind.value} {entity_id}",
                extra={"entity_kind": self.kind.value, "entity_id": entity_id},
            )
        return deleted
