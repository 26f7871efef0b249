"""Validated Association Mutator — sets one relationship edge after checking both ends.

Invariants:
    - Existence probes for owner and target run concurrently; both awaited
    - Missing owner → ResourceNotFoundError(owner); else missing target → (target)
    - Zero writes on rejection; exactly one write_relationship on success
    - The response view is re-read and re-assembled after the write

Design Decisions:
    - department_head adds a third concurrent probe: a teacher already heading
      a different department is rejected as ConstraintViolationError
    - One call at a time per instance: .state tracks the running (or last)
      call, so an overlapping call raises RuntimeError instead of clobbering it
    - Check and write are NOT one transaction: a concurrent delete between
      them is possible (see DESIGN.md, check-then-act race)
"""

import logging
from enum import Enum

from registrar.core.domain_types import EdgeKind, Relation
from registrar.core.errors import (
    ConstraintViolationError, ErrorContext, ResourceNotFoundError,
)
from registrar.core.repository_protocols import EntityStore
from registrar.schemas.views import View
from registrar.services.concurrency import fan_out, with_deadline
from registrar.services.graph_assembler import GraphAssembler

logger = logging.getLogger(__name__)


class MutationState(str, Enum):
    """Per-call progress; not persisted."""
    START = "start"
    CHECKING = "checking"
    REJECTED = "rejected"
    MUTATING = "mutating"
    REASSEMBLING = "reassembling"
    DONE = "done"


class AssociationMutator:
    """Changes course↔teacher, department↔head and student↔course edges.

    Built per request; sequential reuse is fine, overlapping calls are not.
    """

    def __init__(
        self,
        store: EntityStore,
        assembler: GraphAssembler,
        timeout_seconds: float | None = None,
    ):
        self.store = store
        self.assembler = assembler
        self.timeout_seconds = timeout_seconds
        self.state = MutationState.START
        self._running = False

    async def set_association(
        self, edge: EdgeKind, owner_id: int, target_id: int,
    ) -> View:
        """Validate both endpoints, write the edge, return the owner's fresh view."""
        if self._running:
            raise RuntimeError("AssociationMutator is already running a call")
        self._running = True
        self.state = MutationState.START
        try:
            return await with_deadline(
                self._run(edge, owner_id, target_id), self.timeout_seconds,
            )
        finally:
            self._running = False

    async def _run(self, edge: EdgeKind, owner_id: int, target_id: int) -> View:
        self.state = MutationState.CHECKING
        await self._check(edge, owner_id, target_id)

        self.state = MutationState.MUTATING
        await self.store.write_relationship(edge, owner_id, target_id)
        logger.info(
            f"Set {edge.value}: {owner_id} -> {target_id}",
            extra={"edge_kind": edge.value, "entity_id": owner_id},
        )

        self.state = MutationState.REASSEMBLING
        root = await self.store.get_by_id(edge.owner_kind, owner_id)
        if root is None:
            # owner deleted between write and re-read
            raise ResourceNotFoundError(edge.owner_kind.value, owner_id)
        view = await self.assembler.assemble_one(edge.owner_kind, root)
        self.state = MutationState.DONE
        return view

    async def _check(self, edge: EdgeKind, owner_id: int, target_id: int) -> None:
        probes = [
            self.store.exists_by_id(edge.owner_kind, owner_id),
            self.store.exists_by_id(edge.target_kind, target_id),
        ]
        if edge is EdgeKind.DEPARTMENT_HEAD:
            probes.append(
                self.store.get_many_by_foreign_key(
                    Relation.DEPARTMENTS_BY_HEAD, [target_id],
                ),
            )
        owner_exists, target_exists, *headship = await fan_out(*probes)

        if not owner_exists:
            self._reject(edge, edge.owner_kind.value, owner_id)
        if not target_exists:
            self._reject(edge, edge.target_kind.value, target_id)
        for linked in headship[0] if headship else []:
            if linked.row.id != owner_id:
                self.state = MutationState.REJECTED
                raise ConstraintViolationError(
                    f"Teacher with ID {target_id} already heads "
                    f"department {linked.row.id}",
                    ErrorContext(
                        entity_kind=edge.target_kind.value,
                        entity_id=target_id,
                        edge_kind=edge.value,
                    ),
                )

    def _reject(self, edge: EdgeKind, kind: str, entity_id: int) -> None:
        self.state = MutationState.REJECTED
        logger.info(
            f"Rejected {edge.value}: {kind} {entity_id} not found",
            extra={"edge_kind": edge.value, "entity_kind": kind, "entity_id": entity_id},
        )
        raise ResourceNotFoundError(
            kind, entity_id, ErrorContext(edge_kind=edge.value),
        )
