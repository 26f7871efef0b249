"""Boundary Protocols — contracts between the aggregation core and the store.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Every store call is one round trip, however many keys it resolves
    - Empty key collections are never passed in (callers short-circuit)

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests pass a plain fake store
    - Async in Protocol: implementations do IO; the join logic that consumes
      their results (core/join_relations.py) stays synchronous and pure
"""

from collections.abc import Collection
from typing import Protocol

from registrar.core.domain_types import EdgeKind, EntityKind, Relation
from registrar.core.records import LinkedRow, Record


class EntityStore(Protocol):
    """Contract for batched entity lookups and relationship writes."""
    async def get_by_id(self, kind: EntityKind, entity_id: int) -> Record | None: ...
    async def get_many_by_ids(
        self, kind: EntityKind, ids: Collection[int],
    ) -> list[Record]: ...
    async def get_many_by_foreign_key(
        self, relation: Relation, keys: Collection[int],
    ) -> list[LinkedRow]: ...
    async def exists_by_id(self, kind: EntityKind, entity_id: int) -> bool: ...
    async def write_relationship(
        self, edge: EdgeKind, owner_id: int, target_id: int,
    ) -> None: ...
