"""In-Memory Joins — key extraction and map-based attachment for batched fetches.

Invariants:
    - distinct_keys drops None and keeps first-seen order (deterministic batches)
    - index_by_id / group_by_key are built once per batch: O(K)
    - lookup never scans; every attachment is a dict access: O(1) amortized
    - A missing key is "relation lost", resolved by MissingRelationPolicy

Design Decisions:
    - Pure functions, no logging: the assembler decides how loud a drop is
    - group_by_key keeps the store's row order inside each group
"""

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import TypeVar

from registrar.core.domain_types import EntityKind, MissingRelationPolicy
from registrar.core.errors import MissingRelationError
from registrar.core.records import LinkedRow, Record

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def distinct_keys(items: Iterable[T], key: Callable[[T], K | None]) -> list[K]:
    """Distinct non-null keys in first-seen order."""
    seen: dict[K, None] = {}
    for item in items:
        value = key(item)
        if value is not None:
            seen.setdefault(value, None)
    return list(seen)


def index_by_id(rows: Iterable[Record]) -> dict[int, Record]:
    return {row.id: row for row in rows}


def group_by_key(linked: Iterable[LinkedRow]) -> dict[int, list[Record]]:
    """Group one-to-many lookup results by the key they were found through."""
    groups: dict[int, list[Record]] = {}
    for item in linked:
        groups.setdefault(item.key, []).append(item.row)
    return groups


def first_by_key(linked: Iterable[LinkedRow]) -> dict[int, Record]:
    """Index one-to-one lookup results (e.g. headed department) by key."""
    index: dict[int, Record] = {}
    for item in linked:
        index.setdefault(item.key, item.row)
    return index


def missing_keys(requested: Iterable[int], found: Mapping[int, object]) -> list[int]:
    return [key for key in requested if key not in found]


def lookup(
    index: Mapping[int, Record],
    key: int | None,
    kind: EntityKind,
    policy: MissingRelationPolicy,
) -> Record | None:
    """Resolve a to-one relation; None key or (under DROP) missing row → None."""
    if key is None:
        return None
    row = index.get(key)
    if row is None and policy is MissingRelationPolicy.FAIL:
        raise MissingRelationError(kind.value, key)
    return row
