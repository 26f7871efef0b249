"""Fan-out / Fan-in — concurrent composition of independent store calls.

Invariants:
    - fan_out returns results in argument order, not completion order
    - One failing branch cancels its siblings and surfaces as AggregateFailureError
      wrapping the first observed failure
    - with_deadline cancels everything still running and raises AssemblyTimeoutError

Design Decisions:
    - asyncio.TaskGroup over gather: sibling cancellation on failure is built in
    - asyncio.wait_for for deadlines (same shape as SimpleDeadline in corpus_sdk)
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from registrar.core.errors import AggregateFailureError, AssemblyTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def fan_out(*branches: Awaitable[Any]) -> tuple[Any, ...]:
    """Run branches concurrently; all-or-nothing."""
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_as_coroutine(b)) for b in branches]
    except ExceptionGroup as eg:
        first = eg.exceptions[0]
        logger.error(
            f"Fan-out branch failed: {first!r}",
            extra={"error_code": "AGGREGATE_FAILURE"},
        )
        raise AggregateFailureError(first) from first
    return tuple(task.result() for task in tasks)


async def with_deadline(awaitable: Awaitable[T], timeout_seconds: float | None) -> T:
    """Await with an optional overall deadline."""
    if timeout_seconds is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise AssemblyTimeoutError(timeout_seconds) from e


async def _as_coroutine(awaitable: Awaitable[T]) -> T:
    return await awaitable
