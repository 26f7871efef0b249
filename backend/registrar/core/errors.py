"""Error Hierarchy — typed, categorized exceptions for every Registrar failure.

Invariants:
    - Every error carries code, category, severity and http_status; subclasses
      set them as class attributes, instances only add message and context
    - 4xx errors describe the request (unknown id, rule broken) and are final
    - 5xx errors describe the store or the assembly; driver text never reaches
      the message of anything but ConstraintViolationError
    - to_response() is the only shape the API serializes

Design Decisions:
    - Single RegistrarError base so one FastAPI handler covers all of them
    - ErrorContext is a dataclass: log fields and response fields come from
      the same place without coupling errors to logging
    - AggregateFailureError keeps the first branch failure as .cause (and
      __cause__ when raised with `from`)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    AGGREGATION = "aggregation"
    TIMEOUT = "timeout"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Which entity or edge the failure concerns."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_kind: str | None = None
    entity_id: int | None = None
    edge_kind: str | None = None
    debug_info: dict[str, Any] | None = None


class RegistrarError(Exception):
    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity_kind": self.context.entity_kind,
                    "entity_id": self.context.entity_id,
                    "edge_kind": self.context.edge_kind,
                },
            }
        }


def _about(
    context: ErrorContext | None, entity_kind: str, entity_id: int,
) -> ErrorContext:
    ctx = context or ErrorContext()
    ctx.entity_kind = entity_kind
    ctx.entity_id = entity_id
    return ctx


# ─── Request Errors (4xx) ────────────────────────────────────────

class ResourceNotFoundError(RegistrarError):
    """Requested or referenced entity does not exist."""
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type.capitalize()} with ID {resource_id} not found",
            _about(context, resource_type, resource_id),
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConstraintViolationError(RegistrarError):
    """A uniqueness or referential rule refused the write."""
    code = "CONSTRAINT_VIOLATION"
    category = ErrorCategory.CONFLICT
    http_status = 409


# ─── Assembly Errors (5xx) ───────────────────────────────────────

class MissingRelationError(RegistrarError):
    """A referenced row was absent from its batch under the FAIL policy."""
    code = "MISSING_RELATION"
    category = ErrorCategory.AGGREGATION

    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Referenced {resource_type} {resource_id} is missing",
            _about(context, resource_type, resource_id),
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AggregateFailureError(RegistrarError):
    """A concurrent branch failed; no partial view is returned."""
    code = "AGGREGATE_FAILURE"
    category = ErrorCategory.AGGREGATION
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, cause: BaseException, context: ErrorContext | None = None):
        super().__init__(f"Relationship assembly failed: {cause}", context)
        self.cause = cause


class AssemblyTimeoutError(RegistrarError):
    """A composed operation ran past its deadline."""
    code = "ASSEMBLY_TIMEOUT"
    category = ErrorCategory.TIMEOUT
    http_status = 504

    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(f"Operation exceeded deadline of {timeout_seconds}s", context)
        self.timeout_seconds = timeout_seconds


# ─── Store Errors (5xx) ──────────────────────────────────────────

class DatabaseError(RegistrarError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation
