"""Error Hierarchy — status codes, categories and the response envelope.

Tests:
    - Each error maps to its HTTP status and category
    - ResourceNotFoundError fills entity context and a readable message
    - AggregateFailureError keeps its cause
    - to_response() produces the envelope the API returns
"""

from registrar.core.errors import (
    AggregateFailureError, AssemblyTimeoutError, ConstraintViolationError,
    DatabaseError, ErrorCategory, ErrorContext, MissingRelationError,
    RegistrarError, ResourceNotFoundError,
)


def test_not_found_message_and_context():
    err = ResourceNotFoundError("teacher", 999)
    assert err.message == "Teacher with ID 999 not found"
    assert err.http_status == 404
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert err.context.entity_kind == "teacher"
    assert err.context.entity_id == 999


def test_not_found_keeps_given_context():
    err = ResourceNotFoundError(
        "course", 3, ErrorContext(edge_kind="student_course"),
    )
    assert err.context.edge_kind == "student_course"
    assert err.context.entity_kind == "course"


def test_status_codes():
    assert ConstraintViolationError("dup").http_status == 409
    assert MissingRelationError("teacher", 1).http_status == 500
    assert AggregateFailureError(RuntimeError("x")).http_status == 503
    assert AssemblyTimeoutError(1.5).http_status == 504
    assert DatabaseError("down", "query").http_status == 503


def test_all_errors_share_base():
    for err in (
        ResourceNotFoundError("student", 1),
        ConstraintViolationError("dup"),
        AggregateFailureError(ValueError("x")),
        AssemblyTimeoutError(2.0),
    ):
        assert isinstance(err, RegistrarError)


def test_aggregate_failure_keeps_cause():
    cause = ConnectionError("pool exhausted")
    err = AggregateFailureError(cause)
    assert err.cause is cause
    assert "pool exhausted" in err.message


def test_timeout_message_names_deadline():
    assert "2.5s" in AssemblyTimeoutError(2.5).message


def test_to_response_envelope():
    body = ResourceNotFoundError("department", 7).to_response()
    error = body["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["category"] == "resource_not_found"
    assert error["severity"] == "error"
    assert error["context"]["entity_kind"] == "department"
    assert error["context"]["entity_id"] == 7
    assert "timestamp" in error
