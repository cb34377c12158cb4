"""Error Hierarchy — verifies kinds, status table and response envelope.

Tests:
    - Every ErrorKind has exactly one HTTP status
    - Each exception carries its kind and the status from ERROR_STATUS
    - InvalidCredentialsError is an UnauthenticatedError answering 400
    - to_response() never includes internal debug info
"""

import pytest

from messagely.core.errors import (
    ERROR_STATUS,
    DuplicateIdentityError,
    ErrorContext,
    ErrorKind,
    ForbiddenError,
    InvalidCredentialsError,
    MessagelyError,
    NotFoundError,
    ReferentialViolationError,
    StoreUnavailableError,
    UnauthenticatedError,
)


def test_every_kind_has_a_status():
    assert set(ERROR_STATUS) == set(ErrorKind)


@pytest.mark.parametrize(
    "error, kind",
    [
        (NotFoundError("Message", "3"), ErrorKind.NOT_FOUND),
        (DuplicateIdentityError("alice"), ErrorKind.DUPLICATE_IDENTITY),
        (ReferentialViolationError("alice", "ghost"), ErrorKind.REFERENTIAL_VIOLATION),
        (ForbiddenError("view this message"), ErrorKind.FORBIDDEN),
        (UnauthenticatedError(), ErrorKind.UNAUTHENTICATED),
        (StoreUnavailableError("timeout", "query"), ErrorKind.STORE_UNAVAILABLE),
    ],
)
def test_errors_carry_kind_and_table_status(error, kind):
    assert isinstance(error, MessagelyError)
    assert error.kind == kind
    assert error.http_status == ERROR_STATUS[kind]


def test_invalid_credentials_is_unauthenticated_with_400():
    error = InvalidCredentialsError()
    assert isinstance(error, UnauthenticatedError)
    assert error.kind == ErrorKind.UNAUTHENTICATED
    assert error.http_status == 400
    assert error.message == "Invalid username/password"


def test_not_found_message_names_resource():
    assert NotFoundError("User", "zed").message == "No such user: zed"


def test_to_response_shape():
    error = ForbiddenError(
        "view this message",
        ErrorContext(username="carol", debug_info={"secret": "x"}),
    )
    body = error.to_response()["error"]
    assert body["code"] == "FORBIDDEN"
    assert body["kind"] == "forbidden"
    assert body["severity"] == "warning"
    assert "timestamp" in body
    assert "secret" not in str(body)


def test_store_unavailable_is_critical():
    error = StoreUnavailableError("boom", "insert")
    assert error.severity.value == "critical"
    assert error.operation == "insert"
