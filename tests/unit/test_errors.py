"""Unit tests for error normalization."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from querydesk.core.errors import (
    BackendInvocationError,
    MissingProfileField,
    NoConnection,
    RequestInFlight,
    flatten_error_fields,
)
from querydesk.dtos import ResultEntry


def test_flatten_error_fields_keeps_order() -> None:
    assert flatten_error_fields({"err": "QueryError", "msg": "bad sql"}) == [
        "err: QueryError",
        "msg: bad sql",
    ]


def test_transport_error_fields() -> None:
    request = httpx.Request("POST", "http://127.0.0.1:4310/ask")
    exc = httpx.ConnectError("connection refused", request=request)

    error = BackendInvocationError.from_exception("ask", exc)

    assert error.fields == {"TransportError": "connection refused"}
    assert error.cause is exc
    assert error.status_code == 502


def test_http_status_without_json_body() -> None:
    request = httpx.Request("POST", "http://127.0.0.1:4310/query")
    response = httpx.Response(503, text="backend busy", request=request)
    exc = httpx.HTTPStatusError("503", request=request, response=response)

    error = BackendInvocationError.from_exception("query", exc)

    assert error.fields == {"status": 503, "detail": "backend busy"}
    assert str(error) == "status: 503, detail: backend busy"


def test_validation_error_is_malformed_response() -> None:
    try:
        ResultEntry.model_validate_json("nope")
    except ValidationError as exc:
        error = BackendInvocationError.from_exception("ask", exc)
    else:  # pragma: no cover
        raise AssertionError("expected ValidationError")

    assert list(error.fields) == ["MalformedResponse"]


def test_detail_payload() -> None:
    error = BackendInvocationError("connect", {"ConfigError": "no config"})

    detail = error.to_detail()

    assert detail == {
        "kind": "BackendInvocationError",
        "message": "ConfigError: no config",
        "diagnostics": ["ConfigError: no config"],
        "command": "connect",
        "fields": {"ConfigError": "no config"},
    }


def test_precondition_kinds_and_status() -> None:
    assert NoConnection().to_detail()["kind"] == "NoConnection"
    assert NoConnection().status_code == 400
    assert MissingProfileField("db_type").diagnostics() == [
        "MissingProfileField: Please provide a value for 'db_type'."
    ]
    assert RequestInFlight().status_code == 409
