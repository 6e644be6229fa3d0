"""
Error taxonomy for the store and the orchestrator

Every failure is a QueryDeskError carrying a `kind` tag and the HTTP status
the command surface answers with, so callers match on type instead of text.
"""
import json
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError


class QueryDeskError(Exception):
    """Base class for all querydesk failures"""
    kind: str = "QueryDeskError"
    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def diagnostics(self) -> List[str]:
        return [f"{self.kind}: {self.message}"]

    def to_detail(self) -> Dict[str, Any]:
        """Structured payload used as HTTPException.detail"""
        return {
            "kind": self.kind,
            "message": self.message,
            "diagnostics": self.diagnostics(),
        }


# ========== Local preconditions ==========

class PreconditionError(QueryDeskError):
    """Detected before any backend call; no state is mutated"""
    kind = "PreconditionError"


class NoConnection(PreconditionError):
    kind = "NoConnection"

    def __init__(self, message: str = "Please connect to a database first before any query operation."):
        super().__init__(message)


class NoModel(PreconditionError):
    kind = "NoModel"

    def __init__(self, message: str = "Please choose an AI model file before asking."):
        super().__init__(message)


class NotReadOnly(PreconditionError):
    kind = "NotReadOnly"

    def __init__(self, sql: str):
        super().__init__("Only statements starting with SELECT can be run directly.")
        self.sql = sql


class MissingProfileField(PreconditionError):
    kind = "MissingProfileField"

    def __init__(self, field: str):
        super().__init__(f"Please provide a value for '{field}'.")
        self.field = field


# ========== Lookup / sequencing ==========

class ProfileNotFound(QueryDeskError):
    kind = "ProfileNotFound"
    status_code = 404

    def __init__(self, profile_id: int):
        super().__init__(f"Cannot find profile {profile_id}.")
        self.profile_id = profile_id


class RequestInFlight(QueryDeskError):
    kind = "RequestInFlight"
    status_code = 409

    def __init__(self):
        super().__init__("Another request is still running; wait for it to finish.")


class StaleResponse(QueryDeskError):
    kind = "StaleResponse"
    status_code = 409

    def __init__(self, command: str):
        super().__init__(f"Response to '{command}' arrived after the request was abandoned; discarded.")
        self.command = command


class StoreCorrupted(QueryDeskError):
    kind = "StoreCorrupted"
    status_code = 500


# ========== Backend invocation ==========

def flatten_error_fields(fields: Dict[str, Any]) -> List[str]:
    """Turn an error's own fields into "key: value" lines"""
    return [f"{key}: {value}" for key, value in fields.items()]


class BackendInvocationError(QueryDeskError):
    """
    The backend call itself failed: transport error, backend-side exception
    or a response that could not be parsed.

    The raised error's own fields are kept in `fields`; the flat message is
    only built on demand.
    """
    kind = "BackendInvocationError"
    status_code = 502

    def __init__(self, command: str, fields: Dict[str, Any], cause: Optional[BaseException] = None):
        self.command = command
        self.fields = dict(fields)
        self.cause = cause
        super().__init__(", ".join(flatten_error_fields(self.fields)))

    def diagnostics(self) -> List[str]:
        return flatten_error_fields(self.fields)

    def to_detail(self) -> Dict[str, Any]:
        detail = super().to_detail()
        detail["command"] = self.command
        detail["fields"] = self.fields
        return detail

    @classmethod
    def from_exception(cls, command: str, exc: BaseException) -> "BackendInvocationError":
        return cls(command, _fields_of(exc), cause=exc)


def _fields_of(exc: BaseException) -> Dict[str, Any]:
    """Pull the structured fields out of whatever the backend raised"""
    if isinstance(exc, httpx.HTTPStatusError):
        # Backend errors come back as a JSON object, e.g. {"QueryError": "..."}
        try:
            body = exc.response.json()
        except (json.JSONDecodeError, ValueError):
            body = None
        if isinstance(body, dict) and body:
            return body
        return {
            "status": exc.response.status_code,
            "detail": exc.response.text or exc.response.reason_phrase,
        }

    if isinstance(exc, ValidationError):
        return {
            "MalformedResponse": "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in exc.errors()
            )
        }

    if isinstance(exc, httpx.RequestError):
        return {"TransportError": str(exc) or exc.__class__.__name__}

    args = getattr(exc, "args", ())
    if len(args) == 1 and isinstance(args[0], dict) and args[0]:
        return dict(args[0])

    return {exc.__class__.__name__: str(exc)}
