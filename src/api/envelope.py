"""
Response envelope and error-code to HTTP status mapping.

Every response body has the shape {status, message, <resource key>}.
Component error codes are mapped to HTTP statuses here and nowhere else.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from fastapi.encoders import jsonable_encoder

ERROR_STATUS: dict[str, int] = {
    "missing_fields": 400,
    "invalid_status": 400,
    "scheduled_at_required": 400,
    "invalid_field": 400,
    "no_file": 400,
    "invalid_mime_type": 400,
    "file_too_large": 400,
    "upstream_error": 400,
    "unauthenticated": 401,
    "forbidden": 403,
    "not_found": 404,
}


class ErrorLike(Protocol):
    code: str
    message: str
    details: Any


class ApiError(Exception):
    """An error response with an envelope body."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code
        self.details = details

    def body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": False, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


def status_for(code: str) -> int:
    return ERROR_STATUS.get(code, 400)


def raise_for_errors(errors: Sequence[ErrorLike]) -> None:
    """Raise ApiError for the first component error, if any."""
    if not errors:
        return
    err = errors[0]
    raise ApiError(
        status_for(err.code),
        err.message,
        code=err.code,
        details=getattr(err, "details", None),
    )


def envelope(message: str, **resources: Any) -> dict[str, Any]:
    """Build a success body: envelope("Created", contentType=obj)."""
    body: dict[str, Any] = {"status": True, "message": message}
    for key, value in resources.items():
        body[key] = jsonable_encoder(value)
    return body
