"""
qa_user.api.errors

Error vocabulary of the HTTP surface.

Responsibilities:
- Map every `ErrorKind` to a numeric errorCode, an HTTP status and a message (one table).
- Render failures as `{success, errorCode, errorMessage, timestamp}` bodies.
- Catch-all handling for faults: log server-side, answer with a generic 500.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from qa_user.auth.jwt import TokenFailure
from qa_user.observability.logging import get_logger
from qa_user.results import Err, ErrorKind, Ok

log = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    code: int
    status: int
    message: str


ERROR_TABLE: dict[ErrorKind, ErrorEntry] = {
    ErrorKind.user_not_found: ErrorEntry(1001, HTTP_404_NOT_FOUND, "User not found"),
    ErrorKind.user_already_exists: ErrorEntry(1002, HTTP_409_CONFLICT, "User already exists"),
    ErrorKind.password_incorrect: ErrorEntry(1003, HTTP_400_BAD_REQUEST, "Incorrect password"),
    ErrorKind.password_mismatch: ErrorEntry(1004, HTTP_400_BAD_REQUEST, "Passwords do not match"),
    ErrorKind.invalid_token: ErrorEntry(1005, HTTP_401_UNAUTHORIZED, "Invalid token"),
    ErrorKind.bad_request: ErrorEntry(400, HTTP_400_BAD_REQUEST, "Invalid request parameters"),
    ErrorKind.unauthorized: ErrorEntry(401, HTTP_401_UNAUTHORIZED, "Authentication required"),
    ErrorKind.forbidden: ErrorEntry(403, HTTP_403_FORBIDDEN, "Operation not permitted"),
    ErrorKind.internal_error: ErrorEntry(
        500, HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    ),
}


class ApiError(Exception):
    def __init__(self, kind: ErrorKind, details: dict[str, Any] | None = None) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.details = details


def as_error_kind(failure: ErrorKind | TokenFailure) -> ErrorKind:
    # Every token failure surfaces as the same kind.
    if isinstance(failure, TokenFailure):
        return ErrorKind.invalid_token
    return failure


def unwrap(result: Ok[T] | Err[Any]) -> T:
    if isinstance(result, Err):
        raise ApiError(as_error_kind(result.kind))
    return result.value


def error_body(kind: ErrorKind, details: dict[str, Any] | None = None) -> dict[str, Any]:
    entry = ERROR_TABLE[kind]
    body: dict[str, Any] = {
        "success": False,
        "errorCode": entry.code,
        "errorMessage": entry.message,
        "timestamp": int(time.time() * 1000),
    }
    if details:
        body["details"] = details
    return body


def error_response(kind: ErrorKind, details: dict[str, Any] | None = None) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if kind is ErrorKind.unauthorized else None
    return JSONResponse(
        status_code=ERROR_TABLE[kind].status,
        content=error_body(kind, details),
        headers=headers,
    )


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    entry = ERROR_TABLE[exc.kind]
    log.warning("request_failed", error=exc.kind.value, error_code=entry.code)
    return error_response(exc.kind, exc.details)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details: dict[str, str] = {}
    for err in exc.errors():
        # Drop the leading "body"/"path" segment; clients know fields by name.
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "request"
        details[field] = str(err.get("msg", "invalid"))
    log.warning("request_invalid", fields=sorted(details))
    return error_response(ErrorKind.bad_request, details)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled_error", path=request.url.path, exc_info=exc)
    return error_response(ErrorKind.internal_error)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)


# --- Module Notes -----------------------------------------------------------
# Status codes are derived from ERROR_TABLE only; handlers never pick statuses ad hoc.
