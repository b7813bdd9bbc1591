"""
Operational error taxonomy.

Every domain failure is an AppError tagged with one ErrorKind; the HTTP layer
looks the status up in STATUS_CODES instead of relying on exception subclasses.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    UNPROCESSABLE_ENTITY = "UNPROCESSABLE_ENTITY"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    INTERNAL = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"


STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: 415,
    ErrorKind.UNPROCESSABLE_ENTITY: 422,
    ErrorKind.TOO_MANY_REQUESTS: 429,
    ErrorKind.INTERNAL: 500,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
    ErrorKind.TIMEOUT: 504,
}

DEFAULT_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.BAD_REQUEST: "Bad request",
    ErrorKind.VALIDATION_ERROR: "Validation failed",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.FORBIDDEN: "Forbidden",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.METHOD_NOT_ALLOWED: "Method not allowed",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: "Unsupported media type",
    ErrorKind.UNPROCESSABLE_ENTITY: "Unprocessable entity",
    ErrorKind.TOO_MANY_REQUESTS: "Too many requests",
    ErrorKind.INTERNAL: "Internal server error",
    ErrorKind.SERVICE_UNAVAILABLE: "Service unavailable",
    ErrorKind.TIMEOUT: "Request timed out",
}


def kind_for_status(status: int) -> ErrorKind:
    """Reverse lookup used for werkzeug HTTP exceptions."""
    for kind, code in STATUS_CODES.items():
        if code == status:
            return kind
    return ErrorKind.INTERNAL if status >= 500 else ErrorKind.BAD_REQUEST


class AppError(Exception):
    """A typed, operational failure carrying a stable code and a client-safe message."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None, meta: Optional[Dict[str, Any]] = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.meta = meta
        super().__init__(self.message)

    @property
    def status(self) -> int:
        return STATUS_CODES[self.kind]

    @property
    def code(self) -> str:
        return self.kind.value

    def __repr__(self):
        return f"<AppError {self.code} ({self.status}): {self.message}>"
