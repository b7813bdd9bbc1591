from __future__ import annotations
from functools import wraps
from flask import request, g, current_app

from utils.errors import AppError, ErrorKind


def auth_service():
    return current_app.extensions["auth_service"]


def customer_service():
    return current_app.extensions["customer_service"]


def bearer_token() -> str:
    """Return the token of an `Authorization: Bearer <token>` header; anything else is 401."""
    auth = request.headers.get("Authorization", "")
    parts = auth.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AppError(ErrorKind.UNAUTHORIZED, "Authorization token missing")
    return parts[1]


def jwt_required():
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            identity = auth_service().authenticate(bearer_token())
            g.current_identity = identity
            return fn(*args, **kwargs)

        return wrapper

    return decorator
