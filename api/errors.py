import logging
import traceback

from flask import current_app, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from models import storage
from utils.errors import AppError, ErrorKind, STATUS_CODES, kind_for_status

logger = logging.getLogger(__name__)


def _details_enabled() -> bool:
    return bool(current_app and current_app.config.get("EXPOSE_ERROR_DETAILS"))


def error_response(kind: ErrorKind, message: str, meta: dict | None = None, exc: BaseException | None = None):
    status = STATUS_CODES[kind]
    error = {"code": kind.value, "message": message}
    if _details_enabled():
        if meta:
            error["meta"] = meta
        if exc is not None:
            error["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return jsonify({"success": False, "error": error}), status


def _log(kind: ErrorKind, message: str, meta: dict | None = None):
    status = STATUS_CODES[kind]
    logger.warning(
        "%s %s -> %s %s: %s %s",
        request.method, request.path, status, kind.value, message, meta or "",
    )


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        _log(err.kind, err.message, err.meta)
        return error_response(err.kind, err.message, err.meta, err)

    # Marshmallow validation errors are client errors (400)
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        meta = {"errors": err.messages}
        _log(ErrorKind.VALIDATION_ERROR, "Validation failed", meta)
        return error_response(ErrorKind.VALIDATION_ERROR, "Validation failed", meta, err)

    # Integrity errors (unique constraints, FK violations, check constraints)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        storage.rollback()
        message = str(getattr(err, "orig", err))
        lower_msg = message.lower()
        meta = {"db_error": message}
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            kind, text = ErrorKind.CONFLICT, "Unique constraint violated."
        elif "foreign key constraint" in lower_msg or "foreign key mismatch" in lower_msg:
            kind, text = ErrorKind.BAD_REQUEST, "Foreign key constraint failed."
        elif "check constraint" in lower_msg or "constraint failed" in lower_msg:
            kind, text = ErrorKind.BAD_REQUEST, "Check constraint failed."
        else:
            kind, text = ErrorKind.BAD_REQUEST, "Integrity error."
        _log(kind, text, meta)
        return error_response(kind, text, meta, err)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 400
        kind = kind_for_status(status)
        if status == 404:
            message = f"Route {request.method} {request.path} not found"
        else:
            message = err.description or kind.value
        _log(kind, message)
        return error_response(kind, message, exc=err)

    # 500 Internal Error (catch-all); internals never reach the client message
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.path, exc_info=err)
        meta = {"type": err.__class__.__name__, "message": str(err)}
        return error_response(ErrorKind.INTERNAL, "An unexpected error occurred", meta, err)
