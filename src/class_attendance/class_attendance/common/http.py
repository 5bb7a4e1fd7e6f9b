from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from ..core.exceptions import (
    ConfigurationError,
    DuplicateAttendanceError,
    StatisticsUnavailableError,
    StorageError,
    ValidationError,
)


def json_message(message: str, status: int, **headers):
    response = jsonify({"message": message})
    response.status_code = status
    for name, value in headers.items():
        response.headers[name] = value
    return response


def register_error_handlers(app: Flask) -> None:
    """Map the exception taxonomy onto JSON responses with a ``message`` field."""

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        app.logger.debug("Rejected request: %s", e)
        return json_message(str(e), 400)

    @app.errorhandler(DuplicateAttendanceError)
    def _duplicate(e: DuplicateAttendanceError):
        return json_message(str(e), 409)

    @app.errorhandler(ConfigurationError)
    def _configuration(e: ConfigurationError):
        app.logger.error("Configuration error: %s", e)
        return json_message("Internal error: incomplete configuration.", 500)

    @app.errorhandler(StatisticsUnavailableError)
    def _statistics(e: StatisticsUnavailableError):
        return json_message("Statistics are currently unavailable.", 500)

    @app.errorhandler(StorageError)
    def _storage(e: StorageError):
        app.logger.exception("Storage error: %s", e)
        return json_message("Internal error while accessing attendance data.", 500)

    @app.errorhandler(MethodNotAllowed)
    def _method_not_allowed(e: MethodNotAllowed):
        allowed = ", ".join(sorted(e.valid_methods or []))
        return json_message("Method not allowed.", 405, Allow=allowed)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return json_message(e.description or e.name, e.code or 500)


def read_json_body(*, required: bool = True):
    """Parse the request body as JSON.

    An empty body is an error when ``required``, otherwise it yields None.
    Anything that is not valid JSON is always an error.
    """

    raw = request.get_data(cache=True)
    if not raw.strip():
        if required:
            raise ValidationError("Request body is empty.")
        return None

    payload = request.get_json(force=True, silent=True)
    if payload is None:
        raise ValidationError("Request body must be valid JSON.")
    return payload
