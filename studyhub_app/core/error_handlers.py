"""
JSON error envelope shared by every StudyHub blueprint.

Every failure leaves the API as ``{"success": false, "message", "code"}``,
plus ``details`` when there is something structured to report. Services
raise a ``StudyHubError`` subclass; routes never build error bodies by hand
except through ``error_response``.
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException


def _envelope(message: str, code: str, details: Optional[Dict[str, Any]] = None) -> dict:
    body = {'success': False, 'message': message, 'code': code}
    if details:
        body['details'] = details
    return body


class StudyHubError(Exception):
    """Error that maps onto one HTTP status and a machine readable ``code``.

    Subclasses pin ``code`` and ``status_code`` as class attributes; the
    constructor arguments override them per instance.
    """

    code = 'UNKNOWN_ERROR'
    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        return _envelope(self.message, self.code, self.details)


class NotFoundError(StudyHubError):
    code = 'NOT_FOUND'
    status_code = 404

    def __init__(self, message: str = 'Resource not found', resource: Optional[str] = None):
        super().__init__(message, details={'resource': resource} if resource else None)


class ValidationError(StudyHubError):
    """Bad input; ``errors`` carries the per-field messages."""

    code = 'VALIDATION_ERROR'
    status_code = 400

    def __init__(self, message: str = 'Validation failed', errors: Optional[Dict] = None, code: Optional[str] = None):
        super().__init__(message, code=code, details={'errors': errors} if errors else None)


class AuthorizationError(StudyHubError):
    code = 'FORBIDDEN'
    status_code = 403

    def __init__(self, message: str = 'Access denied'):
        super().__init__(message)


def error_response(message: str, code: str = 'ERROR', status_code: int = 400, details: Optional[Dict] = None) -> tuple:
    return jsonify(_envelope(message, code, details)), status_code


def success_response(data: Any = None, message: Optional[str] = None, status_code: int = 200) -> tuple:
    body: Dict[str, Any] = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return jsonify(body), status_code


# Werkzeug errors raised by routing, request parsing or abort().
_HTTP_ERRORS = {
    404: ('Endpoint not found', 'NOT_FOUND'),
    405: ('Method not allowed', 'METHOD_NOT_ALLOWED'),
    413: ('Uploaded file is too large', 'PAYLOAD_TOO_LARGE'),
}


def register_error_handlers(app):
    """Route StudyHub and Werkzeug errors through the JSON envelope."""

    @app.errorhandler(StudyHubError)
    def handle_studyhub_error(error: StudyHubError):
        level = 'error' if error.status_code >= 500 else 'warning'
        getattr(current_app.logger, level)(f"{error.code} on {request.path}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        status = error.code or 500
        message, code = _HTTP_ERRORS.get(
            status, (error.description, error.name.upper().replace(' ', '_'))
        )
        return error_response(message, code, status)

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception(f'Internal server error on {request.path}')
        return error_response('Internal server error', 'SERVER_ERROR', 500)
