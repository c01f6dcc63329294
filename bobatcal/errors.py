"""
API error types and the JSON error responses they turn into.

Every error body has the shape ``{"error": <message>, "details": <optional>}``.
Unexpected exceptions collapse to a generic 500 so nothing internal leaks to
the caller.
"""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

from bobatcal import db


class APIError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code = 500
    message = 'An internal error occurred'

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.details = details

    def to_dict(self):
        payload = {'error': self.message}
        if self.details:
            payload['details'] = self.details
        return payload


class ValidationError(APIError):
    """Malformed or out-of-range input."""
    status_code = 400
    message = 'Invalid input'


class NotFoundError(APIError):
    """A referenced shop, drink or user does not exist."""
    status_code = 404
    message = 'Not found'


class AuthorizationError(APIError):
    """No signed-in user."""
    status_code = 401
    message = 'Unauthorized'


class ForbiddenError(AuthorizationError):
    """Signed in, but the role is not allowed to do this."""
    status_code = 403
    message = 'Forbidden'


def error_response(message, status_code, details=None):
    payload = {'error': message}
    if details:
        payload['details'] = details
    return jsonify(payload), status_code


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        # Routing redirects are HTTPExceptions too
        if error.code is None or error.code < 400:
            return error
        return error_response(error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error: {error}")
        return error_response('An internal error occurred', 500)
