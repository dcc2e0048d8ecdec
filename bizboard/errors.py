from flask import jsonify, current_app
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException


class AppError(Exception):
    """
    Operational error carrying the HTTP status the client should see.

    Raised anywhere in request handling; the handlers registered by
    register_error_handlers() turn it into the standard envelope:

        {"success": false, "error": "<message>"}
    """

    is_operational = True

    def __init__(self, message, status_code=500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self):
        return f"AppError({self.message!r}, {self.status_code})"


def error_response(message, status_code):
    return jsonify({"success": False, "error": message}), status_code


def first_validation_message(err):
    """Flatten marshmallow's nested messages into 'field: message'."""
    messages = err.messages
    if isinstance(messages, dict):
        for field, field_messages in messages.items():
            if isinstance(field_messages, dict):
                # nested schema errors
                return f"{field}: {first_validation_message(ValidationError(field_messages))}"
            if isinstance(field_messages, (list, tuple)) and field_messages:
                return f"{field}: {field_messages[0]}"
            return f"{field}: {field_messages}"
    if isinstance(messages, (list, tuple)) and messages:
        return str(messages[0])
    return str(messages)


def register_error_handlers(app):

    @app.errorhandler(AppError)
    def handle_app_error(err):
        if err.status_code >= 500:
            current_app.logger.error("AppError %s: %s", err.status_code, err.message)
        return error_response(err.message, err.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        return error_response(f"Validation error: {first_validation_message(err)}", 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return error_response(err.description or err.name, err.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        current_app.logger.exception("Unhandled error: %s", err)
        return error_response("Internal server error", 500)


def register_jwt_handlers(jwt):
    """JWT error handlers for clearer responses."""

    @jwt.unauthorized_loader
    def jwt_missing_token(reason):
        return error_response("Authentication token required", 401)

    @jwt.invalid_token_loader
    def jwt_invalid_token(reason):
        current_app.logger.warning("Rejected invalid token: %s", reason)
        return error_response("Invalid token", 401)

    @jwt.expired_token_loader
    def jwt_expired_token(header, payload):
        return error_response("Token expired", 401)
