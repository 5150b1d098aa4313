from flask import jsonify, current_app
from werkzeug.exceptions import BadRequest, HTTPException, InternalServerError


class ValidationError(BadRequest):
    """
    400 raised when a request body or query fails schema validation.

    ``field_errors`` maps a field name (dotted for nested fields) to
    the list of messages produced for it.
    """

    def __init__(self, field_errors: dict[str, list[str]]):
        self.field_errors = field_errors
        super().__init__(description=self.messages())

    def messages(self) -> list[str]:
        return [
            f"{field}: {message}" if field else message
            for field, messages in self.field_errors.items()
            for message in messages
        ]


def error_body(status_code: int, message, error: str) -> dict:
    return {
        "statusCode": status_code,
        "message": message,
        "error": error,
    }


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        body = error_body(error.code, error.messages(), "Bad Request")
        body["errors"] = error.field_errors
        return jsonify(body), error.code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify(error_body(error.code, error.description, error.name))
        response.status_code = error.code
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        current_app.logger.exception("Unhandled error: %s", error)
        internal = InternalServerError()
        return jsonify(
            error_body(internal.code, "Internal server error", internal.name)
        ), internal.code


def register_jwt_handlers(jwt):
    """Render Flask-JWT-Extended failures with the common error body."""

    def unauthorized(message: str):
        return jsonify(error_body(401, message, "Unauthorized")), 401

    @jwt.unauthorized_loader
    def missing_token(reason):
        return unauthorized(reason)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return unauthorized(reason)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return unauthorized("Token has expired")

    @jwt.user_lookup_error_loader
    def user_lookup_failed(jwt_header, jwt_payload):
        return unauthorized("User not found")
