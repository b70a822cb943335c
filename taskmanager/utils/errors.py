"""Error taxonomy shared by the routes, services and auth layer.

Every error a client can see is an ``ApiError``; the app's error handler
turns it into the JSON envelope. Startup failures are plain exceptions that
are never rendered, they stop ``create_app`` instead.
"""


class ApiError(Exception):
    status_code = 500
    code = "INTERNAL_SERVER_ERROR"
    message = "Internal server error"

    def __init__(self, message=None, code=None, errors=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        self.errors = errors

    def to_dict(self):
        body = {"success": False, "message": self.message, "code": self.code}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ApiError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Validation failed"


class ConflictError(ApiError):
    status_code = 409
    code = "USER_EXISTS"
    message = "User with this email already exists"


class InvalidCredentialsError(ApiError):
    status_code = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid email or password"


class MissingTokenError(ApiError):
    status_code = 401
    code = "MISSING_TOKEN"
    message = "Access token required"


class InvalidTokenFormatError(ApiError):
    status_code = 401
    code = "INVALID_TOKEN_FORMAT"
    message = "Invalid token format"


class TokenExpiredError(ApiError):
    status_code = 401
    code = "TOKEN_EXPIRED"
    message = "Token has expired"


class InvalidTokenError(ApiError):
    status_code = 401
    code = "INVALID_TOKEN"
    message = "Invalid token"


class NotFoundError(ApiError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class RateLimitError(ApiError):
    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"
    message = "Too many requests from this IP, please try again later."


class InternalError(ApiError):
    pass


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing."""


class DatabaseUnavailableError(RuntimeError):
    """Raised at startup when the database cannot be reached."""
