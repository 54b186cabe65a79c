"""Error taxonomy shared by services and routes.

Each error carries the HTTP status it maps to. The handlers registered
in main.py turn any AppError into {"error": message}.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid input"


class DuplicateEmail(AppError):
    status_code = 400
    default_message = "Email already registered"


class AuthenticationFailure(AppError):
    """Bad email or password. Deliberately does not say which."""

    status_code = 400
    default_message = "Invalid email or password"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    """Store or hashing failure. The message is always generic."""

    status_code = 500
