from __future__ import annotations


class AppError(Exception):
    """Base for errors that map onto an HTTP response.

    Rendered as ``{"error": message, "code": code}``.
    """

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid input"


class DuplicateEmailError(AppError):
    status_code = 400
    code = "duplicate_email"
    default_message = "Email already registered"


class InvalidCredentialsError(AppError):
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class TokenMissingError(AppError):
    status_code = 401
    code = "token_missing"
    default_message = "Access token required"


class TokenInvalidError(AppError):
    status_code = 403
    code = "token_invalid"
    default_message = "Invalid or expired token"


class ForbiddenRoleError(AppError):
    status_code = 403
    code = "forbidden_role"
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class InternalError(AppError):
    pass
