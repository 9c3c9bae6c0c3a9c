"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from vela.domain.shared.exceptions import (
    BadRequestError,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class InvalidProfileError(ValidationError):
    """Raised when a profile field violates its constraints."""


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "User with this email already exists",
            ErrorCode.EMAIL_ALREADY_EXISTS,
            {"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__("User not found", ErrorCode.USER_NOT_FOUND, {"user_id": user_id})


class CannotDeleteSelfError(BadRequestError):
    """Cannot delete your own account."""

    def __init__(self) -> None:
        super().__init__("Cannot delete your own account", ErrorCode.CANNOT_DELETE_SELF)
