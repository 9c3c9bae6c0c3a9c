"""Identity and authentication exceptions.

Every failure of the authentication lifecycle is a distinct type so callers
can branch (and log) on the exact kind. All of them sit in the shared
``DomainException`` hierarchy and are turned into HTTP responses by the
presentation layer's exception handlers.
"""

from vela.domain.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ErrorCode,
    ValidationError,
)


class AuthError(AuthenticationError):
    """Base exception for all authentication errors (HTTP 401)."""

    default_message = "Authentication error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class TokenRequiredError(AuthError):
    """Raised when no bearer token was presented."""

    default_code = ErrorCode.TOKEN_REQUIRED
    default_message = "Access token is required"


class InvalidTokenError(AuthError):
    """Raised when a JWT token is forged, malformed or of the wrong kind."""

    default_code = ErrorCode.INVALID_TOKEN
    default_message = "Invalid token"


class TokenExpiredError(AuthError):
    """Raised when a JWT token has a valid signature but its TTL elapsed."""

    default_code = ErrorCode.TOKEN_EXPIRED
    default_message = "Token expired"


class InvalidRefreshTokenError(InvalidTokenError):
    default_message = "Invalid refresh token"


class RefreshTokenExpiredError(TokenExpiredError):
    default_message = "Refresh token expired"


class InvalidSessionError(AuthError):
    """Raised when the token's session is missing, invalidated or foreign."""

    default_code = ErrorCode.INVALID_SESSION
    default_message = "Invalid or expired session"


class AuthenticatedUserNotFoundError(AuthError):
    """Raised when a token's user was deleted after the token was issued."""

    default_code = ErrorCode.AUTHENTICATED_USER_NOT_FOUND
    default_message = "User not found"


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during sign-in.

    Unknown email and wrong password share this message on purpose so the
    response does not reveal which accounts exist.
    """

    default_code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid email or password"


class AuthenticationRequiredError(AuthError):
    """Raised by role gates that run without an authenticated context."""

    default_message = "Authentication required"


class PermissionDeniedError(AuthorizationError):
    """Raised when the authenticated user lacks the required role (HTTP 403)."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message, ErrorCode.WEAK_PASSWORD)


class PasswordMismatchError(ValidationError):
    """Raised when a password and its confirmation differ."""

    def __init__(self, message: str = "Passwords do not match"):
        super().__init__(message, ErrorCode.PASSWORD_MISMATCH)


class IncorrectPasswordError(BadRequestError):
    """Raised when the current password given for a change does not verify."""

    def __init__(self, message: str = "Current password is incorrect"):
        super().__init__(message, ErrorCode.INCORRECT_PASSWORD)
