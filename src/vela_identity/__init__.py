"""Identity and authentication for Vela.

Users, sessions, password hashing, JWT tokens and the authentication
service that ties them together.
"""

from vela_identity.exceptions import (
    AuthenticatedUserNotFoundError,
    AuthenticationRequiredError,
    AuthError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidSessionError,
    InvalidTokenError,
    PasswordMismatchError,
    PermissionDeniedError,
    RefreshTokenExpiredError,
    TokenExpiredError,
    TokenRequiredError,
    WeakPasswordError,
)
from vela_identity.schemas import (
    TokenPayload,
    TokenStatus,
    TokenType,
    TokenVerification,
)
from vela_identity.services import JWTService, PasswordHashingService

__all__ = [
    "AuthError",
    "AuthenticatedUserNotFoundError",
    "AuthenticationRequiredError",
    "IncorrectPasswordError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "InvalidSessionError",
    "InvalidTokenError",
    "JWTService",
    "PasswordHashingService",
    "PasswordMismatchError",
    "PermissionDeniedError",
    "RefreshTokenExpiredError",
    "TokenExpiredError",
    "TokenPayload",
    "TokenRequiredError",
    "TokenStatus",
    "TokenType",
    "TokenVerification",
    "WeakPasswordError",
]
