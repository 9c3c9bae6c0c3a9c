"""User domain: identity, credential and role of an account holder."""

from vela_identity.domain.user.aggregates import User
from vela_identity.domain.user.exceptions import (
    CannotDeleteSelfError,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidProfileError,
    UserNotFoundError,
)
from vela_identity.domain.user.repositories import UserRepository
from vela_identity.domain.user.value_objects import (
    Email,
    Gender,
    UserRole,
)

__all__ = [
    "CannotDeleteSelfError",
    "Email",
    "EmailAlreadyExistsError",
    "Gender",
    "InvalidEmailError",
    "InvalidProfileError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
]
