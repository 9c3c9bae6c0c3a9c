"""Authentication schemas for request/response models."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field

from vela.presentation.api.schemas.common import CamelModel
from vela_identity.domain.user import Gender, UserRole

if TYPE_CHECKING:
    from vela_identity.domain.user import User


class SignUpRequest(CamelModel):
    """Request schema for user registration."""

    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=6,
        max_length=72,
        description="Password (at least 6 characters)",
    )
    password_confirmation: str = Field(..., min_length=1)
    gender: Gender = Gender.OTHER

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "ada@example.com",
                "password": "secret1",
                "passwordConfirmation": "secret1",
                "gender": "female",
            },
        },
    )


class SignInRequest(CamelModel):
    """Request schema for user sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    """Request schema for token refresh.

    A missing token is answered with 401, not with a validation error.
    """

    refresh_token: str | None = Field(default=None)


class ChangePasswordRequest(CamelModel):
    """Request schema for changing a user's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=72)
    new_password_confirmation: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Response schema for user data. Never carries the password hash."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    gender: Gender
    role: UserRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: "User") -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            gender=user.gender,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthData(CamelModel):
    user: UserResponse
    access_token: str
    refresh_token: str


class AccessTokenData(CamelModel):
    access_token: str


class ChangePasswordData(CamelModel):
    invalidated_sessions: int
