"""User administration schemas."""

from pydantic import EmailStr, Field

from vela.presentation.api.schemas.auth import UserResponse
from vela.presentation.api.schemas.common import CamelModel, PaginationMeta
from vela_identity.domain.user import Gender, UserRole


class CreateUserRequest(CamelModel):
    """Request schema for creating a user (admin only)."""

    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    gender: Gender = Gender.OTHER
    role: UserRole = UserRole.USER


class UpdateUserRequest(CamelModel):
    """Request schema for a partial profile update."""

    first_name: str | None = Field(default=None, min_length=2, max_length=50)
    last_name: str | None = Field(default=None, min_length=2, max_length=50)
    gender: Gender | None = None
    role: UserRole | None = Field(
        default=None,
        description="Only admins may change roles",
    )


class UserListData(CamelModel):
    users: list[UserResponse]
    pagination: PaginationMeta
