"""Request and response schemas of the HTTP API."""

from vela.presentation.api.schemas.auth import (
    AccessTokenData,
    AuthData,
    ChangePasswordData,
    ChangePasswordRequest,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    UserResponse,
)
from vela.presentation.api.schemas.common import (
    ApiResponse,
    ErrorResponse,
    FieldError,
    HealthResponse,
    PaginationMeta,
)
from vela.presentation.api.schemas.sessions import (
    RevokeOthersData,
    SessionListData,
    SessionResponse,
)
from vela.presentation.api.schemas.users import (
    CreateUserRequest,
    UpdateUserRequest,
    UserListData,
)

__all__ = [
    "AccessTokenData",
    "ApiResponse",
    "AuthData",
    "ChangePasswordData",
    "ChangePasswordRequest",
    "CreateUserRequest",
    "ErrorResponse",
    "FieldError",
    "HealthResponse",
    "PaginationMeta",
    "RefreshRequest",
    "RevokeOthersData",
    "SessionListData",
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
    "UpdateUserRequest",
    "UserListData",
    "UserResponse",
]
