"""User router: profile access and user administration."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from vela.presentation.api.dependencies import (
    AdminAuth,
    CurrentAuth,
    DBSession,
    PasswordService,
)
from vela.presentation.api.schemas import (
    ApiResponse,
    CreateUserRequest,
    ErrorResponse,
    PaginationMeta,
    UpdateUserRequest,
    UserListData,
    UserResponse,
)
from vela_identity.application.commands import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from vela_identity.application.queries import GetUserQuery, ListUsersQuery
from vela_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_NOT_AUTHENTICATED = {"model": ErrorResponse, "description": "Not authenticated"}
_ADMIN_REQUIRED = {"model": ErrorResponse, "description": "Admin access required"}
_NOT_FOUND = {"model": ErrorResponse, "description": "User not found"}


@router.get(
    "",
    summary="List all users",
    responses={401: _NOT_AUTHENTICATED, 403: _ADMIN_REQUIRED},
)
async def list_users(
    _admin: AdminAuth,
    session: DBSession,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> ApiResponse[UserListData]:
    """List users, newest first (admin only)."""
    result = await ListUsersQuery(UserRepositorySQLAlchemy(session)).execute(
        page=page,
        limit=limit,
    )
    return ApiResponse(
        message="Users retrieved successfully",
        data=UserListData(
            users=[UserResponse.from_user(u) for u in result.users],
            pagination=PaginationMeta(
                page=result.page,
                limit=result.limit,
                total=result.total,
                pages=result.pages,
            ),
        ),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    responses={
        401: _NOT_AUTHENTICATED,
        403: _ADMIN_REQUIRED,
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def create_user(
    request: CreateUserRequest,
    admin: AdminAuth,
    session: DBSession,
    password_service: PasswordService,
) -> ApiResponse[UserResponse]:
    """Create a user without signing them in (admin only)."""
    command = CreateUserCommand(UserRepositorySQLAlchemy(session), password_service)
    user = await command.execute(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        gender=request.gender,
        role=request.role,
    )
    await session.commit()
    logger.info("Admin %s created user %s (%s)", admin.user_id, user.id, user.role.value)
    return ApiResponse(
        message="User created successfully",
        data=UserResponse.from_user(user),
    )


@router.get(
    "/me",
    summary="Get current user profile",
    responses={401: _NOT_AUTHENTICATED},
)
async def get_current_user_profile(context: CurrentAuth) -> ApiResponse[UserResponse]:
    return ApiResponse(
        message="User profile retrieved successfully",
        data=UserResponse.from_user(context.user),
    )


@router.get(
    "/{user_id}",
    summary="Get a user",
    responses={401: _NOT_AUTHENTICATED, 404: _NOT_FOUND},
)
async def get_user(
    user_id: UUID,
    _context: CurrentAuth,
    session: DBSession,
) -> ApiResponse[UserResponse]:
    user = await GetUserQuery(UserRepositorySQLAlchemy(session)).execute(user_id)
    return ApiResponse(
        message="User retrieved successfully",
        data=UserResponse.from_user(user),
    )


@router.put(
    "/{user_id}",
    summary="Update a user",
    responses={
        401: _NOT_AUTHENTICATED,
        403: {"model": ErrorResponse, "description": "Not allowed to update"},
        404: _NOT_FOUND,
    },
)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    context: CurrentAuth,
    session: DBSession,
) -> ApiResponse[UserResponse]:
    """
    Update profile fields.

    Users may update themselves; admins may update anyone and change roles.
    """
    command = UpdateUserCommand(UserRepositorySQLAlchemy(session))
    user = await command.execute(
        user_id=user_id,
        requester=context,
        first_name=request.first_name,
        last_name=request.last_name,
        gender=request.gender,
        role=request.role,
    )
    await session.commit()
    return ApiResponse(
        message="User updated successfully",
        data=UserResponse.from_user(user),
    )


@router.delete(
    "/{user_id}",
    summary="Delete a user",
    responses={
        400: {"model": ErrorResponse, "description": "Cannot delete yourself"},
        401: _NOT_AUTHENTICATED,
        403: _ADMIN_REQUIRED,
        404: _NOT_FOUND,
    },
)
async def delete_user(
    user_id: UUID,
    admin: AdminAuth,
    session: DBSession,
) -> ApiResponse[None]:
    """Delete a user (admin only)."""
    await DeleteUserCommand(UserRepositorySQLAlchemy(session)).execute(
        user_id=user_id,
        requesting_admin_id=admin.user_id,
    )
    await session.commit()
    logger.info("Admin %s deleted user %s", admin.user_id, user_id)
    return ApiResponse(message="User deleted successfully")
