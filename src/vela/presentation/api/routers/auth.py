"""Authentication router: sign-up, sign-in, sign-out, refresh, password change."""

import logging
from typing import Annotated

from fastapi import APIRouter, Header, status

from vela.presentation.api.dependencies import AuthService, CurrentAuth, DBSession
from vela.presentation.api.schemas import (
    AccessTokenData,
    ApiResponse,
    AuthData,
    ChangePasswordData,
    ChangePasswordRequest,
    ErrorResponse,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    UserResponse,
)
from vela_identity.application.dtos import AuthResult, SignUpData

logger = logging.getLogger(__name__)

router = APIRouter()

UserAgent = Annotated[str | None, Header()]


def _auth_data(result: AuthResult) -> AuthData:
    return AuthData(
        user=UserResponse.from_user(result.user),
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User signed up, first session opened"},
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthService,
    session: DBSession,
    user_agent: UserAgent = None,
) -> ApiResponse[AuthData]:
    """
    Create an account and sign it in.

    Returns the new user together with an access and a refresh token bound
    to a fresh session.
    """
    result = await auth_service.sign_up(
        SignUpData(
            email=request.email,
            password=request.password,
            password_confirmation=request.password_confirmation,
            first_name=request.first_name,
            last_name=request.last_name,
            gender=request.gender,
        ),
        user_agent=user_agent,
    )
    await session.commit()
    return ApiResponse(message="User signed up successfully", data=_auth_data(result))


@router.post(
    "/signin",
    summary="Authenticate user",
    responses={
        200: {"description": "Signed in, new session opened"},
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
    },
)
async def sign_in(
    request: SignInRequest,
    auth_service: AuthService,
    session: DBSession,
    user_agent: UserAgent = None,
) -> ApiResponse[AuthData]:
    """
    Authenticate with email and password.

    Every successful sign-in opens an additional session; earlier ones stay
    valid.
    """
    result = await auth_service.sign_in(
        email=request.email,
        password=request.password,
        user_agent=user_agent,
    )
    await session.commit()
    return ApiResponse(message="User signed in successfully", data=_auth_data(result))


@router.post(
    "/signout",
    summary="Sign out of the current session",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def sign_out(
    context: CurrentAuth,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[None]:
    """Invalidate the session the access token belongs to."""
    await auth_service.sign_out(context.session_id)
    await session.commit()
    return ApiResponse(message="User signed out successfully")


@router.post(
    "/refresh",
    summary="Refresh access token",
    responses={
        200: {"description": "New access token issued"},
        401: {"model": ErrorResponse, "description": "Invalid or expired refresh token"},
    },
)
async def refresh(
    request: RefreshRequest,
    auth_service: AuthService,
) -> ApiResponse[AccessTokenData]:
    """
    Exchange a refresh token for a new access token.

    The refresh token stays the same and keeps its original expiry.
    """
    access_token = await auth_service.refresh_access_token(request.refresh_token)
    return ApiResponse(
        message="Token refreshed successfully",
        data=AccessTokenData(access_token=access_token),
    )


@router.post(
    "/change-password",
    summary="Change password",
    responses={
        200: {"description": "Password changed, other sessions signed out"},
        400: {"model": ErrorResponse, "description": "Mismatch or wrong current password"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    context: CurrentAuth,
    auth_service: AuthService,
    session: DBSession,
) -> ApiResponse[ChangePasswordData]:
    """
    Change the current user's password.

    Every other session of the user is invalidated; the one making the
    request stays signed in.
    """
    invalidated = await auth_service.change_password(
        user_id=context.user_id,
        session_id=context.session_id,
        current_password=request.current_password,
        new_password=request.new_password,
        new_password_confirmation=request.new_password_confirmation,
    )
    await session.commit()
    return ApiResponse(
        message="Password changed successfully",
        data=ChangePasswordData(invalidated_sessions=invalidated),
    )


@router.get(
    "/me",
    summary="Get current user",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def get_me(context: CurrentAuth) -> ApiResponse[UserResponse]:
    return ApiResponse(
        message="User retrieved successfully",
        data=UserResponse.from_user(context.user),
    )
