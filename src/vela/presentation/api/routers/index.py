"""API index: endpoint discovery."""

from typing import Any

from fastapi import APIRouter

from vela.presentation.api.dependencies import OptionalAuth
from vela.presentation.api.schemas import ApiResponse

router = APIRouter()

ENDPOINTS = {
    "POST /api/v1/auth/signup": "Register a new user",
    "POST /api/v1/auth/signin": "Sign in",
    "POST /api/v1/auth/signout": "Sign out of the current session",
    "POST /api/v1/auth/refresh": "Refresh access token",
    "POST /api/v1/auth/change-password": "Change password",
    "GET /api/v1/auth/me": "Current user",
    "GET /api/v1/sessions": "List active sessions",
    "DELETE /api/v1/sessions/{id}": "Revoke a session",
    "DELETE /api/v1/sessions": "Revoke all other sessions",
    "GET /api/v1/users": "List users (admin)",
    "POST /api/v1/users": "Create user (admin)",
    "GET /api/v1/users/me": "Current user profile",
    "GET /api/v1/users/{id}": "Get user",
    "PUT /api/v1/users/{id}": "Update user",
    "DELETE /api/v1/users/{id}": "Delete user (admin)",
}


@router.get("", summary="API index")
async def index(context: OptionalAuth) -> ApiResponse[dict[str, Any]]:
    """List the available endpoints; names the caller when a valid token is sent."""
    return ApiResponse(
        message="Vela API v1",
        data={
            "endpoints": ENDPOINTS,
            "authenticatedAs": context.user.email if context else None,
        },
    )
