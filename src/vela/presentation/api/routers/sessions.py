"""Session router: list and revoke the caller's sessions."""

from uuid import UUID

from fastapi import APIRouter

from vela.presentation.api.dependencies import CurrentAuth, DBSession, SessionServiceDep
from vela.presentation.api.schemas import (
    ApiResponse,
    ErrorResponse,
    RevokeOthersData,
    SessionListData,
    SessionResponse,
)

router = APIRouter()


@router.get(
    "",
    summary="List active sessions",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def list_sessions(
    context: CurrentAuth,
    session_service: SessionServiceDep,
) -> ApiResponse[SessionListData]:
    """List the caller's valid sessions, newest first, marking the current one."""
    views = await session_service.list_active(context.user_id, context.session_id)
    return ApiResponse(
        message="Sessions retrieved successfully",
        data=SessionListData(sessions=[SessionResponse.from_view(v) for v in views]),
    )


@router.delete(
    "/{session_id}",
    summary="Revoke one session",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def revoke_session(
    session_id: UUID,
    context: CurrentAuth,
    session_service: SessionServiceDep,
    session: DBSession,
) -> ApiResponse[None]:
    await session_service.revoke(context.user_id, session_id)
    await session.commit()
    return ApiResponse(message="Session deleted successfully")


@router.delete(
    "",
    summary="Revoke all other sessions",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def revoke_other_sessions(
    context: CurrentAuth,
    session_service: SessionServiceDep,
    session: DBSession,
) -> ApiResponse[RevokeOthersData]:
    """Sign out everywhere except here."""
    count = await session_service.revoke_others(context.user_id, context.session_id)
    await session.commit()
    return ApiResponse(
        message="All other sessions deleted successfully",
        data=RevokeOthersData(deleted_sessions=count),
    )
