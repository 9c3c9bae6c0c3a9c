"""FastAPI dependency injection for the Vela API.

Provides dependencies for:
- Settings (the instance handed to ``create_app``)
- Database sessions
- Authentication gates (required, optional, admin)
- Service instances

Nothing here reads configuration from the environment; everything comes
from ``request.app.state``, which the app factory and lifespan populate.
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vela_config.settings import Settings
from vela_identity.application.context import AuthContext
from vela_identity.application.services import (
    AuthenticationService,
    SessionService,
)
from vela_identity.domain.user import UserRole
from vela_identity.infrastructure.persistence.sqlalchemy import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from vela_identity.services import JWTService, PasswordHashingService

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens; a missing header is reported by
# the authentication service, not by FastAPI
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request from the session maker built in
    the application lifespan. Routers commit explicitly; anything left
    uncommitted is rolled back when the session closes.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with the application settings."""
    return JWTService(
        access_secret=settings.jwt_access_secret.get_secret_value(),
        refresh_secret=settings.jwt_refresh_secret.get_secret_value(),
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
        refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.password_hash_rounds)


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordService = Annotated[PasswordHashingService, Depends(get_password_service)]


async def get_authentication_service(
    session: DBSession,
    jwt_service: JWTServiceDep,
    password_service: PasswordService,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service owns the session lifecycle and the request gates.
    """
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        session_repository=SessionRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


def get_session_service(session: DBSession) -> SessionService:
    return SessionService(SessionRepositorySQLAlchemy(session))


SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]


# -----------------------------------------------------------------------------
# Request Authentication
# -----------------------------------------------------------------------------


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None:
        return None
    return credentials.credentials


async def get_auth_context(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthContext:
    """
    FastAPI dependency resolving the bearer token to the caller.

    Raises
    ------
    AuthError
        Any of the authentication failures; the exception handlers turn
        them into 401 responses with a ``WWW-Authenticate`` header
    """
    return await auth_service.authenticate(_bearer_token(credentials))


# Type alias for the authenticated caller
CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]


async def get_auth_context_optional(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthContext | None:
    """
    Optional authentication dependency.

    Returns the caller's context if a valid token is provided, None otherwise.
    Useful for endpoints that work differently for authenticated users.
    """
    return await auth_service.authenticate_optional(_bearer_token(credentials))


OptionalAuth = Annotated[AuthContext | None, Depends(get_auth_context_optional)]


async def require_admin(context: CurrentAuth) -> AuthContext:
    """Require an authenticated admin."""
    return AuthenticationService.require_role(context, UserRole.ADMIN)


# Type alias for admin caller
AdminAuth = Annotated[AuthContext, Depends(require_admin)]
