"""Authentication service: the session lifecycle and the request gates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from vela_identity.application.context import AuthContext
from vela_identity.application.dtos import AuthResult, SignUpData
from vela_identity.domain.session import Session
from vela_identity.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserNotFoundError,
    UserRole,
)
from vela_identity.exceptions import (
    AuthenticatedUserNotFoundError,
    AuthError,
    AuthenticationRequiredError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidSessionError,
    InvalidTokenError,
    PasswordMismatchError,
    PermissionDeniedError,
    TokenExpiredError,
    TokenRequiredError,
)
from vela_identity.schemas import TokenPayload

if TYPE_CHECKING:
    from vela_identity.domain.session import SessionRepository
    from vela_identity.domain.user import UserRepository
    from vela_identity.services import JWTService, PasswordHashingService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates password hashing, JWT tokens and the user/session stores:
    - Sign-up and sign-in, each opening a new session
    - Sign-out of one session
    - Access token refresh
    - Password change, closing every other session
    - Authentication and role gates for incoming requests

    Failures are raised as the typed errors of ``vela_identity.exceptions``
    and the user domain; nothing here knows about HTTP.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._session_repo = session_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    def _create_token_pair(self, user: User, session: Session) -> tuple[str, str]:
        access_token = self._jwt_service.create_access_token(
            user_id=user.id,
            session_id=session.id,
        )
        refresh_token = self._jwt_service.create_refresh_token(
            user_id=user.id,
            session_id=session.id,
        )
        return access_token, refresh_token

    async def _open_session(self, user: User, user_agent: str | None) -> AuthResult:
        session = Session.start(user.id, user_agent)
        await self._session_repo.create(session)
        access_token, refresh_token = self._create_token_pair(user, session)
        return AuthResult(
            user=user,
            session=session,
            access_token=access_token,
            refresh_token=refresh_token,
        )

    async def sign_up(
        self,
        data: SignUpData,
        user_agent: str | None = None,
    ) -> AuthResult:
        """Register a new user and open their first session.

        Raises
        ------
        PasswordMismatchError
            If password and confirmation differ
        WeakPasswordError
            If the password is too short or too long
        InvalidEmailError
            If the email is malformed
        EmailAlreadyExistsError
            If the (normalized) email is already registered
        """
        if data.password != data.password_confirmation:
            raise PasswordMismatchError

        existing_user = await self._user_repo.find_by_email(data.email)
        if existing_user is not None:
            raise EmailAlreadyExistsError(existing_user.email)

        password_hash = self._password_service.hash(data.password)
        user = User.create(
            email=data.email,
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
            gender=data.gender,
            role=UserRole.USER,
        )
        # the unique index still guards against a concurrent sign-up
        await self._user_repo.create(user)

        result = await self._open_session(user, user_agent)
        logger.info("User signed up: %s (session %s)", user.email, result.session.id)
        return result

    async def sign_in(
        self,
        email: str,
        password: str,
        user_agent: str | None = None,
    ) -> AuthResult:
        """Verify credentials and open a new session.

        Earlier sessions of the user are left untouched.

        Raises
        ------
        InvalidCredentialsError
            If the email is unknown or the password is wrong
        """
        user = await self._user_repo.find_by_email(email)
        if user is None:
            logger.info("Sign-in failed: unknown email")
            raise InvalidCredentialsError

        if not user.verify_password(password, self._password_service):
            logger.info("Sign-in failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError

        result = await self._open_session(user, user_agent)
        logger.info("User signed in: %s (session %s)", user.email, result.session.id)
        return result

    async def sign_out(self, session_id: UUID) -> None:
        """Invalidate one session. Signing out twice is harmless."""
        await self._session_repo.invalidate(session_id)
        logger.info("Session signed out: %s", session_id)

    async def refresh_access_token(self, refresh_token: str | None) -> str:
        """Mint a new access token for the session a refresh token belongs to.

        The refresh token itself is not rotated and no session is created.

        Raises
        ------
        TokenRequiredError
            If no refresh token was given
        InvalidRefreshTokenError, RefreshTokenExpiredError
            If the token is forged/malformed or past its lifetime
        InvalidSessionError
            If the session is missing, invalidated or not the token user's
        AuthenticatedUserNotFoundError
            If the user was deleted in the meantime
        """
        if not refresh_token:
            raise TokenRequiredError("Refresh token is required")

        payload = self._jwt_service.verify_refresh_token(refresh_token)
        await self._load_session_user(payload)

        logger.debug("Access token refreshed for session %s", payload.session_id)
        return self._jwt_service.create_access_token(
            user_id=payload.user_id,
            session_id=payload.session_id,
        )

    async def change_password(
        self,
        user_id: UUID,
        session_id: UUID,
        current_password: str,
        new_password: str,
        new_password_confirmation: str,
    ) -> int:
        """Replace the user's password and close all their other sessions.

        Returns
        -------
        int
            Number of sessions that were invalidated

        Raises
        ------
        PasswordMismatchError
            If the new password and its confirmation differ
        UserNotFoundError
            If the user no longer exists
        IncorrectPasswordError
            If ``current_password`` does not verify
        WeakPasswordError
            If the new password does not meet requirements
        """
        if new_password != new_password_confirmation:
            raise PasswordMismatchError("New passwords do not match")

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        if not user.verify_password(current_password, self._password_service):
            raise IncorrectPasswordError

        user.change_password_hash(self._password_service.hash(new_password))
        await self._user_repo.update(user)

        invalidated = await self._session_repo.invalidate_all_except(
            user_id=user_id,
            keep_session_id=session_id,
        )
        logger.info(
            "Password changed for user %s, %d other session(s) invalidated",
            user_id,
            invalidated,
        )
        return invalidated

    async def authenticate(self, token: str | None) -> AuthContext:
        """Resolve a bearer access token to the caller's context.

        Checks run in a fixed order and the first failure wins: token
        present, token verifies, session valid, user exists.

        Raises
        ------
        TokenRequiredError
            If no token was presented
        InvalidTokenError, TokenExpiredError
            If the token is forged/malformed or past its lifetime
        InvalidSessionError
            If the session is missing, invalidated or not the token user's
        AuthenticatedUserNotFoundError
            If the user was deleted after the token was issued
        """
        if not token:
            logger.warning("Authentication failed: no token")
            raise TokenRequiredError

        try:
            payload = self._jwt_service.verify_access_token(token)
        except (InvalidTokenError, TokenExpiredError) as e:
            logger.warning("Authentication failed: %s", e.message)
            raise

        user = await self._load_session_user(payload)
        return AuthContext(user=user, session_id=payload.session_id)

    async def authenticate_optional(self, token: str | None) -> AuthContext | None:
        """Like ``authenticate`` but any failure yields an anonymous caller."""
        if not token:
            return None
        try:
            return await self.authenticate(token)
        except AuthError:
            return None

    @staticmethod
    def require_role(context: AuthContext | None, role: UserRole) -> AuthContext:
        """Gate that runs after ``authenticate``.

        Raises
        ------
        AuthenticationRequiredError
            If there is no authenticated context
        PermissionDeniedError
            If the user does not hold ``role``
        """
        if context is None:
            raise AuthenticationRequiredError
        if not context.user.has_role(role):
            logger.warning(
                "Permission denied: user %s lacks role %s",
                context.user_id,
                role.value,
            )
            raise PermissionDeniedError(f"{role.value.capitalize()} access required")
        return context

    async def _load_session_user(self, payload: TokenPayload) -> User:
        session = await self._session_repo.find_valid(
            session_id=payload.session_id,
            user_id=payload.user_id,
        )
        if session is None:
            logger.warning(
                "Authentication failed: session %s is not valid",
                payload.session_id,
            )
            raise InvalidSessionError

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            logger.warning(
                "Authentication failed: user %s no longer exists",
                payload.user_id,
            )
            raise AuthenticatedUserNotFoundError
        return user
