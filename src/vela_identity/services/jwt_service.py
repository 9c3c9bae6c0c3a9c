"""JWT token service.

Signs and decodes the two bearer token kinds. Access and refresh tokens share
the same claim shape (``sub`` user id, ``sid`` session id, ``type``, ``iat``,
``exp``) but are signed with independent secrets and lifetimes, so a token of
one kind never verifies as the other.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from vela_identity.exceptions import (
    InvalidRefreshTokenError,
    InvalidTokenError,
    RefreshTokenExpiredError,
    TokenExpiredError,
)
from vela_identity.schemas import (
    TokenPayload,
    TokenStatus,
    TokenType,
    TokenVerification,
)

logger = logging.getLogger(__name__)


class JWTService:
    """Service for JWT token creation and verification.

    Examples
    --------
    >>> service = JWTService(access_secret="a" * 32, refresh_secret="r" * 32)
    >>> token = service.create_access_token(user_id, session_id)
    >>> service.decode(token, TokenType.ACCESS).status
    <TokenStatus.VALID: 'valid'>
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    DEFAULT_REFRESH_EXPIRE_DAYS = 7
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "sid", "type", "exp")

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        refresh_token_expire_days: int = DEFAULT_REFRESH_EXPIRE_DAYS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        access_secret
            Secret for signing access tokens. Must be kept secure.
        refresh_secret
            Secret for signing refresh tokens, independent of the access one.
        access_token_expire_minutes
            Minutes until an access token expires (default 15)
        refresh_token_expire_days
            Days until a refresh token expires (default 7)
        """
        if not access_secret or not refresh_secret:
            msg = "JWT secrets cannot be empty"
            raise ValueError(msg)

        self._secrets = {
            TokenType.ACCESS: access_secret,
            TokenType.REFRESH: refresh_secret,
        }
        self._lifetimes = {
            TokenType.ACCESS: timedelta(minutes=access_token_expire_minutes),
            TokenType.REFRESH: timedelta(days=refresh_token_expire_days),
        }

    def create_access_token(
        self,
        user_id: UUID,
        session_id: UUID,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a short-lived access token bound to a session."""
        return self._create_token(user_id, session_id, TokenType.ACCESS, expires_delta)

    def create_refresh_token(
        self,
        user_id: UUID,
        session_id: UUID,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a long-lived refresh token.

        Refresh tokens are used to obtain new access tokens without
        requiring the user to sign in again.
        """
        return self._create_token(user_id, session_id, TokenType.REFRESH, expires_delta)

    def decode(self, token: str, token_type: TokenType) -> TokenVerification:
        """Decode a token of the given kind without raising.

        Parameters
        ----------
        token
            The encoded JWT token string
        token_type
            Which secret to verify with and which ``type`` claim to expect

        Returns
        -------
        TokenVerification
            VALID with the payload, EXPIRED when the signature checks out but
            ``exp`` has passed, INVALID for everything else (bad signature,
            wrong kind, garbage input, missing or ill-typed claims)
        """
        if not token:
            return TokenVerification.invalid("Empty token")

        try:
            claims = jwt.decode(
                token,
                self._secrets[token_type],
                algorithms=[self.ALGORITHM],
                options={"require": list(self.REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError:
            return TokenVerification.expired()
        except jwt.InvalidTokenError as e:
            return TokenVerification.invalid(f"Invalid token: {e}")

        if claims.get("type") != token_type.value:
            return TokenVerification.invalid(
                f"Expected {token_type.value} token, got {claims.get('type')!r}",
            )

        try:
            payload = TokenPayload(
                user_id=UUID(str(claims["sub"])),
                session_id=UUID(str(claims["sid"])),
                exp=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
                token_type=token_type,
            )
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            return TokenVerification.invalid(f"Malformed token payload: {e}")

        return TokenVerification.valid(payload)

    def verify_access_token(self, token: str) -> TokenPayload:
        """Decode an access token.

        Raises
        ------
        TokenExpiredError
            If the token's lifetime has elapsed
        InvalidTokenError
            If the token is forged, malformed or not an access token
        """
        result = self.decode(token, TokenType.ACCESS)
        if result.status == TokenStatus.EXPIRED:
            raise TokenExpiredError
        if not result.is_valid:
            logger.debug("Access token rejected: %s", result.reason)
            raise InvalidTokenError
        return result.payload

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Decode a refresh token.

        Raises
        ------
        RefreshTokenExpiredError
            If the token's lifetime has elapsed
        InvalidRefreshTokenError
            If the token is forged, malformed or not a refresh token
        """
        result = self.decode(token, TokenType.REFRESH)
        if result.status == TokenStatus.EXPIRED:
            raise RefreshTokenExpiredError
        if not result.is_valid:
            logger.debug("Refresh token rejected: %s", result.reason)
            raise InvalidRefreshTokenError
        return result.payload

    def _create_token(
        self,
        user_id: UUID,
        session_id: UUID,
        token_type: TokenType,
        expires_delta: timedelta | None,
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._lifetimes[token_type])

        payload = {
            "sub": str(user_id),
            "sid": str(session_id),
            "type": token_type.value,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secrets[token_type], algorithm=self.ALGORITHM)
