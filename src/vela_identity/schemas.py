"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenStatus(str, Enum):
    """Outcome of decoding a bearer token."""

    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the data extracted from a verified JWT token.

    Attributes
    ----------
    user_id
        The unique identifier of the user
    session_id
        The session the token was issued for
    exp
        Token expiration timestamp
    token_type
        Either access or refresh
    """

    user_id: UUID
    session_id: UUID
    exp: datetime
    token_type: TokenType


@dataclass(frozen=True)
class TokenVerification:
    """Result of ``JWTService.decode``.

    ``payload`` is set only when ``status`` is VALID; ``reason`` carries the
    decoder's explanation for the other outcomes (for logs, not clients).
    """

    status: TokenStatus
    payload: TokenPayload | None = None
    reason: str = ""

    @property
    def is_valid(self) -> bool:
        return self.status == TokenStatus.VALID

    @classmethod
    def valid(cls, payload: TokenPayload) -> "TokenVerification":
        return cls(status=TokenStatus.VALID, payload=payload)

    @classmethod
    def expired(cls, reason: str = "Token has expired") -> "TokenVerification":
        return cls(status=TokenStatus.EXPIRED, reason=reason)

    @classmethod
    def invalid(cls, reason: str) -> "TokenVerification":
        return cls(status=TokenStatus.INVALID, reason=reason)
