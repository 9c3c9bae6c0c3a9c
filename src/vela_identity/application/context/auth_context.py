"""Request-scoped authentication context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from vela_identity.domain.user import User


@dataclass(frozen=True)
class AuthContext:
    """Immutable context attached to an authenticated request.

    Holds the user the bearer token resolved to and the session the token
    was issued for.
    """

    user: User
    session_id: UUID

    @property
    def user_id(self) -> UUID:
        return self.user.id

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin

    def __repr__(self) -> str:
        return f"AuthContext(user_id={self.user.id}, session_id={self.session_id})"
