"""Session domain: server-side records of authenticated logins."""

from vela_identity.domain.session.exceptions import SessionNotFoundError
from vela_identity.domain.session.session import Session
from vela_identity.domain.session.session_repository import SessionRepository

__all__ = [
    "Session",
    "SessionNotFoundError",
    "SessionRepository",
]
