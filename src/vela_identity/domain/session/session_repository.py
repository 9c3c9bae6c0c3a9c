"""Session repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from vela_identity.domain.session.session import Session


class SessionRepository(ABC):
    """Repository interface for Session entities (the session store).

    All invalidating operations only ever write ``valid = false`` and are
    issued as single filtered updates, never as read-modify-write loops.
    """

    @abstractmethod
    async def create(self, session: Session) -> None:
        """Insert a new session."""

    @abstractmethod
    async def find_by_id(self, session_id: UUID) -> Optional[Session]:
        """Find a session by ID regardless of its validity."""

    @abstractmethod
    async def find_valid(self, session_id: UUID, user_id: UUID) -> Optional[Session]:
        """Find a session that is still valid and owned by ``user_id``."""

    @abstractmethod
    async def invalidate(self, session_id: UUID) -> None:
        """Set ``valid = false`` on one session. No-op if already invalid."""

    @abstractmethod
    async def invalidate_for_user(self, session_id: UUID, user_id: UUID) -> bool:
        """Invalidate one valid session owned by ``user_id``.

        Returns False if no valid session of that user has this ID.
        """

    @abstractmethod
    async def invalidate_all_except(self, user_id: UUID, keep_session_id: UUID) -> int:
        """Invalidate every valid session of ``user_id`` but one.

        Returns the number of sessions that were flipped.
        """

    @abstractmethod
    async def list_valid_for_user(self, user_id: UUID) -> list[Session]:
        """List a user's valid sessions, newest first."""
