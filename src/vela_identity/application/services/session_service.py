"""Session management for the signed-in user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from vela_identity.application.dtos import SessionView
from vela_identity.domain.session import SessionNotFoundError

if TYPE_CHECKING:
    from vela_identity.domain.session import SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Lists and revokes the sessions of one user."""

    def __init__(self, session_repository: SessionRepository):
        self._session_repo = session_repository

    async def list_active(
        self,
        user_id: UUID,
        current_session_id: UUID,
    ) -> list[SessionView]:
        sessions = await self._session_repo.list_valid_for_user(user_id)
        return [
            SessionView(session=session, is_current=session.id == current_session_id)
            for session in sessions
        ]

    async def revoke(self, user_id: UUID, session_id: UUID) -> None:
        """Invalidate one of the user's valid sessions.

        Raises
        ------
        SessionNotFoundError
            If the session does not exist, is already invalid or belongs to
            someone else
        """
        revoked = await self._session_repo.invalidate_for_user(
            session_id=session_id,
            user_id=user_id,
        )
        if not revoked:
            raise SessionNotFoundError(str(session_id))
        logger.info("Session %s revoked by user %s", session_id, user_id)

    async def revoke_others(self, user_id: UUID, current_session_id: UUID) -> int:
        count = await self._session_repo.invalidate_all_except(
            user_id=user_id,
            keep_session_id=current_session_id,
        )
        logger.info("User %s revoked %d other session(s)", user_id, count)
        return count
