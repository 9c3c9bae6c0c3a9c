"""SQLAlchemy implementation of SessionRepository."""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vela.domain.shared.time import ensure_tz_aware, utc_now
from vela_identity.domain.session import Session, SessionRepository
from vela_identity.infrastructure.persistence.sqlalchemy.models import SessionModel

logger = logging.getLogger(__name__)


def _select_sessions():
    # bulk updates skip the identity map, so loaded rows must be refreshed
    return select(SessionModel).execution_options(populate_existing=True)


class SessionRepositorySQLAlchemy(SessionRepository):
    """SQLAlchemy implementation of the SessionRepository interface.

    Invalidation goes through ``UPDATE ... SET valid = false`` statements so
    the database applies each one atomically; no row is loaded first.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, session: Session) -> None:
        self._session.add(self._map_to_model(session))
        await self._session.flush()
        logger.debug("Created session %s for user %s", session.id, session.user_id)

    async def find_by_id(self, session_id: UUID) -> Session | None:
        stmt = _select_sessions().where(SessionModel.id == session_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_valid(self, session_id: UUID, user_id: UUID) -> Session | None:
        stmt = _select_sessions().where(
            SessionModel.id == session_id,
            SessionModel.user_id == user_id,
            SessionModel.valid.is_(True),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def invalidate(self, session_id: UUID) -> None:
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == session_id)
            .values(valid=False, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def invalidate_for_user(self, session_id: UUID, user_id: UUID) -> bool:
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.user_id == user_id,
                SessionModel.valid.is_(True),
            )
            .values(valid=False, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def invalidate_all_except(self, user_id: UUID, keep_session_id: UUID) -> int:
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.user_id == user_id,
                SessionModel.id != keep_session_id,
                SessionModel.valid.is_(True),
            )
            .values(valid=False, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def list_valid_for_user(self, user_id: UUID) -> list[Session]:
        stmt = (
            _select_sessions()
            .where(SessionModel.user_id == user_id, SessionModel.valid.is_(True))
            .order_by(SessionModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    def _map_to_domain(self, model: SessionModel) -> Session:
        return Session.reconstitute(
            id=model.id,
            user_id=model.user_id,
            user_agent=model.user_agent,
            valid=model.valid,
            created_at=ensure_tz_aware(model.created_at),
        )

    def _map_to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            user_agent=session.user_agent,
            valid=session.valid,
            created_at=session.created_at,
            updated_at=session.created_at,
        )
