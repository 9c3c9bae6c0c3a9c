"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vela.domain.shared.time import ensure_tz_aware
from vela_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    User,
    UserRepository,
)
from vela_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        if isinstance(email, Email):
            email_value = email.value
        else:
            try:
                email_value = Email(email).value
            except InvalidEmailError:
                return None

        stmt = select(UserModel).where(UserModel.email == email_value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def create(self, user: User) -> None:
        self._session.add(self._map_to_model(user))
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise
        logger.info("Created user: %s (email: %s)", user.id, user.email)

    async def update(self, user: User) -> None:
        model = await self._find_model_by_id(user.id)
        if model is None:
            logger.warning("Update skipped, user %s no longer exists", user.id)
            return
        self._update_model(model, user)
        await self._session.flush()
        logger.debug("Updated user: %s", user.id)

    async def delete(self, user_id: UUID) -> bool:
        stmt = delete(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted user: %s", user_id)
        return deleted

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_page(self, offset: int, limit: int) -> list[User]:
        stmt = (
            select(UserModel)
            .order_by(UserModel.created_at.desc(), UserModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            gender=model.gender,
            role=model.role,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            gender=user.gender.value,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.password_hash = user.password_hash
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.gender = user.gender.value
        model.role = user.role.value
        model.updated_at = user.updated_at
