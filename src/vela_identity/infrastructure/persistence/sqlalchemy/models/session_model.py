"""SQLAlchemy model for Session entities."""

from uuid import UUID

from sqlalchemy import Boolean, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vela.infrastructure.persistence.sqlalchemy.base import Base, TimestampMixin


class SessionModel(Base, TimestampMixin):
    __tablename__ = "sessions"
    __table_args__ = (Index("ix_sessions_user_id_valid", "user_id", "valid"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    # plain column, session rows outlive a deleted user
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    user_agent: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    valid: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<SessionModel(id={self.id}, user_id={self.user_id}, "
            f"valid={self.valid})>"
        )
