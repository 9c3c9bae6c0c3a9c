"""Session management schemas."""

from datetime import datetime
from uuid import UUID

from vela.presentation.api.schemas.common import CamelModel
from vela_identity.application.dtos import SessionView


class SessionResponse(CamelModel):
    id: UUID
    user_agent: str
    created_at: datetime
    is_current: bool

    @classmethod
    def from_view(cls, view: SessionView) -> "SessionResponse":
        return cls(
            id=view.session.id,
            user_agent=view.session.user_agent,
            created_at=view.session.created_at,
            is_current=view.is_current,
        )


class SessionListData(CamelModel):
    sessions: list[SessionResponse]


class RevokeOthersData(CamelModel):
    deleted_sessions: int
