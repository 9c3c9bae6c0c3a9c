"""Session entity: one authenticated login."""

from datetime import datetime
from uuid import UUID, uuid4

from vela.domain.shared.time import utc_now


class Session:
    """
    A single sign-in of a user on some client.

    Everything except ``valid`` is fixed at creation, and ``valid`` only ever
    goes from True to False. There is no way to re-validate a session; a user
    signs in again instead, which creates a new one.
    """

    MAX_USER_AGENT_LENGTH = 512

    def __init__(
        self,
        user_id: UUID,
        user_agent: str = "",
        valid: bool = True,
        id: UUID | None = None,
        created_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._user_id = user_id
        self._user_agent = (user_agent or "")[: self.MAX_USER_AGENT_LENGTH]
        self._valid = valid
        self._created_at = created_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def belongs_to(self, user_id: UUID) -> bool:
        return self._user_id == user_id

    def invalidate(self) -> None:
        """Mark the session invalid. Idempotent."""
        self._valid = False

    @classmethod
    def start(cls, user_id: UUID, user_agent: str | None = None) -> "Session":
        return cls(user_id=user_id, user_agent=user_agent or "")

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        user_id: UUID,
        user_agent: str,
        valid: bool,
        created_at: datetime,
    ) -> "Session":
        return cls(
            id=id,
            user_id=user_id,
            user_agent=user_agent,
            valid=valid,
            created_at=created_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Session(id={self._id}, user_id={self._user_id}, valid={self._valid})"
