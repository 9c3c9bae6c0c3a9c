from vela.domain.shared.exceptions import EntityNotFoundError, ErrorCode


class SessionNotFoundError(EntityNotFoundError):
    """No valid session with this ID belongs to the user."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(
            "Session not found",
            ErrorCode.SESSION_NOT_FOUND,
            {"session_id": session_id},
        )
