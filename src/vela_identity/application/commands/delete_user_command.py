from uuid import UUID

from vela_identity.domain.user import CannotDeleteSelfError, UserNotFoundError, UserRepository


class DeleteUserCommand:
    """Command to delete a user; their session rows are left in place."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, user_id: UUID, requesting_admin_id: UUID) -> None:
        if user_id == requesting_admin_id:
            raise CannotDeleteSelfError

        deleted = await self._user_repo.delete(user_id)
        if not deleted:
            raise UserNotFoundError(str(user_id))
