from uuid import UUID

from vela_identity.application.context import AuthContext
from vela_identity.domain.user import (
    Gender,
    User,
    UserNotFoundError,
    UserRepository,
    UserRole,
)
from vela_identity.exceptions import PermissionDeniedError


class UpdateUserCommand:
    """Command to update a user's profile (and, for admins, their role)."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(
        self,
        user_id: UUID,
        requester: AuthContext,
        first_name: str | None = None,
        last_name: str | None = None,
        gender: Gender | None = None,
        role: UserRole | None = None,
    ) -> User:
        if user_id != requester.user_id and not requester.is_admin:
            msg = "You can only update your own profile"
            raise PermissionDeniedError(msg)
        if role is not None and not requester.is_admin:
            msg = "Only admins can change roles"
            raise PermissionDeniedError(msg)

        user = await self._user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))

        user.update_profile(first_name=first_name, last_name=last_name, gender=gender)
        if role is not None and role != user.role:
            user.change_role(role)

        await self._user_repo.update(user)
        return user
