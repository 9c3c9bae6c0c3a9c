"""Paginated user listing for admins."""

from dataclasses import dataclass
from uuid import UUID

from vela_identity.domain.user import User, UserNotFoundError, UserRepository


@dataclass(frozen=True)
class UserPage:
    users: list[User]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


class ListUsersQuery:
    """Query to list users, newest first."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, page: int = 1, limit: int = 10) -> UserPage:
        page = max(page, 1)
        limit = max(limit, 1)
        total = await self._user_repo.count()
        users = await self._user_repo.list_page(offset=(page - 1) * limit, limit=limit)
        return UserPage(users=users, total=total, page=page, limit=limit)


class GetUserQuery:
    """Query to fetch one user by ID."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, user_id: UUID) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user
