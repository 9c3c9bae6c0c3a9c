"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from vela_identity.domain.user.aggregates.user import User
from vela_identity.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates (the credential store)."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their (normalized) email address."""

    @abstractmethod
    async def create(self, user: User) -> None:
        """Insert a new user.

        Raises
        ------
        EmailAlreadyExistsError
            If the unique email index rejects the insert
        """

    @abstractmethod
    async def update(self, user: User) -> None:
        """Persist changes to an existing user."""

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Delete a user by ID. Returns False if no row matched."""

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""

    @abstractmethod
    async def list_page(self, offset: int, limit: int) -> list[User]:
        """List users, newest first."""
