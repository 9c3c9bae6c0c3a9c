from vela_identity.domain.user import (
    EmailAlreadyExistsError,
    Gender,
    User,
    UserRepository,
    UserRole,
)
from vela_identity.services import PasswordHashingService


class CreateUserCommand:
    """Command to create a user on behalf of an admin (no session is opened)."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service

    async def execute(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        gender: Gender = Gender.OTHER,
        role: UserRole = UserRole.USER,
    ) -> User:
        existing = await self._user_repo.find_by_email(email)
        if existing:
            raise EmailAlreadyExistsError(existing.email)

        password_hash = self._password_service.hash(password)
        user = User.create(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            gender=gender,
            role=role,
        )
        await self._user_repo.create(user)
        return user
