"""User aggregate: identity, credential and role."""

from datetime import datetime
from typing import TYPE_CHECKING, Union
from uuid import UUID, uuid4

from vela.domain.shared.time import utc_now
from vela_identity.domain.user.exceptions import InvalidProfileError
from vela_identity.domain.user.value_objects import Email, Gender, UserRole

if TYPE_CHECKING:
    from vela_identity.services.password_service import PasswordHashingService


class User:
    """
    User aggregate root.

    The password hash is set on creation and replaced on password change.
    Outside the persistence mapping it is only consulted through
    ``verify_password``; no API schema carries it.
    """

    NAME_MIN_LENGTH = 2
    NAME_MAX_LENGTH = 50

    def __init__(
        self,
        email: Union[str, Email],
        password_hash: str,
        first_name: str,
        last_name: str,
        gender: Union[str, Gender],
        role: Union[str, UserRole] = UserRole.USER,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._first_name = first_name
        self._last_name = last_name
        self._gender = gender if isinstance(gender, Gender) else Gender(gender)
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._id = id or uuid4()
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def gender(self) -> Gender:
        return self._gender

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def has_role(self, role: UserRole) -> bool:
        return self._role == role

    def verify_password(
        self,
        password: str,
        hasher: "PasswordHashingService",
    ) -> bool:
        return hasher.verify(password, self._password_hash)

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._touch()

    def update_profile(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        gender: Union[str, Gender, None] = None,
    ) -> None:
        if first_name is not None:
            self._first_name = self._validate_name(first_name, "first_name")
        if last_name is not None:
            self._last_name = self._validate_name(last_name, "last_name")
        if gender is not None:
            self._gender = gender if isinstance(gender, Gender) else Gender(gender)
        self._touch()

    def change_role(self, role: UserRole) -> None:
        self._role = role
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def _validate_name(cls, value: str, field: str) -> str:
        value = value.strip()
        if not cls.NAME_MIN_LENGTH <= len(value) <= cls.NAME_MAX_LENGTH:
            msg = (
                f"{field} must be between {cls.NAME_MIN_LENGTH} and "
                f"{cls.NAME_MAX_LENGTH} characters"
            )
            raise InvalidProfileError(msg, details={"field": field})
        return value

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        password_hash: str,
        first_name: str,
        last_name: str,
        gender: Union[str, Gender],
        role: UserRole = UserRole.USER,
    ) -> "User":
        return cls(
            email=email,
            password_hash=password_hash,
            first_name=cls._validate_name(first_name, "first_name"),
            last_name=cls._validate_name(last_name, "last_name"),
            gender=gender,
            role=role,
        )

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        email: Union[str, Email],
        password_hash: str,
        first_name: str,
        last_name: str,
        gender: Union[str, Gender],
        role: Union[str, UserRole],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            gender=gender,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"
