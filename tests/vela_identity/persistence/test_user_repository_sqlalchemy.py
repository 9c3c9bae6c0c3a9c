"""Persistence tests for UserRepositorySQLAlchemy."""

from uuid import UUID, uuid4

import pytest

from vela_identity.domain.session import Session
from vela_identity.domain.user import EmailAlreadyExistsError, Gender, UserRole
from vela_identity.infrastructure.persistence.sqlalchemy import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

TEST_EMAIL = "test@example.com"


@pytest.fixture
def user_repo(db_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(db_session)


class TestUserRepositorySQLAlchemy:
    """Tests for UserRepositorySQLAlchemy on SQLite."""

    @pytest.mark.asyncio
    async def test_create_and_find_by_id(self, user_repo, make_user):
        """Can save and retrieve a user by ID."""
        user = make_user(TEST_EMAIL)

        await user_repo.create(user)
        found = await user_repo.find_by_id(user.id)

        assert found is not None
        assert found.id == user.id
        assert isinstance(found.id, UUID)
        assert found.email == TEST_EMAIL
        assert found.role == UserRole.USER
        assert found.gender == Gender.OTHER
        assert found.password_hash == "hashed_password"
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        """Returns None for non-existent user."""
        assert await user_repo.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_email_is_case_insensitive(self, user_repo, make_user):
        await user_repo.create(make_user(TEST_EMAIL))

        found = await user_repo.find_by_email("TEST@Example.com")

        assert found is not None
        assert found.email == TEST_EMAIL

    @pytest.mark.asyncio
    async def test_find_by_malformed_email_returns_none(self, user_repo):
        assert await user_repo.find_by_email("not-an-email") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_conflict(self, user_repo, make_user):
        """The unique index rejects a second user with the same email."""
        await user_repo.create(make_user(TEST_EMAIL))

        with pytest.raises(EmailAlreadyExistsError):
            await user_repo.create(make_user(TEST_EMAIL))

    @pytest.mark.asyncio
    async def test_update_persists_changes(self, user_repo, make_user):
        # Arrange
        user = make_user(TEST_EMAIL)
        await user_repo.create(user)
        user.update_profile(first_name="Changed")
        user.change_password_hash("new_hash")
        user.change_role(UserRole.ADMIN)

        # Act
        await user_repo.update(user)
        found = await user_repo.find_by_id(user.id)

        # Assert
        assert found.first_name == "Changed"
        assert found.password_hash == "new_hash"
        assert found.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_delete_keeps_session_rows(
        self,
        user_repo,
        db_session,
        make_user,
    ):
        """Session rows outlive their user; authentication rejects them later."""
        # Arrange
        user = make_user(TEST_EMAIL)
        await user_repo.create(user)
        session_repo = SessionRepositorySQLAlchemy(db_session)
        session = Session.start(user.id, "pytest")
        await session_repo.create(session)

        # Act
        deleted = await user_repo.delete(user.id)

        # Assert
        assert deleted is True
        assert await user_repo.find_by_id(user.id) is None
        remaining = await session_repo.find_by_id(session.id)
        assert remaining is not None
        assert remaining.valid is True

    @pytest.mark.asyncio
    async def test_delete_missing_user_returns_false(self, user_repo):
        assert await user_repo.delete(uuid4()) is False

    @pytest.mark.asyncio
    async def test_count_and_list_page(self, user_repo, make_user):
        for _ in range(5):
            await user_repo.create(make_user())

        first_page = await user_repo.list_page(offset=0, limit=2)
        last_page = await user_repo.list_page(offset=4, limit=2)

        assert await user_repo.count() == 5
        assert len(first_page) == 2
        assert len(last_page) == 1
        assert not {u.id for u in first_page} & {u.id for u in last_page}
