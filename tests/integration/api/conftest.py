"""Pytest fixtures for API integration tests.

Every test gets its own SQLite file, so the whole stack (lifespan, engine,
repositories, commits) runs exactly as in production. The app creates its
tables on startup; an admin account is seeded before that, the same way
``vela users create-admin`` does it.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from vela.presentation.api.app import API_V1_PREFIX, create_app
from vela.presentation.cli.app import _create_admin
from vela_config.settings import Settings
from vela_identity.domain.user import Gender

TEST_PASSWORD = "secret1"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-secret"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'vela-test.db'}"


@pytest.fixture
def api_settings(database_url) -> Settings:
    """Test API settings: throwaway database, cheap hashing."""
    return Settings(
        jwt_access_secret="test-access-secret-for-testing-only",
        jwt_refresh_secret="test-refresh-secret-for-testing-only",
        environment="test",
        database_url=database_url,
        password_hash_rounds=4,
        api_cors_origins="http://localhost:3000",
        log_level="WARNING",
        _env_file=None,
    )


@pytest.fixture
def test_client(api_settings):
    """Create a test client; the lifespan runs for the duration of the test."""
    asyncio.run(
        _create_admin(
            api_settings,
            email=ADMIN_EMAIL,
            password=ADMIN_PASSWORD,
            first_name="Ada",
            last_name="Admin",
            gender=Gender.FEMALE,
        ),
    )
    app = create_app(settings=api_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def signup_payload() -> dict:
    """Valid sign-up body."""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "password": TEST_PASSWORD,
        "passwordConfirmation": TEST_PASSWORD,
        "gender": "female",
    }


@pytest.fixture
def signed_up_user(test_client, api_v1_prefix, signup_payload) -> dict:
    """Sign up the default user; returns the response ``data``."""
    response = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)
    assert response.status_code == 201
    return response.json()["data"]


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(signed_up_user) -> dict:
    """Get auth headers for the signed-up user."""
    return _bearer(signed_up_user["accessToken"])


@pytest.fixture
def sign_in(test_client, api_v1_prefix):
    """Sign in and return the response ``data`` (one new session per call)."""

    def _sign_in(email: str, password: str, user_agent: str = "pytest") -> dict:
        response = test_client.post(
            f"{api_v1_prefix}/auth/signin",
            json={"email": email, "password": password},
            headers={"User-Agent": user_agent},
        )
        assert response.status_code == 200, response.text
        return response.json()["data"]

    return _sign_in


@pytest.fixture
def admin_headers(sign_in) -> dict:
    """Auth headers for the seeded admin."""
    return _bearer(sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)["accessToken"])
