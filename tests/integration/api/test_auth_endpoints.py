"""Integration tests for authentication endpoints."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from vela_identity.services import JWTService

TEST_PASSWORD = "secret1"


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestSignUp:
    """Tests for POST /api/v1/auth/signup."""

    def test_signup_success(self, test_client: TestClient, api_v1_prefix: str):
        """Successfully sign up a new user."""
        response = test_client.post(
            f"{api_v1_prefix}/auth/signup",
            json={
                "firstName": "Alan",
                "lastName": "Turing",
                "email": "a@x.com",
                "password": TEST_PASSWORD,
                "passwordConfirmation": TEST_PASSWORD,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User signed up successfully"

        data = body["data"]
        assert data["user"]["email"] == "a@x.com"
        assert data["user"]["role"] == "user"
        assert data["user"]["gender"] == "other"
        assert "id" in data["user"]
        assert "createdAt" in data["user"]
        assert data["accessToken"]
        assert data["refreshToken"]

    def test_signup_never_returns_password(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signup_payload: dict,
    ):
        response = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)

        user = response.json()["data"]["user"]
        assert "password" not in user
        assert "passwordHash" not in user
        assert TEST_PASSWORD not in response.text

    def test_signup_duplicate_email(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signup_payload: dict,
    ):
        """A second sign-up with the same email is a conflict."""
        first = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)
        assert first.status_code == 201

        signup_payload["email"] = signup_payload["email"].upper()
        second = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)

        assert second.status_code == 409
        body = second.json()
        assert body["success"] is False
        assert body["code"] == "EMAIL_ALREADY_EXISTS"
        assert body["message"] == "User with this email already exists"

    def test_signup_password_mismatch(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signup_payload: dict,
    ):
        signup_payload["passwordConfirmation"] = "secret2"

        response = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Passwords do not match"

    def test_signup_short_password(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signup_payload: dict,
    ):
        signup_payload["password"] = "abc"
        signup_payload["passwordConfirmation"] = "abc"

        response = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation Error"
        assert [e["field"] for e in body["errors"]] == ["password"]

    def test_signup_invalid_email(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signup_payload: dict,
    ):
        signup_payload["email"] = "not-an-email"

        response = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_signup_accepts_apostrophe_in_email(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signup_payload: dict,
    ):
        signup_payload["email"] = "o'neil@example.com"

        response = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_payload)

        assert response.status_code == 201
        assert response.json()["data"]["user"]["email"] == "o'neil@example.com"

    def test_signup_missing_fields(self, test_client: TestClient, api_v1_prefix: str):
        response = test_client.post(f"{api_v1_prefix}/auth/signup", json={})

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert {"firstName", "lastName", "email", "password"} <= fields


class TestSignIn:
    """Tests for POST /api/v1/auth/signin."""

    def test_signin_success(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signed_up_user: dict,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/auth/signin",
            json={"email": "jane@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User signed in successfully"
        assert body["data"]["user"]["id"] == signed_up_user["user"]["id"]
        assert body["data"]["accessToken"] != signed_up_user["accessToken"]

    def test_signin_wrong_password_matches_unknown_email(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signed_up_user: dict,
    ):
        """Wrong password and unknown email are indistinguishable."""
        wrong_password = test_client.post(
            f"{api_v1_prefix}/auth/signin",
            json={"email": "jane@example.com", "password": "wrong-password"},
        )
        unknown_email = test_client.post(
            f"{api_v1_prefix}/auth/signin",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD},
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["message"] == "Invalid email or password"

    def test_signin_opens_additional_session(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signed_up_user: dict,
        sign_in,
    ):
        """Earlier sessions stay valid after another sign-in."""
        sign_in("jane@example.com", TEST_PASSWORD)

        response = test_client.get(
            f"{api_v1_prefix}/auth/me",
            headers=_bearer(signed_up_user["accessToken"]),
        )

        assert response.status_code == 200


class TestSignOut:
    """Tests for POST /api/v1/auth/signout."""

    def test_signout_invalidates_session(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        auth_headers: dict,
    ):
        """The old access token stops working after sign-out."""
        response = test_client.post(f"{api_v1_prefix}/auth/signout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "User signed out successfully"

        after = test_client.get(f"{api_v1_prefix}/auth/me", headers=auth_headers)
        assert after.status_code == 401
        assert after.json()["message"] == "Invalid or expired session"
        assert after.headers["www-authenticate"] == "Bearer"

    def test_signout_leaves_other_sessions(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        auth_headers: dict,
        sign_in,
    ):
        other = sign_in("jane@example.com", TEST_PASSWORD)

        test_client.post(f"{api_v1_prefix}/auth/signout", headers=auth_headers)

        response = test_client.get(
            f"{api_v1_prefix}/auth/me",
            headers=_bearer(other["accessToken"]),
        )
        assert response.status_code == 200

    def test_signout_requires_token(self, test_client: TestClient, api_v1_prefix: str):
        response = test_client.post(f"{api_v1_prefix}/auth/signout")

        assert response.status_code == 401
        assert response.json()["message"] == "Access token is required"


class TestRefresh:
    """Tests for POST /api/v1/auth/refresh."""

    def test_refresh_issues_access_token_for_same_session(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        api_settings,
        signed_up_user: dict,
    ):
        # Act
        response = test_client.post(
            f"{api_v1_prefix}/auth/refresh",
            json={"refreshToken": signed_up_user["refreshToken"]},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Token refreshed successfully"
        new_token = body["data"]["accessToken"]

        jwt_service = JWTService(
            access_secret=api_settings.jwt_access_secret.get_secret_value(),
            refresh_secret=api_settings.jwt_refresh_secret.get_secret_value(),
        )
        old = jwt_service.verify_access_token(signed_up_user["accessToken"])
        new = jwt_service.verify_access_token(new_token)
        assert new.session_id == old.session_id
        assert new.user_id == old.user_id

        me = test_client.get(f"{api_v1_prefix}/auth/me", headers=_bearer(new_token))
        assert me.status_code == 200

    def test_refresh_requires_token(self, test_client: TestClient, api_v1_prefix: str):
        response = test_client.post(f"{api_v1_prefix}/auth/refresh", json={})

        assert response.status_code == 401
        assert response.json()["message"] == "Refresh token is required"

    def test_refresh_rejects_access_token(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signed_up_user: dict,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/auth/refresh",
            json={"refreshToken": signed_up_user["accessToken"]},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"

    def test_refresh_rejects_expired_token(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        api_settings,
        signed_up_user: dict,
    ):
        # Arrange
        jwt_service = JWTService(
            access_secret=api_settings.jwt_access_secret.get_secret_value(),
            refresh_secret=api_settings.jwt_refresh_secret.get_secret_value(),
        )
        payload = jwt_service.verify_refresh_token(signed_up_user["refreshToken"])
        expired = jwt_service.create_refresh_token(
            payload.user_id,
            payload.session_id,
            expires_delta=timedelta(seconds=-1),
        )

        # Act
        response = test_client.post(
            f"{api_v1_prefix}/auth/refresh",
            json={"refreshToken": expired},
        )

        # Assert
        assert response.status_code == 401
        assert response.json()["message"] == "Refresh token expired"

    def test_refresh_after_signout_fails(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signed_up_user: dict,
        auth_headers: dict,
    ):
        test_client.post(f"{api_v1_prefix}/auth/signout", headers=auth_headers)

        response = test_client.post(
            f"{api_v1_prefix}/auth/refresh",
            json={"refreshToken": signed_up_user["refreshToken"]},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired session"


class TestAccessTokenChecks:
    """The bearer gate on a protected route."""

    @pytest.mark.parametrize(
        ("headers", "message"),
        [
            ({}, "Access token is required"),
            ({"Authorization": "Bearer garbage"}, "Invalid token"),
            ({"Authorization": "Basic dXNlcjpwYXNz"}, "Access token is required"),
        ],
    )
    def test_rejected_headers(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        headers: dict,
        message: str,
    ):
        response = test_client.get(f"{api_v1_prefix}/auth/me", headers=headers)

        assert response.status_code == 401
        assert response.json()["message"] == message

    def test_refresh_token_is_not_an_access_token(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        signed_up_user: dict,
    ):
        response = test_client.get(
            f"{api_v1_prefix}/auth/me",
            headers=_bearer(signed_up_user["refreshToken"]),
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_expired_access_token(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        api_settings,
        signed_up_user: dict,
    ):
        jwt_service = JWTService(
            access_secret=api_settings.jwt_access_secret.get_secret_value(),
            refresh_secret=api_settings.jwt_refresh_secret.get_secret_value(),
        )
        payload = jwt_service.verify_access_token(signed_up_user["accessToken"])
        expired = jwt_service.create_access_token(
            payload.user_id,
            payload.session_id,
            expires_delta=timedelta(seconds=-1),
        )

        response = test_client.get(f"{api_v1_prefix}/auth/me", headers=_bearer(expired))

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_EXPIRED"

    def test_me_returns_current_user(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        auth_headers: dict,
    ):
        response = test_client.get(f"{api_v1_prefix}/auth/me", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User retrieved successfully"
        assert body["data"]["email"] == "jane@example.com"
        assert body["data"]["firstName"] == "Jane"


class TestChangePassword:
    """Tests for POST /api/v1/auth/change-password."""

    def _change(self, client, prefix, headers, current, new, confirmation=None):
        return client.post(
            f"{prefix}/auth/change-password",
            headers=headers,
            json={
                "currentPassword": current,
                "newPassword": new,
                "newPasswordConfirmation": confirmation or new,
            },
        )

    def test_change_password_signs_out_other_sessions(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        auth_headers: dict,
        sign_in,
    ):
        """Only the session that changed the password stays signed in."""
        # Arrange
        other = sign_in("jane@example.com", TEST_PASSWORD)

        # Act
        response = self._change(
            test_client,
            api_v1_prefix,
            auth_headers,
            TEST_PASSWORD,
            "new-secret",
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Password changed successfully"
        assert body["data"]["invalidatedSessions"] == 1

        current = test_client.get(f"{api_v1_prefix}/auth/me", headers=auth_headers)
        assert current.status_code == 200
        stale = test_client.get(
            f"{api_v1_prefix}/auth/me",
            headers=_bearer(other["accessToken"]),
        )
        assert stale.status_code == 401

    def test_new_password_works_and_old_does_not(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        auth_headers: dict,
        sign_in,
    ):
        self._change(test_client, api_v1_prefix, auth_headers, TEST_PASSWORD, "new-secret")

        sign_in("jane@example.com", "new-secret")
        old = test_client.post(
            f"{api_v1_prefix}/auth/signin",
            json={"email": "jane@example.com", "password": TEST_PASSWORD},
        )
        assert old.status_code == 401

    def test_wrong_current_password(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        auth_headers: dict,
    ):
        response = self._change(
            test_client,
            api_v1_prefix,
            auth_headers,
            "wrong-password",
            "new-secret",
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Current password is incorrect"

    def test_confirmation_mismatch(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        auth_headers: dict,
    ):
        response = self._change(
            test_client,
            api_v1_prefix,
            auth_headers,
            TEST_PASSWORD,
            "new-secret",
            "other-secret",
        )

        assert response.status_code == 400
        assert response.json()["message"] == "New passwords do not match"

    def test_requires_authentication(self, test_client: TestClient, api_v1_prefix: str):
        response = self._change(test_client, api_v1_prefix, {}, TEST_PASSWORD, "new-secret")

        assert response.status_code == 401
