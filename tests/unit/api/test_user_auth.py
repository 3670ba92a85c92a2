"""
Name: User Authentication Tests

Responsibilities:
  - Validate register/login success and failure responses
  - Ensure /auth/profile requires a token
  - Verify the admin-only /auth/users listing
"""

import pytest

ADMIN_PASSWORD = "admin123"

pytestmark = pytest.mark.unit


def _register(client, **overrides):
    body = {"email": "new@example.com", "full_name": "New User", "password": "secret1"}
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


class TestRegister:
    def test_register_returns_token_and_regular_role(self, client):
        res = _register(client)

        assert res.status_code == 201
        body = res.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["role"] == "user"
        assert body["user"]["email"] == "new@example.com"
        assert "password_hash" not in body["user"]
        assert body["token"]
        assert body["expires_in"] > 0

    def test_client_cannot_choose_role(self, client):
        res = _register(client, role="admin")

        assert res.status_code == 400
        assert res.json()["code"] == "VALIDATION_ERROR"

    def test_duplicate_email_is_rejected_case_insensitively(self, client):
        assert _register(client).status_code == 201

        res = _register(client, email="NEW@example.com")

        assert res.status_code == 400
        assert res.json()["code"] == "CONFLICT"
        assert res.json()["detail"] == "User already exists"

    @pytest.mark.parametrize("missing", ["email", "full_name", "password"])
    def test_missing_field_is_400(self, client, missing):
        body = {"email": "a@example.com", "full_name": "A", "password": "secret1"}
        body.pop(missing)

        res = client.post("/api/auth/register", json=body)

        assert res.status_code == 400
        fields = [e.get("field") for e in res.json()["errors"]]
        assert f"body.{missing}" in fields

    @pytest.mark.parametrize(
        "overrides",
        [{"email": "not-an-email"}, {"password": "123"}, {"full_name": "   "}],
    )
    def test_invalid_values_are_400(self, client, overrides):
        res = _register(client, **overrides)

        assert res.status_code == 400


class TestLogin:
    def test_login_success(self, client, admin_user):
        res = client.post(
            "/api/auth/login",
            json={"email": "ADMIN@example.com", "password": ADMIN_PASSWORD},
        )

        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Login successful"
        assert body["user"]["role"] == "admin"
        assert body["token"]

    def test_wrong_password_and_unknown_email_look_the_same(self, client, admin_user):
        wrong = client.post(
            "/api/auth/login", json={"email": "admin@example.com", "password": "nope"}
        )
        unknown = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "nope"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["detail"] == unknown.json()["detail"] == "Invalid credentials"

    def test_token_from_login_works_on_protected_routes(self, client, admin_user):
        token = client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "password": ADMIN_PASSWORD},
        ).json()["token"]

        res = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

        assert res.status_code == 200
        assert res.json()["user"]["email"] == "admin@example.com"


class TestProfileAndUsers:
    def test_profile_requires_token(self, client):
        res = client.get("/api/auth/profile")

        assert res.status_code == 401
        assert res.json()["code"] == "UNAUTHORIZED"

    def test_profile_rejects_garbage_token(self, client):
        res = client.get("/api/auth/profile", headers={"Authorization": "Bearer nope"})

        assert res.status_code == 401

    def test_profile_returns_current_user(self, client, user_headers, regular_user):
        res = client.get("/api/auth/profile", headers=user_headers)

        assert res.status_code == 200
        assert res.json()["user"]["id"] == str(regular_user.id)

    def test_users_listing_is_admin_only(self, client, user_headers, admin_headers):
        forbidden = client.get("/api/auth/users", headers=user_headers)
        allowed = client.get("/api/auth/users", headers=admin_headers)

        assert forbidden.status_code == 403
        assert allowed.status_code == 200
        emails = {u["email"] for u in allowed.json()["users"]}
        assert emails == {"admin@example.com", "user@example.com"}
