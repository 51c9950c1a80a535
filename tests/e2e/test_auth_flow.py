"""End-to-end tests for email/password authentication."""

from diary.domain.service import EmailClient
from tests.conftest import PASSWORD, sent_otp
from tests.harness import ApiClient, create_api_fixture

# API client fixture over a fully mocked container
api = create_api_fixture()


def register_and_verify(api: ApiClient, email: str = "alice@example.com") -> str:
    """Register an account, verify it and return the session token."""
    response = api.http.post(
        "/auth/register", json={"name": "Alice", "email": email, "password": PASSWORD}
    )
    assert response.status_code == 201
    code = sent_otp(api.resolve(EmailClient), email)
    response = api.http.post("/auth/verify-otp", json={"email": email, "otp": code})
    assert response.status_code == 200
    return response.json()["token"]


class TestHealth:
    """Health endpoint."""

    def test_health(self, api: ApiClient):
        response = api.http.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRegistrationFlow:
    """Register, verify, log in and read the profile."""

    def test_register_verify_login_me(self, api: ApiClient):
        """Should walk the whole email sign-up flow."""
        # Act
        register_and_verify(api)
        login = api.http.post(
            "/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
        )
        token = login.json()["token"]
        me = api.http.get("/auth/me", headers=api.bearer(token))

        # Assert
        assert login.status_code == 200
        assert me.status_code == 200
        body = me.json()
        assert body["email"] == "alice@example.com"
        assert body["auth_methods"] == ["email"]
        assert body["is_email_verified"] is True
        assert "password_hash" not in body

    def test_login_before_verification(self, api: ApiClient):
        api.http.post(
            "/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": PASSWORD},
        )

        response = api.http.post(
            "/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "requires_verification"
        assert response.json()["requires_verification"] is True

    def test_duplicate_registration(self, api: ApiClient):
        register_and_verify(api)

        response = api.http.post(
            "/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": PASSWORD},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "conflict"

    def test_weak_password_is_a_validation_error(self, api: ApiClient):
        response = api.http.post(
            "/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": "weak"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "validation_error"
        assert body["detail"] == "Password must be at least 8 characters"

    def test_wrong_otp_reports_attempts_left(self, api: ApiClient):
        api.http.post(
            "/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": PASSWORD},
        )
        code = sent_otp(api.resolve(EmailClient), "alice@example.com")
        wrong = "0000" if code != "0000" else "1111"

        response = api.http.post(
            "/auth/verify-otp", json={"email": "alice@example.com", "otp": wrong}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "otp_mismatch"
        assert response.json()["attempts_remaining"] == 4


class TestLockout:
    """Brute force protection on /auth/login."""

    def test_lock_is_indistinguishable_from_wrong_password(self, api: ApiClient):
        # Arrange
        register_and_verify(api)
        wrong = {"email": "alice@example.com", "password": "Wrong1234"}
        failures = [api.http.post("/auth/login", json=wrong) for _ in range(5)]

        # Act
        locked = api.http.post(
            "/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
        )

        # Assert
        assert locked.status_code == failures[0].status_code == 400
        assert locked.json() == failures[0].json()
        assert locked.json()["code"] == "invalid_credentials"

    def test_unknown_email_matches_wrong_password(self, api: ApiClient):
        register_and_verify(api)

        unknown = api.http.post(
            "/auth/login", json={"email": "nobody@example.com", "password": PASSWORD}
        )
        wrong = api.http.post(
            "/auth/login", json={"email": "alice@example.com", "password": "Wrong1234"}
        )

        assert unknown.json() == wrong.json()


class TestProtectedRoutes:
    """Bearer token handling."""

    def test_missing_token(self, api: ApiClient):
        response = api.http.get("/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token(self, api: ApiClient):
        response = api.http.get("/auth/me", headers=api.bearer("garbage"))

        assert response.status_code == 401

    def test_change_password_then_login(self, api: ApiClient):
        token = register_and_verify(api)

        changed = api.http.post(
            "/auth/change-password",
            json={"current_password": PASSWORD, "new_password": "Changed123"},
            headers=api.bearer(token),
        )
        login = api.http.post(
            "/auth/login", json={"email": "alice@example.com", "password": "Changed123"}
        )

        assert changed.status_code == 200
        assert login.status_code == 200

    def test_update_profile_with_avatar(self, api: ApiClient):
        token = register_and_verify(api)

        response = api.http.patch(
            "/auth/me",
            data={"name": "Alice Smith"},
            files={"avatar": ("me.png", b"\x89PNG", "image/png")},
            headers=api.bearer(token),
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Alice Smith"
        assert response.json()["avatar_url"].startswith("http://testserver/media/")


class TestForgotPassword:
    """Password recovery endpoints never reveal whether an account exists."""

    def test_same_answer_for_unknown_email(self, api: ApiClient):
        register_and_verify(api)

        known = api.http.post(
            "/auth/forgot-password/temporary", json={"email": "alice@example.com"}
        )
        unknown = api.http.post(
            "/auth/forgot-password/temporary", json={"email": "nobody@example.com"}
        )

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()
