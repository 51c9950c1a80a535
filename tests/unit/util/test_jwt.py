"""Unit tests for JWT token utilities."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from diary.config import AuthSettings
from diary.domain.service import JWTService
from diary.domain.value import UserId
from diary.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-key-at-least-32-bytes")


class TestTokens:
    """Tests for create_token() and verify_token()."""

    def test_round_trip_carries_user_id(self):
        user_id = str(uuid4())

        payload = verify_token(create_token(user_id, SETTINGS), SETTINGS)

        assert payload.user_id == user_id
        assert payload.exp > datetime.now(timezone.utc) + timedelta(days=6)

    def test_expired_token_is_rejected(self):
        token = jwt.encode(
            {"user_id": "u", "exp": datetime.now(timezone.utc) - timedelta(seconds=1)},
            SETTINGS.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_wrong_secret_is_rejected(self):
        other = AuthSettings(jwt_secret="another-secret-key-at-least-32-bytes")

        with pytest.raises(JWTError):
            verify_token(create_token("u", other), SETTINGS)

    def test_token_without_user_id_is_rejected(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            SETTINGS.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(JWTError):
            verify_token(token, SETTINGS)

    def test_garbage_is_rejected(self):
        with pytest.raises(JWTError):
            verify_token("not.a.jwt", SETTINGS)


class TestJWTService:
    """Tests for JWTService."""

    def test_service_round_trip(self):
        service = JWTService(SETTINGS)
        user_id = UserId(uuid4())

        payload = service.verify_token(service.create_token(user_id))

        assert payload.user_id == str(user_id)
