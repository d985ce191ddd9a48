"""Tests for password hashing, access tokens and password strength."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt
from pydantic import ValidationError

from src.projecthub.core.config import get_settings
from src.projecthub.core.security import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from src.projecthub.schemas.auth import RegisterRequest

pytestmark = pytest.mark.unit


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert hashed != "correct-horse-battery-staple"
        assert verify_password("correct-horse-battery-staple", hashed)

    def test_wrong_password_rejected(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert not verify_password("wrong-password", hashed)

    def test_invalid_hash_returns_false(self):
        assert not verify_password("anything", "not-an-argon2-hash")

    def test_dummy_hash_never_matches_common_input(self):
        assert not verify_password("", DUMMY_PASSWORD_HASH)
        assert not verify_password("password", DUMMY_PASSWORD_HASH)


class TestAccessTokens:
    def test_round_trip_claims(self):
        user_id = uuid4()
        token, expires_in = create_access_token(user_id, "teacher")

        payload = decode_token(token)
        assert payload is not None
        assert payload["sub"] == str(user_id)
        assert payload["role"] == "teacher"
        assert payload["type"] == ACCESS_TOKEN_TYPE
        assert expires_in == get_settings().access_token_expire_minutes * 60

    def test_custom_lifetime(self):
        _, expires_in = create_access_token(uuid4(), "user", timedelta(minutes=5))
        assert expires_in == 300

    def test_expired_token_rejected(self):
        token, _ = create_access_token(uuid4(), "user", timedelta(seconds=-1))
        assert decode_token(token) is None

    def test_tampered_token_rejected(self):
        token, _ = create_access_token(uuid4(), "user")
        assert decode_token(token[:-2] + "xx") is None

    def test_token_signed_with_other_key_rejected(self):
        settings = get_settings()
        forged = jwt.encode(
            {"sub": str(uuid4()), "role": "admin", "type": ACCESS_TOKEN_TYPE},
            "another-secret-key-that-is-long-enough-000",
            algorithm=settings.jwt_algorithm,
        )
        assert decode_token(forged) is None


class TestPasswordStrength:
    """Registration rejects guessable passwords using zxcvbn."""

    def test_weak_password_rejected(self):
        with pytest.raises(ValidationError, match="Weak password|too weak"):
            RegisterRequest(email="a@example.com", password="password1", full_name="A B")

    def test_strong_password_accepted(self):
        req = RegisterRequest(
            email="a@example.com",
            password="correct-horse-battery-staple-42",
            full_name="  Alice  ",
        )
        assert req.full_name == "Alice"

    def test_whitespace_name_rejected(self):
        with pytest.raises(ValidationError, match="Full name cannot be empty"):
            RegisterRequest(
                email="a@example.com",
                password="correct-horse-battery-staple-42",
                full_name="   ",
            )
