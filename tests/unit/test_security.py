"""Unit tests for security utilities (password hashing and JWT tokens)."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import JWTError

from ledger.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret"


class TestPasswordHashing:
    """Test password hashing functions."""

    def test_hash_password(self):
        """Test that password is hashed (not stored in plain text)."""
        password = "MySecurePassword123!"
        hashed = hash_password(password)

        assert hashed != password
        assert isinstance(hashed, str)
        # Argon2 hashes start with $argon2
        assert hashed.startswith("$argon2")

    def test_verify_password_correct(self):
        password = "MySecurePassword123!"
        assert verify_password(password, hash_password(password)) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("MySecurePassword123!")
        assert verify_password("WrongPassword456!", hashed) is False

    def test_hash_same_password_different_hashes(self):
        """Hashing the same password twice produces different hashes (salt)."""
        password = "MySecurePassword123!"
        hash1 = hash_password(password)
        hash2 = hash_password(password)

        assert hash1 != hash2
        assert verify_password(password, hash1) is True
        assert verify_password(password, hash2) is True


class TestJWTTokens:
    """Test JWT token creation and validation."""

    def test_create_access_token(self):
        user_id = uuid4()
        token = create_access_token(user_id, secret=SECRET)

        payload = decode_token(token, SECRET)
        assert payload["sub"] == str(user_id)
        assert "exp" in payload

    def test_decode_with_wrong_secret_fails(self):
        token = create_access_token(uuid4(), secret=SECRET)

        with pytest.raises(JWTError):
            decode_token(token, "another-secret")

    def test_expired_token_fails(self):
        token = create_access_token(uuid4(), secret=SECRET, expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            decode_token(token, SECRET)

    def test_tampered_token_fails(self):
        token = create_access_token(uuid4(), secret=SECRET)
        tampered = token[:-4] + ("AAAA" if not token.endswith("AAAA") else "BBBB")

        with pytest.raises(JWTError):
            decode_token(tampered, SECRET)
