"""
Unit tests for security utilities.
"""
from datetime import datetime, timedelta, timezone

from flowops.core.security import (
    blacklist_token,
    cleanup_expired_tokens,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    is_token_blacklisted,
    token_expiry,
    verify_password,
)


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password(self):
        """Hashing produces something other than the password."""
        hashed = hash_password("mysecretpassword")

        assert hashed != "mysecretpassword"
        assert hashed.startswith("$2")

    def test_hash_password_different_each_time(self):
        """Same password, different salts."""
        assert hash_password("mysecretpassword") != hash_password("mysecretpassword")

    def test_verify_password(self):
        hashed = hash_password("mysecretpassword")

        assert verify_password("mysecretpassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_malformed_hash(self):
        """A corrupt stored hash is a failed login, not a crash."""
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_decode_access_token(self):
        token = create_access_token(subject="user-123")

        payload = decode_token(token)

        assert payload["sub"] == "user-123"
        assert payload["type"] == "access"
        assert payload["jti"]

    def test_decode_refresh_token(self):
        payload = decode_token(create_refresh_token(subject="user-456"))

        assert payload["sub"] == "user-456"
        assert payload["type"] == "refresh"

    def test_tokens_are_unique(self):
        """Two tokens minted in the same second still differ (jti)."""
        assert create_access_token(subject="u") != create_access_token(subject="u")

    def test_decode_invalid_token(self):
        assert decode_token("invalid.token.here") is None

    def test_decode_expired_token(self):
        token = create_access_token(subject="u", expires_delta=timedelta(seconds=-10))

        assert decode_token(token) is None

    def test_token_expiry(self):
        token = create_access_token(subject="u", expires_delta=timedelta(minutes=5))

        expiry = token_expiry(decode_token(token))

        assert expiry > datetime.now(timezone.utc)
        assert expiry <= datetime.now(timezone.utc) + timedelta(minutes=5, seconds=1)


class TestBlacklist:
    """Tests for token revocation storage."""

    def test_blacklist_token(self, db):
        token = create_access_token(subject="u")
        assert is_token_blacklisted(token, db) is False

        blacklist_token(token, datetime.now(timezone.utc) + timedelta(hours=1), db)

        assert is_token_blacklisted(token, db) is True

    def test_blacklist_twice_is_harmless(self, db):
        token = create_access_token(subject="u")
        expires = datetime.now(timezone.utc) + timedelta(hours=1)

        blacklist_token(token, expires, db)
        blacklist_token(token, expires, db)

        assert is_token_blacklisted(token, db) is True

    def test_cleanup_expired_tokens(self, db):
        expired = create_access_token(subject="a")
        live = create_access_token(subject="b")
        blacklist_token(expired, datetime.now(timezone.utc) - timedelta(hours=1), db)
        blacklist_token(live, datetime.now(timezone.utc) + timedelta(hours=1), db)

        removed = cleanup_expired_tokens(db)

        assert removed == 1
        assert is_token_blacklisted(expired, db) is False
        assert is_token_blacklisted(live, db) is True
