"""
Security utilities for password hashing and JWT token handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import uuid4
import hashlib

import bcrypt
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from flowops.core.config import get_settings

settings = get_settings()


def hash_token(token: str) -> str:
    """
    Hash a JWT token for storage in blacklist.

    Tokens are stored hashed so a leaked blacklist cannot be replayed.
    """
    return hashlib.sha256(token.encode()).hexdigest()


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


def _create_token(subject: str | Any, token_type: str, expire: datetime) -> str:
    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "type": token_type,
        "jti": uuid4().hex,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _create_token(subject, "access", expire)


def create_refresh_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """Create a JWT refresh token."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _create_token(subject, "refresh", expire)


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token. Returns payload or None if invalid."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def token_expiry(payload: dict) -> Optional[datetime]:
    exp_timestamp = payload.get("exp")
    if not exp_timestamp:
        return None
    return datetime.fromtimestamp(exp_timestamp, tz=timezone.utc)


def is_token_blacklisted(token: str, db: Session) -> bool:
    """
    Check if a token has been blacklisted (revoked).

    Args:
        token: The JWT token string
        db: Database session

    Returns:
        True if token is blacklisted, False otherwise
    """
    from flowops.models.token_blacklist import TokenBlacklist

    blacklisted = db.get(TokenBlacklist, hash_token(token))
    return blacklisted is not None


def blacklist_token(token: str, expires_at: datetime, db: Session) -> None:
    """
    Add a token to the blacklist.

    Args:
        token: The JWT token string to blacklist
        expires_at: When the token expires (for cleanup)
        db: Database session
    """
    from flowops.models.token_blacklist import TokenBlacklist

    token_hash_value = hash_token(token)

    if db.get(TokenBlacklist, token_hash_value) is None:
        db.add(TokenBlacklist(token_hash=token_hash_value, expires_at=expires_at))
        db.commit()


def cleanup_expired_tokens(db: Session) -> int:
    """
    Remove expired tokens from the blacklist.

    Returns:
        Number of tokens removed
    """
    from flowops.models.token_blacklist import TokenBlacklist

    now = datetime.now(timezone.utc)
    result = db.query(TokenBlacklist).filter(
        TokenBlacklist.expires_at < now
    ).delete()

    db.commit()
    return result
