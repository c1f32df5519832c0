"""
Token blacklist model for handling token revocation.

Tokens land here on logout (access token) and on refresh rotation (the used
refresh token), so each refresh token works once.
"""
from sqlalchemy import Column, String, DateTime, Index

from flowops.db.base import Base, utcnow


class TokenBlacklist(Base):
    """Store revoked/blacklisted JWT tokens."""
    __tablename__ = "token_blacklist"

    # sha256 of the JWT string
    token_hash = Column(String(64), primary_key=True)

    blacklisted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Expiry of the token itself; rows past it can be pruned
    expires_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_token_blacklist_expires', 'expires_at'),
    )
