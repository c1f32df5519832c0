"""
Request dependencies: bearer token -> active user -> policy principal.
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from flowops.core.errors import Forbidden, Unauthenticated
from flowops.core.policy import Principal, is_system_admin
from flowops.core.security import decode_token, is_token_blacklisted
from flowops.db.session import get_db
from flowops.models.enums import UserStatus
from flowops.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to an active user.

    Invalid, expired, revoked or refresh tokens, unknown users and accounts
    that are not ``active`` all come back as 401.
    """
    payload = decode_token(token)
    if payload is None or payload.get("type") != "access":
        raise Unauthenticated("Invalid or expired token")

    if is_token_blacklisted(token, db):
        raise Unauthenticated("Token has been revoked")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise Unauthenticated("Invalid token payload")

    user = db.get(User, user_id)
    if user is None or user.status != UserStatus.ACTIVE.value:
        raise Unauthenticated()
    return user


def get_current_principal(user: User = Depends(get_current_user)) -> Principal:
    return Principal.from_user(user)


def require_system_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not is_system_admin(principal):
        raise Forbidden("System admin access required")
    return principal
