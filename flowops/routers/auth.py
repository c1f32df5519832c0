"""
Authentication router with register, login, logout, refresh and me endpoints.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_bearer_token, get_current_user
from flowops.core.errors import Forbidden, Unauthenticated, ValidationError
from flowops.core.security import (
    blacklist_token,
    create_access_token,
    create_refresh_token,
    decode_token,
    is_token_blacklisted,
    token_expiry,
    verify_password,
)
from flowops.db.session import get_db
from flowops.models.enums import Role, UserStatus
from flowops.models.user import User
from flowops.schemas.auth import Token, TokenRefresh, UserLogin, UserRegister
from flowops.schemas.common import MessageResponse
from flowops.schemas.user import UserResponse
from flowops.services.notifications import Mailbox
from flowops.services.store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_tokens(user: User) -> Token:
    return Token(
        access_token=create_access_token(subject=str(user.id)),
        refresh_token=create_refresh_token(subject=str(user.id)),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)) -> UserResponse:
    """
    Register a new account.

    The account is created pending as an employee and cannot log in until an
    approver activates it. Approvers are notified.
    """
    users = UserStore(db)
    taken = users.exists(username=user_data.username, email=user_data.email)
    if taken:
        raise ValidationError.single(taken, f"{taken.capitalize()} already registered")

    user = users.create(
        user_data,
        role=Role.EMPLOYEE.value,
        status=UserStatus.PENDING.value,
        is_system_admin=False,
    )
    Mailbox(db).notify_registration(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Registered {user.username} for {user.establishment} (pending approval)")
    return UserResponse.model_validate(user)


@router.post("/login", response_model=Token)
def login(user_data: UserLogin, db: Session = Depends(get_db)) -> Token:
    """
    Authenticate with username or email and return tokens.

    Pending and deactivated accounts are told so, but only after the password
    checks out.
    """
    user = UserStore(db).find_by_login(user_data.username_or_email)
    if user is None or not verify_password(user_data.password, user.hashed_password):
        raise Unauthenticated("Invalid credentials")

    if user.status == UserStatus.PENDING.value:
        raise Forbidden("Account pending approval")
    if user.status == UserStatus.REMOVED.value:
        raise Forbidden("Account deactivated")

    return _issue_tokens(user)


@router.post("/refresh", response_model=Token)
def refresh(token_data: TokenRefresh, db: Session = Depends(get_db)) -> Token:
    """
    Exchange a refresh token for a new access and refresh token.

    Implements token rotation: the old refresh token is blacklisted, so each
    refresh token works exactly once.
    """
    old_token = token_data.refresh_token
    payload = decode_token(old_token)

    if payload is None:
        raise Unauthenticated("Invalid or expired refresh token")

    if payload.get("type") != "refresh":
        raise Unauthenticated("Invalid token type")

    if is_token_blacklisted(old_token, db):
        raise Unauthenticated("Refresh token has already been used. Please log in again.")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise Unauthenticated("Invalid token payload")

    user = UserStore(db).find(user_id)
    if user is None or user.status != UserStatus.ACTIVE.value:
        raise Unauthenticated("User not found")

    blacklist_token(old_token, token_expiry(payload), db)

    return _issue_tokens(user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: str = Depends(get_bearer_token),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Revoke the presented access token."""
    payload = decode_token(token)
    blacklist_token(token, token_expiry(payload), db)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)
