"""
User management router: listing, approvals, direct creation and edits.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal, require_system_admin
from flowops.core.errors import Forbidden, ValidationError
from flowops.core.policy import ASSIGNABLE_ROLES, Principal, can_change_roles, can_edit_user, is_system_admin
from flowops.db.session import get_db
from flowops.models.enums import Role, UserStatus
from flowops.schemas.user import ApproveRequest, UserCreate, UserResponse, UserUpdate
from flowops.services.approvals import ApprovalService
from flowops.services.store import UserStore

router = APIRouter(prefix="/users", tags=["users"])


def _ensure_assignable(role: Optional[str]) -> None:
    if role is not None and Role(role) not in ASSIGNABLE_ROLES:
        raise ValidationError.single("role", f"The {role} role cannot be assigned")


@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Users of the principal's establishment (all users for system admins)."""
    # System-admin accounts are only listed to system admins
    admin_filter = None if is_system_admin(principal) else False
    users = UserStore(db).list(principal, is_system_admin=admin_filter)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/pending", response_model=List[UserResponse])
def list_pending_users(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Pending registrations the principal is allowed to approve."""
    pending = ApprovalService(db).list_pending(principal)
    return [UserResponse.model_validate(u) for u in pending]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_system_admin),
):
    """Create an already-active account (system admins only)."""
    _ensure_assignable(user_data.role)
    users = UserStore(db)
    taken = users.exists(username=user_data.username, email=user_data.email)
    if taken:
        raise ValidationError.single(taken, f"{taken.capitalize()} already registered")

    user = users.create(user_data, status=UserStatus.ACTIVE.value, is_system_admin=False)
    db.commit()
    db.refresh(user)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/approve", response_model=UserResponse)
def approve_user(
    user_id: UUID,
    approval: Optional[ApproveRequest] = Body(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Activate a pending account, optionally granting a different role."""
    role = approval.role if approval is not None else None
    user = ApprovalService(db).approve(principal, user_id, role)
    db.commit()
    db.refresh(user)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/reject", response_model=UserResponse)
def reject_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    user = ApprovalService(db).reject(principal, user_id)
    db.commit()
    db.refresh(user)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UUID,
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Edit a profile.

    Role and establishment changes need user-management rights; leads may
    edit employees' contact details only.
    """
    users = UserStore(db)
    target = users.get(user_id, principal)
    if not can_edit_user(principal, target):
        raise Forbidden("Cannot edit this user")

    changes = update_data.model_dump(exclude_unset=True)
    if ("role" in changes or "establishment" in changes) and not can_change_roles(principal):
        raise Forbidden("Only managers can change roles or establishments")
    if "establishment" in changes and not principal.is_system_admin:
        raise Forbidden("Only system admins can move users between establishments")
    _ensure_assignable(changes.get("role"))
    if target.is_system_admin and "role" in changes:
        raise Forbidden("System admin roles cannot be changed")

    taken = users.exists(
        username=None,
        email=changes["email"] if changes.get("email") and changes["email"].lower() != target.email else None,
    )
    if taken:
        raise ValidationError.single(taken, f"{taken.capitalize()} already registered")

    user = users.update(user_id, update_data, principal)
    db.commit()
    db.refresh(user)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=UserResponse)
def deactivate_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Deactivate an active account. Accounts are never hard-deleted."""
    user = ApprovalService(db).deactivate(principal, user_id)
    db.commit()
    db.refresh(user)
    return UserResponse.model_validate(user)
