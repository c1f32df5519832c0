"""
Authorization policy.

Pure, stateless decisions over a session principal. Nothing here touches the
database; routers and services call these helpers and raise ``Forbidden`` /
``NotFound`` themselves, or use the ``ensure_*`` wrappers.

Two independent fields decide privilege:

- ``role`` orders staff inside one establishment.
- ``is_system_admin`` is the only flag that lifts the establishment fence.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional
from uuid import UUID

from flowops.core.errors import Forbidden
from flowops.models.enums import Role


class Scope(str, Enum):
    GLOBAL = "global"
    ESTABLISHMENT = "establishment"


@dataclass(frozen=True)
class Principal:
    """The acting user as seen by the policy layer."""
    id: UUID
    name: str
    role: Role
    establishment: str
    is_system_admin: bool = False

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(
            id=user.id,
            name=user.name,
            role=Role(user.role),
            establishment=user.establishment,
            is_system_admin=bool(user.is_system_admin),
        )


# approver role -> applicant roles it may approve or reject
APPROVAL_HIERARCHY: Dict[Role, FrozenSet[Role]] = {
    Role.ADMIN: frozenset({Role.MANAGER}),
    Role.MANAGER: frozenset({Role.SUPERVISOR}),
    Role.SUPERVISOR: frozenset({Role.LEAD}),
    Role.LEAD: frozenset({Role.EMPLOYEE}),
    Role.EMPLOYEE: frozenset(),
}

# Roles that can be handed out through the API. ADMIN belongs to system-admin
# accounts created by bootstrap only.
ASSIGNABLE_ROLES: FrozenSet[Role] = frozenset(
    {Role.EMPLOYEE, Role.LEAD, Role.SUPERVISOR, Role.MANAGER}
)


def is_system_admin(principal: Optional[Principal]) -> bool:
    return principal is not None and principal.is_system_admin is True


def can_manage_users(principal: Optional[Principal]) -> bool:
    if principal is None:
        return False
    return principal.role == Role.MANAGER or is_system_admin(principal)


def can_manage_menu(principal: Optional[Principal]) -> bool:
    """Menu items and recipe ingredients are written by managers only."""
    return can_manage_users(principal)


def visibility_scope(principal: Principal) -> Scope:
    if is_system_admin(principal) or principal.role == Role.ADMIN:
        return Scope.GLOBAL
    return Scope.ESTABLISHMENT


def has_global_scope(principal: Principal) -> bool:
    return visibility_scope(principal) == Scope.GLOBAL


def can_see(principal: Principal, establishment: str) -> bool:
    """True if a row owned by ``establishment`` is visible to the principal."""
    return has_global_scope(principal) or principal.establishment == establishment


def approvable_roles(principal: Principal) -> FrozenSet[Role]:
    return APPROVAL_HIERARCHY.get(principal.role, frozenset())


def can_review(principal: Principal, target_role: str, target_establishment: str) -> bool:
    """Approve/reject check: role hierarchy plus establishment fence."""
    try:
        role = Role(target_role)
    except ValueError:
        return False
    if role not in approvable_roles(principal):
        return False
    return can_see(principal, target_establishment)


def ensure_can_review(principal: Principal, target) -> None:
    """Raise ``Forbidden`` unless ``principal`` may approve/reject ``target``."""
    try:
        role = Role(target.role)
    except ValueError:
        raise Forbidden("Cannot review this user")
    if role not in approvable_roles(principal):
        raise Forbidden(f"A {principal.role.value} cannot review {role.value} accounts")
    if not can_see(principal, target.establishment):
        raise Forbidden("Cannot review users from another establishment")


def can_edit_user(principal: Principal, target) -> bool:
    """
    Profile edits: system admins edit anyone (system-admin accounts only
    themselves), managers edit their establishment, leads edit employees.
    """
    if target.is_system_admin:
        return is_system_admin(principal) and principal.id == target.id
    if not can_see(principal, target.establishment):
        return False
    if is_system_admin(principal) or principal.role == Role.MANAGER:
        return True
    return principal.role == Role.LEAD and target.role == Role.EMPLOYEE.value


def can_change_roles(principal: Principal) -> bool:
    return can_manage_users(principal)


def resolve_establishment(principal: Principal, requested: Optional[str]) -> str:
    """
    Establishment a new row is written to.

    System admins may name any establishment; everyone else always writes to
    their own, whatever the payload says.
    """
    if is_system_admin(principal) and requested:
        return requested
    return principal.establishment
