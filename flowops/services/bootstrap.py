"""
Startup bootstrap of the configured system admin account.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from flowops.core.config import Settings
from flowops.core.security import hash_password
from flowops.models import User
from flowops.models.enums import Role, UserStatus

logger = logging.getLogger(__name__)


def bootstrap_system_admin(db: Session, settings: Settings) -> Optional[User]:
    """
    Create the system admin from settings if it does not exist yet.

    Idempotent: an existing account with the configured username or email is
    promoted to an active system admin but its password is left alone.
    Returns None when no password is configured.
    """
    if not settings.SYSTEM_ADMIN_PASSWORD:
        logger.info("SYSTEM_ADMIN_PASSWORD not set, skipping system admin bootstrap")
        return None

    email = settings.SYSTEM_ADMIN_EMAIL.lower()
    user = db.execute(
        select(User).where((User.username == settings.SYSTEM_ADMIN_USERNAME) | (User.email == email))
    ).scalars().first()

    if user is None:
        user = User(
            name=settings.SYSTEM_ADMIN_NAME,
            email=email,
            username=settings.SYSTEM_ADMIN_USERNAME,
            hashed_password=hash_password(settings.SYSTEM_ADMIN_PASSWORD),
            role=Role.ADMIN.value,
            status=UserStatus.ACTIVE.value,
            establishment=settings.SYSTEM_ADMIN_ESTABLISHMENT,
            is_system_admin=True,
        )
        db.add(user)
        logger.info(f"Created system admin '{user.username}'")
    elif not user.is_system_admin or user.status != UserStatus.ACTIVE.value:
        user.is_system_admin = True
        user.role = Role.ADMIN.value
        user.status = UserStatus.ACTIVE.value
        logger.info(f"Promoted '{user.username}' to system admin")

    db.commit()
    return user
