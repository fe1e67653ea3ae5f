from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import hash_password
from app.models.enums import UserRole
from app.models.users import User

logger = logging.getLogger(__name__)


def ensure_bootstrap_admin(
    db: Session,
    username: str | None = None,
    password: str | None = None,
) -> User:
    username = (username or settings.bootstrap_admin_username).strip()
    password = password or settings.bootstrap_admin_password
    admin = db.execute(select(User).where(User.username == username)).scalars().first()
    if admin:
        return admin
    if not password:
        raise RuntimeError("BOOTSTRAP_ADMIN_PASSWORD is required to create the admin user")
    admin = User(
        username=username,
        password_hash=hash_password(password),
        role=UserRole.ADMIN.value,
        active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created bootstrap admin user %s", username)
    return admin
