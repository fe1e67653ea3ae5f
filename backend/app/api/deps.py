from collections.abc import Callable, Generator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import as_utc, hash_token, utc_now
from app.db.session import SessionLocal
from app.models.enums import UserRole
from app.models.users import User, UserSession

SESSION_COOKIE = "session"


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    stmt = select(UserSession).where(UserSession.token_hash == hash_token(token))
    session = db.execute(stmt).scalar_one_or_none()
    if not session or session.revoked_at is not None or as_utc(session.expires_at) <= utc_now():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
    user = db.get(User, session.user_id)
    if not user or not user.active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    allowed = {role.value for role in roles}

    def dependency(user: User = Depends(get_current_user)) -> User:
        if str(user.role).strip() not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{' or '.join(sorted(allowed))} role required",
            )
        return user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_import_access = require_roles(UserRole.ADMIN, UserRole.DATA_MANAGER)
