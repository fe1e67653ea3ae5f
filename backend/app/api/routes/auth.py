from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import SESSION_COOKIE, get_current_user, get_db
from app.core.security import (
    hash_token,
    new_session_token,
    session_expiry,
    utc_now,
    verify_password,
)
from app.models.users import User, UserSession
from app.schemas.users import LoginRequest, UserRead

router = APIRouter()


@router.post("/login", response_model=UserRead)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> User:
    stmt = select(User).where(User.username == payload.username.strip())
    user = db.execute(stmt).scalar_one_or_none()
    if not user or not user.active or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = new_session_token()
    now = utc_now()
    expires_at = session_expiry()
    db.add(
        UserSession(
            user_id=user.id,
            token_hash=hash_token(token),
            created_at=now,
            expires_at=expires_at,
        )
    )
    user.last_login = now
    db.commit()
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=int((expires_at - now).total_seconds()),
        path="/",
    )
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    request: Request,
    response: Response,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        stmt = select(UserSession).where(UserSession.token_hash == hash_token(token))
        session = db.execute(stmt).scalar_one_or_none()
        if session and session.revoked_at is None:
            session.revoked_at = utc_now()
            db.commit()
    response.delete_cookie(SESSION_COOKIE, path="/")


@router.get("/me", response_model=UserRead)
def me(user: User = Depends(get_current_user)) -> User:
    return user
