"""
Account endpoints: register, login, logout and the current user.

Usernames are compared trimmed and lowercased. Passwords are stored as
PBKDF2 hashes; login issues an opaque session token.
"""
import logging
import os
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bitbinder.audit import AuditAction, AuditStatus, log as audit_log
from bitbinder.api.deps import get_current_session, get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import users as user_repo
from bitbinder.utils.password_crypto import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 4


def session_ttl_hours() -> float:
    raw = os.getenv("SESSION_TTL_HOURS")
    if raw is None:
        return 0.0
    try:
        return max(float(raw), 0.0)
    except ValueError:
        return 0.0


def validate_registration(username: Optional[str], password: Optional[str], confirm_password: Optional[str] = None) -> str:
    """Return the normalized username or raise ValueError with a user-facing message."""
    name = user_repo.normalize_username(username)
    if not name:
        raise ValueError("Username cannot be empty.")
    if len(name) < USERNAME_MIN_LENGTH:
        raise ValueError("Username must be at least 3 characters.")
    if not password or len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError("Password must be at least 4 characters.")
    if confirm_password is not None and confirm_password != password:
        raise ValueError("Passwords do not match.")
    return name


@router.post("/register", response_model=schemas.RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, db: Session = Depends(get_db)):
    try:
        username = validate_registration(payload.username, payload.password, payload.confirm_password)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if user_repo.get_user_by_username(db, username):
        raise HTTPException(status_code=409, detail="Username already taken.")
    user = user_repo.create_user(db, username=username, password=payload.password)
    audit_log(
        db,
        action=AuditAction.USER_REGISTER,
        target_type="user",
        target_id=user.id,
        actor_user_id=user.id,
        metadata={"username": user.username},
    )
    logger.info("Registered user %s", user.username)
    return schemas.RegisterResponse(id=user.id, username=user.username)


@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    user = user_repo.get_user_by_username(db, payload.username)
    if not user:
        raise HTTPException(status_code=401, detail="User not found.")
    if not verify_password(payload.password or "", user.password_hash):
        audit_log(
            db,
            action=AuditAction.USER_LOGIN,
            status=AuditStatus.FAILURE,
            target_type="user",
            target_id=user.id,
            actor_user_id=user.id,
        )
        raise HTTPException(status_code=401, detail="Incorrect password.")
    session, token = user_repo.create_session(db, user_id=user.id, ttl_hours=session_ttl_hours())
    audit_log(
        db,
        action=AuditAction.USER_LOGIN,
        target_type="user",
        target_id=user.id,
        actor_user_id=user.id,
        metadata={"token_id": session.token_id},
    )
    return schemas.LoginResponse(
        token=token,
        user_id=user.id,
        username=user.username,
        expires_at=session.expires_at,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    user_and_session: Tuple[models.User, models.UserSession] = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    user, session = user_and_session
    user_repo.revoke_session(db, session=session)
    audit_log(
        db,
        action=AuditAction.USER_LOGOUT,
        target_type="user",
        target_id=user.id,
        actor_user_id=user.id,
        metadata={"token_id": session.token_id},
    )
    return None


@router.get("/me", response_model=schemas.User)
def me(current_user: models.User = Depends(get_current_user)):
    return current_user
