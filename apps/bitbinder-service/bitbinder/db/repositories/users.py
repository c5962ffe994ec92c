"""
Repositories for accounts and login sessions.

Implements user create/lookup and session issue/lookup/revoke/touch.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from bitbinder.db import models
from bitbinder.utils import password_crypto


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def normalize_username(username: Optional[str]) -> str:
    return (username or "").strip().lower()


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return (
        db.query(models.User)
        .filter(models.User.username == normalize_username(username))
        .first()
    )


def create_user(db: Session, *, username: str, password: str) -> models.User:
    user = models.User(
        username=normalize_username(username),
        password_hash=password_crypto.hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_session(
    db: Session,
    *,
    user_id: uuid.UUID,
    ttl_hours: float = 0,
) -> Tuple[models.UserSession, str]:
    token_id, secret, full_token = password_crypto.generate_token()
    now = _now()
    session = models.UserSession(
        user_id=user_id,
        token_id=token_id,
        token_hash=password_crypto.hash_secret(secret),
        status="active",
        created_at=now,
        expires_at=now + timedelta(hours=ttl_hours) if ttl_hours and ttl_hours > 0 else None,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session, full_token


def get_session_by_token_id(db: Session, *, token_id: str) -> Optional[models.UserSession]:
    return (
        db.query(models.UserSession)
        .filter(models.UserSession.token_id == token_id)
        .first()
    )


def is_session_usable(session: models.UserSession, *, now: Optional[datetime] = None) -> bool:
    if session.status != "active":
        return False
    expires_at = _aware(session.expires_at)
    if expires_at is not None and (now or _now()) >= expires_at:
        return False
    return True


def revoke_session(db: Session, *, session: models.UserSession) -> models.UserSession:
    if session.status != "revoked":
        session.status = "revoked"
        session.revoked_at = _now()
        db.commit()
        db.refresh(session)
    return session


def mark_used_now(db: Session, *, session: models.UserSession) -> None:
    session.last_used_at = _now()
    db.commit()
