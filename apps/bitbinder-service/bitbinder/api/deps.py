"""
API dependency helpers.

Resolves the session token presented via ``Authorization: Bearer`` or
``X-Session-Token`` into the current user.
"""
import logging
from typing import Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from bitbinder.db import models
from bitbinder.db.database import get_db
from bitbinder.db.repositories import users as user_repo
from bitbinder.utils.password_crypto import parse_token, verify_secret

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "Not authenticated. Please log in."


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=NOT_AUTHENTICATED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_session_token(authorization: Optional[str], x_session_token: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    if x_session_token:
        return x_session_token.strip() or None
    return None


# Contract:
# Returns (sqlalchemy User model, sqlalchemy UserSession model)
# Raises 401 for any missing, malformed, unknown, revoked or expired token.
def get_current_session(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
    x_session_token: Optional[str] = Header(default=None, alias="X-Session-Token"),
) -> Tuple[models.User, models.UserSession]:
    token = extract_session_token(authorization, x_session_token)
    if not token:
        raise _unauthorized()
    parsed = parse_token(token)
    if not parsed:
        raise _unauthorized()
    session = user_repo.get_session_by_token_id(db, token_id=parsed.token_id)
    if not session or not user_repo.is_session_usable(session):
        raise _unauthorized()
    if not verify_secret(parsed.secret, session.token_hash):
        logger.info("Rejected session token %s: secret mismatch", parsed.token_id)
        raise _unauthorized()
    user = user_repo.get_user(db, session.user_id)
    if not user:
        raise _unauthorized()
    user_repo.mark_used_now(db, session=session)
    return user, session


def get_current_user(
    user_and_session: Tuple[models.User, models.UserSession] = Depends(get_current_session),
) -> models.User:
    user, _session = user_and_session
    return user
