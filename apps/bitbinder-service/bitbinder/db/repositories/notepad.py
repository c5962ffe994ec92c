"""
Notepad repository functions (one scratch document per user).
"""
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from bitbinder.db import models


def get_notepad(db: Session, *, owner_user_id: uuid.UUID) -> Optional[models.Notepad]:
    return db.query(models.Notepad).filter(models.Notepad.owner_user_id == owner_user_id).first()


def save_notepad(db: Session, *, owner_user_id: uuid.UUID, text: str) -> models.Notepad:
    pad = get_notepad(db, owner_user_id=owner_user_id)
    if pad is None:
        pad = models.Notepad(owner_user_id=owner_user_id)
        db.add(pad)
    pad.text = text or ''
    pad.updated_at = models.now_utc()
    db.commit()
    db.refresh(pad)
    return pad


def append_transcript(db: Session, *, owner_user_id: uuid.UUID, text: str) -> models.Notepad:
    """Append dictated text on a new line; the combined text is trimmed."""
    pad = get_notepad(db, owner_user_id=owner_user_id)
    current = pad.text if pad else ''
    return save_notepad(db, owner_user_id=owner_user_id, text=f"{current}\n{text or ''}".strip())
