"""
Assistant repository functions: per-user settings and chat history.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from bitbinder.db import models


def get_settings(db: Session, *, owner_user_id: uuid.UUID) -> Optional[models.AssistantSettings]:
    return (
        db.query(models.AssistantSettings)
        .filter(models.AssistantSettings.owner_user_id == owner_user_id)
        .first()
    )


def _get_or_create_settings(db: Session, owner_user_id: uuid.UUID) -> models.AssistantSettings:
    settings = get_settings(db, owner_user_id=owner_user_id)
    if settings is None:
        settings = models.AssistantSettings(owner_user_id=owner_user_id)
        db.add(settings)
    return settings


def save_api_key(db: Session, *, owner_user_id: uuid.UUID, api_key: Optional[str]) -> models.AssistantSettings:
    settings = _get_or_create_settings(db, owner_user_id)
    settings.openai_api_key = (api_key or '').strip() or None
    settings.updated_at = models.now_utc()
    db.commit()
    db.refresh(settings)
    return settings


def set_last_generated_joke(db: Session, *, owner_user_id: uuid.UUID, text: Optional[str]) -> models.AssistantSettings:
    settings = _get_or_create_settings(db, owner_user_id)
    settings.last_generated_joke = text
    settings.updated_at = models.now_utc()
    db.commit()
    db.refresh(settings)
    return settings


def list_chat_messages(db: Session, *, owner_user_id: uuid.UUID) -> List[models.ChatMessage]:
    return (
        db.query(models.ChatMessage)
        .filter(models.ChatMessage.owner_user_id == owner_user_id)
        .order_by(models.ChatMessage.created_at.asc())
        .all()
    )


def add_chat_message(db: Session, *, owner_user_id: uuid.UUID, role: str, content: str) -> models.ChatMessage:
    msg = models.ChatMessage(owner_user_id=owner_user_id, role=role, content=content)
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


def trim_chat_history(db: Session, *, owner_user_id: uuid.UUID, keep: int) -> int:
    """Delete all but the ``keep`` most recent messages; returns the number removed."""
    messages = list_chat_messages(db, owner_user_id=owner_user_id)
    stale = messages[:-keep] if keep > 0 else messages
    for msg in stale:
        db.delete(msg)
    if stale:
        db.commit()
    return len(stale)


def clear_chat_history(db: Session, *, owner_user_id: uuid.UUID) -> int:
    removed = (
        db.query(models.ChatMessage)
        .filter(models.ChatMessage.owner_user_id == owner_user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed
