"""
Notebook repository functions.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bitbinder.db import models, schemas


def create_entry(db: Session, *, owner_user_id: uuid.UUID, entry: schemas.NotebookEntryCreate) -> models.NotebookEntry:
    now = models.now_utc()
    db_entry = models.NotebookEntry(
        owner_user_id=owner_user_id,
        title=entry.title,
        content=entry.content or '',
        created_at=now,
        updated_at=now,
    )
    db.add(db_entry)
    db.commit()
    db.refresh(db_entry)
    return db_entry


def get_entry(db: Session, *, entry_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[models.NotebookEntry]:
    return (
        db.query(models.NotebookEntry)
        .filter(models.NotebookEntry.id == entry_id, models.NotebookEntry.owner_user_id == owner_user_id)
        .first()
    )


def list_entries(db: Session, *, owner_user_id: uuid.UUID, search: Optional[str] = None) -> List[models.NotebookEntry]:
    q = db.query(models.NotebookEntry).filter(models.NotebookEntry.owner_user_id == owner_user_id)
    term = (search or "").strip().lower()
    if term:
        # LIKE wildcards in the term match literally
        q = q.filter(or_(
            func.lower(models.NotebookEntry.title).contains(term, autoescape=True),
            func.lower(models.NotebookEntry.content).contains(term, autoescape=True),
        ))
    return q.order_by(models.NotebookEntry.updated_at.desc()).all()


def update_entry(
    db: Session,
    *,
    entry_id: uuid.UUID,
    owner_user_id: uuid.UUID,
    updates: schemas.NotebookEntryUpdate,
) -> Optional[models.NotebookEntry]:
    db_entry = get_entry(db, entry_id=entry_id, owner_user_id=owner_user_id)
    if not db_entry:
        return None
    if updates.title is not None:
        db_entry.title = updates.title
    if updates.content is not None:
        db_entry.content = updates.content
    db_entry.updated_at = models.now_utc()
    db.commit()
    db.refresh(db_entry)
    return db_entry


def delete_entry(db: Session, *, entry_id: uuid.UUID, owner_user_id: uuid.UUID) -> bool:
    try:
        db_entry = get_entry(db, entry_id=entry_id, owner_user_id=owner_user_id)
        if not db_entry:
            return False
        db.delete(db_entry)
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete notebook entry {entry_id}: {str(e)}")
