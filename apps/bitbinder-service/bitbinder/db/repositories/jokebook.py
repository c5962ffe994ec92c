"""
Jokebook repository functions.

Jokebook entries are grouped by a free-form folder name; blank folder names
fall back to the default ``bitbuddy`` folder.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bitbinder.db import models
from bitbinder.utils.commands import normalize_folder_name


def add_entry(db: Session, *, owner_user_id: uuid.UUID, text: str, folder: Optional[str] = None) -> models.JokebookEntry:
    now = models.now_utc()
    entry = models.JokebookEntry(
        owner_user_id=owner_user_id,
        folder=normalize_folder_name(folder),
        text=text,
        created_at=now,
        updated_at=now,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_entry(db: Session, *, entry_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[models.JokebookEntry]:
    return (
        db.query(models.JokebookEntry)
        .filter(models.JokebookEntry.id == entry_id, models.JokebookEntry.owner_user_id == owner_user_id)
        .first()
    )


def get_by_folder(db: Session, *, owner_user_id: uuid.UUID, folder: Optional[str] = None) -> List[models.JokebookEntry]:
    q = db.query(models.JokebookEntry).filter(models.JokebookEntry.owner_user_id == owner_user_id)
    name = (folder or "").strip()
    if name:
        q = q.filter(models.JokebookEntry.folder == name)
    return q.order_by(models.JokebookEntry.created_at.desc()).all()


def all_folders(db: Session, *, owner_user_id: uuid.UUID) -> List[str]:
    rows = (
        db.query(models.JokebookEntry.folder)
        .filter(models.JokebookEntry.owner_user_id == owner_user_id)
        .distinct()
        .all()
    )
    folders = {r[0] for r in rows if r[0]}
    folders.add(models.DEFAULT_JOKEBOOK_FOLDER)
    return sorted(folders)


def update_text(db: Session, *, entry_id: uuid.UUID, owner_user_id: uuid.UUID, text: str) -> Optional[models.JokebookEntry]:
    entry = get_entry(db, entry_id=entry_id, owner_user_id=owner_user_id)
    if not entry:
        return None
    entry.text = text
    entry.updated_at = models.now_utc()
    db.commit()
    db.refresh(entry)
    return entry


def move_entry(db: Session, *, entry_id: uuid.UUID, owner_user_id: uuid.UUID, folder: Optional[str]) -> Optional[models.JokebookEntry]:
    entry = get_entry(db, entry_id=entry_id, owner_user_id=owner_user_id)
    if not entry:
        return None
    entry.folder = normalize_folder_name(folder)
    entry.updated_at = models.now_utc()
    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, *, entry_id: uuid.UUID, owner_user_id: uuid.UUID) -> bool:
    try:
        entry = get_entry(db, entry_id=entry_id, owner_user_id=owner_user_id)
        if not entry:
            return False
        db.delete(entry)
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete jokebook entry {entry_id}: {str(e)}")
