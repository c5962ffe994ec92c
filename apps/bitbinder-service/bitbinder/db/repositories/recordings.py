"""
Recording repository functions.

Recordings keep a snapshot of the set list name and a plain set list id, so
they survive deletion of the set list they were made from.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bitbinder.db import models


def create_recording(
    db: Session,
    *,
    owner_user_id: uuid.UUID,
    set_list: models.SetList,
    duration_sec: int,
    file_name: str,
    mime_type: str,
    storage_path: str,
    size_bytes: int,
) -> models.Recording:
    db_rec = models.Recording(
        owner_user_id=owner_user_id,
        set_list_id=set_list.id,
        set_list_name=set_list.name,
        duration_sec=duration_sec,
        file_name=file_name,
        mime_type=mime_type,
        storage_path=storage_path,
        size_bytes=size_bytes,
        notes='',
    )
    db.add(db_rec)
    db.commit()
    db.refresh(db_rec)
    return db_rec


def get_recording(db: Session, *, recording_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[models.Recording]:
    return (
        db.query(models.Recording)
        .filter(models.Recording.id == recording_id, models.Recording.owner_user_id == owner_user_id)
        .first()
    )


def list_recordings(db: Session, *, owner_user_id: uuid.UUID, set_list_id: Optional[uuid.UUID] = None) -> List[models.Recording]:
    q = db.query(models.Recording).filter(models.Recording.owner_user_id == owner_user_id)
    if set_list_id is not None:
        q = q.filter(models.Recording.set_list_id == set_list_id)
    return q.order_by(models.Recording.created_at.desc()).all()


def update_notes(db: Session, *, recording: models.Recording, notes: Optional[str]) -> models.Recording:
    recording.notes = notes or ''
    db.commit()
    db.refresh(recording)
    return recording


def delete_recording(db: Session, *, recording_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[str]:
    """Delete the row; returns its storage path so the caller can remove the audio, or None."""
    try:
        db_rec = get_recording(db, recording_id=recording_id, owner_user_id=owner_user_id)
        if not db_rec:
            return None
        storage_path = db_rec.storage_path
        db.delete(db_rec)
        db.commit()
        return storage_path
    except SQLAlchemyError as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete recording {recording_id}: {str(e)}")
