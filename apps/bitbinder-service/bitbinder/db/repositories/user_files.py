"""
User file repository functions.

Plain text documents owned by a single user. Every write refreshes
``last_updated``.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bitbinder.db import models


def create_file(db: Session, *, owner_user_id: uuid.UUID, file_name: str, file_content: str) -> models.UserFile:
    db_file = models.UserFile(
        owner_user_id=owner_user_id,
        file_name=file_name,
        file_content=file_content or '',
        last_updated=models.now_utc(),
    )
    db.add(db_file)
    db.commit()
    db.refresh(db_file)
    return db_file


def get_file(db: Session, *, file_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[models.UserFile]:
    return (
        db.query(models.UserFile)
        .filter(models.UserFile.id == file_id, models.UserFile.owner_user_id == owner_user_id)
        .first()
    )


def list_files(db: Session, *, owner_user_id: uuid.UUID) -> List[models.UserFile]:
    return (
        db.query(models.UserFile)
        .filter(models.UserFile.owner_user_id == owner_user_id)
        .order_by(models.UserFile.last_updated.desc())
        .all()
    )


def _touch(db: Session, db_file: models.UserFile) -> models.UserFile:
    db_file.last_updated = models.now_utc()
    db.commit()
    db.refresh(db_file)
    return db_file


def update_content(db: Session, *, file_id: uuid.UUID, owner_user_id: uuid.UUID, file_content: str) -> Optional[models.UserFile]:
    db_file = get_file(db, file_id=file_id, owner_user_id=owner_user_id)
    if not db_file:
        return None
    db_file.file_content = file_content or ''
    return _touch(db, db_file)


def rename_file(db: Session, *, file_id: uuid.UUID, owner_user_id: uuid.UUID, file_name: str) -> Optional[models.UserFile]:
    db_file = get_file(db, file_id=file_id, owner_user_id=owner_user_id)
    if not db_file:
        return None
    db_file.file_name = file_name
    return _touch(db, db_file)


def delete_file(db: Session, *, file_id: uuid.UUID, owner_user_id: uuid.UUID) -> bool:
    try:
        db_file = get_file(db, file_id=file_id, owner_user_id=owner_user_id)
        if not db_file:
            return False
        db.delete(db_file)
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete user file {file_id}: {str(e)}")
