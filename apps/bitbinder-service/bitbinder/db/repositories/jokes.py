"""
Joke and folder repository functions.

Implements joke CRUD with search/filter/sort and folder management with
per-folder joke counts.
"""
from __future__ import annotations

import uuid
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bitbinder.db import models, schemas


def create_joke(db: Session, *, owner_user_id: uuid.UUID, joke: schemas.JokeCreate) -> models.Joke:
    now = models.now_utc()
    db_joke = models.Joke(
        owner_user_id=owner_user_id,
        title=joke.title,
        text=joke.text or '',
        folder_id=joke.folder_id,
        created_at=now,
        updated_at=now,
    )
    db.add(db_joke)
    db.commit()
    db.refresh(db_joke)
    return db_joke


def get_joke(db: Session, *, joke_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[models.Joke]:
    return (
        db.query(models.Joke)
        .filter(models.Joke.id == joke_id, models.Joke.owner_user_id == owner_user_id)
        .first()
    )


def get_jokes_by_ids(db: Session, *, owner_user_id: uuid.UUID, joke_ids: List[uuid.UUID]) -> Dict[uuid.UUID, models.Joke]:
    if not joke_ids:
        return {}
    rows = (
        db.query(models.Joke)
        .filter(models.Joke.owner_user_id == owner_user_id, models.Joke.id.in_(joke_ids))
        .all()
    )
    return {row.id: row for row in rows}


def list_jokes(
    db: Session,
    *,
    owner_user_id: uuid.UUID,
    search: Optional[str] = None,
    folder_id: Optional[uuid.UUID] = None,
    sort: str = "newest",
) -> List[models.Joke]:
    q = db.query(models.Joke).filter(models.Joke.owner_user_id == owner_user_id)
    term = (search or "").strip().lower()
    if term:
        q = q.filter(or_(
            func.lower(models.Joke.title).contains(term, autoescape=True),
            func.lower(models.Joke.text).contains(term, autoescape=True),
        ))
    if folder_id is not None:
        q = q.filter(models.Joke.folder_id == folder_id)
    if sort == "oldest":
        q = q.order_by(models.Joke.created_at.asc())
    elif sort == "title":
        q = q.order_by(func.lower(models.Joke.title).asc(), models.Joke.created_at.desc())
    else:
        q = q.order_by(models.Joke.created_at.desc())
    return q.all()


def update_joke(
    db: Session,
    *,
    joke_id: uuid.UUID,
    owner_user_id: uuid.UUID,
    updates: schemas.JokeUpdate,
) -> Optional[models.Joke]:
    db_joke = get_joke(db, joke_id=joke_id, owner_user_id=owner_user_id)
    if not db_joke:
        return None
    for key, value in updates.model_dump(exclude_unset=True).items():
        if key == "title" and value is None:
            continue
        if key == "text" and value is None:
            value = ''
        setattr(db_joke, key, value)
    db_joke.updated_at = models.now_utc()
    db.commit()
    db.refresh(db_joke)
    return db_joke


def delete_joke(db: Session, *, joke_id: uuid.UUID, owner_user_id: uuid.UUID) -> bool:
    """Delete a joke; set lists keep the dangling id."""
    try:
        db_joke = get_joke(db, joke_id=joke_id, owner_user_id=owner_user_id)
        if not db_joke:
            return False
        db.delete(db_joke)
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete joke {joke_id}: {str(e)}")


# Folders
def get_folder(db: Session, *, folder_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[models.Folder]:
    return (
        db.query(models.Folder)
        .filter(models.Folder.id == folder_id, models.Folder.owner_user_id == owner_user_id)
        .first()
    )


def get_folder_by_name(db: Session, *, owner_user_id: uuid.UUID, name: str) -> Optional[models.Folder]:
    """Case-insensitive lookup on the trimmed name."""
    return (
        db.query(models.Folder)
        .filter(
            models.Folder.owner_user_id == owner_user_id,
            func.lower(models.Folder.name) == (name or "").strip().lower(),
        )
        .first()
    )


def create_folder(db: Session, *, owner_user_id: uuid.UUID, name: str) -> models.Folder:
    db_folder = models.Folder(owner_user_id=owner_user_id, name=name.strip())
    db.add(db_folder)
    db.commit()
    db.refresh(db_folder)
    return db_folder


def get_or_create_folder(db: Session, *, owner_user_id: uuid.UUID, name: str) -> models.Folder:
    existing = get_folder_by_name(db, owner_user_id=owner_user_id, name=name)
    if existing:
        return existing
    return create_folder(db, owner_user_id=owner_user_id, name=name)


def list_folders_with_counts(db: Session, *, owner_user_id: uuid.UUID) -> List[dict]:
    counts = dict(
        db.query(models.Joke.folder_id, func.count(models.Joke.id))
        .filter(models.Joke.owner_user_id == owner_user_id, models.Joke.folder_id.isnot(None))
        .group_by(models.Joke.folder_id)
        .all()
    )
    folders = (
        db.query(models.Folder)
        .filter(models.Folder.owner_user_id == owner_user_id)
        .order_by(func.lower(models.Folder.name).asc())
        .all()
    )
    return [
        {
            "id": f.id,
            "name": f.name,
            "created_at": f.created_at,
            "joke_count": int(counts.get(f.id, 0)),
        }
        for f in folders
    ]


def delete_folder(db: Session, *, folder_id: uuid.UUID, owner_user_id: uuid.UUID) -> bool:
    """Delete a folder and move its jokes to no folder."""
    try:
        db_folder = get_folder(db, folder_id=folder_id, owner_user_id=owner_user_id)
        if not db_folder:
            return False
        # Explicit clear; SQLite does not enforce ON DELETE SET NULL without PRAGMA foreign_keys
        db.query(models.Joke).filter(
            models.Joke.owner_user_id == owner_user_id,
            models.Joke.folder_id == folder_id,
        ).update({models.Joke.folder_id: None}, synchronize_session=False)
        db.delete(db_folder)
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete folder {folder_id}: {str(e)}")


def assign_folder(db: Session, *, joke: models.Joke, folder_id: Optional[uuid.UUID]) -> models.Joke:
    joke.folder_id = folder_id
    joke.updated_at = models.now_utc()
    db.commit()
    db.refresh(joke)
    return joke


def apply_folder_assignments(
    db: Session,
    *,
    owner_user_id: uuid.UUID,
    assignments: List[tuple],
    default_folder: str = "Misc",
) -> List[dict]:
    """Assign jokes to named folders, creating folders as needed.

    Names are matched case-insensitively against existing folders; blank
    names use ``default_folder``. Returns the applied ``{joke_id, folder}``.
    """
    folders: Dict[str, models.Folder] = {
        f.name.lower(): f
        for f in db.query(models.Folder).filter(models.Folder.owner_user_id == owner_user_id).all()
    }
    applied = []
    for joke_id, folder_name in assignments:
        joke = get_joke(db, joke_id=joke_id, owner_user_id=owner_user_id)
        if not joke:
            continue
        name = (folder_name or "").strip() or default_folder
        folder = folders.get(name.lower())
        if folder is None:
            folder = create_folder(db, owner_user_id=owner_user_id, name=name)
            folders[name.lower()] = folder
        joke.folder_id = folder.id
        joke.updated_at = models.now_utc()
        applied.append({"joke_id": joke.id, "folder": folder.name})
    db.commit()
    return applied
