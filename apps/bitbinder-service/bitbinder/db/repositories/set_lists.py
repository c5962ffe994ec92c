"""
Set list repository functions.

Set lists store an ordered list of joke ids as strings. Entries may point at
jokes that were deleted after the set list was built; those resolve as
missing rather than being dropped.
"""
from __future__ import annotations

import uuid
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bitbinder.db import models, schemas
from bitbinder.db.repositories import jokes as joke_repo

NAME_MAX_LENGTH = 50


def _ids_to_json(ids: Sequence[uuid.UUID]) -> List[str]:
    return [str(i) for i in ids]


def order_of(set_list: models.SetList) -> List[uuid.UUID]:
    return [uuid.UUID(str(i)) for i in (set_list.joke_order or [])]


def reorder_ids(order: Sequence[uuid.UUID], source: uuid.UUID, target: uuid.UUID) -> List[uuid.UUID]:
    """Move ``source`` to the index ``target`` held before the move.

    Raises ValueError when either id is absent from ``order``.
    """
    result = list(order)
    if source not in result or target not in result:
        raise ValueError("Both jokes must be in the set list")
    if source == target:
        return result
    target_index = result.index(target)
    result.pop(result.index(source))
    result.insert(target_index, source)
    return result


def clean_rename(name: Optional[str]) -> Optional[str]:
    """Trim and truncate a new set list name; None when blank."""
    cleaned = (name or "").strip()
    if not cleaned:
        return None
    return cleaned[:NAME_MAX_LENGTH]


def create_set_list(db: Session, *, owner_user_id: uuid.UUID, set_list: schemas.SetListCreate) -> models.SetList:
    now = models.now_utc()
    db_set = models.SetList(
        owner_user_id=owner_user_id,
        name=set_list.name,
        joke_order=_ids_to_json(set_list.joke_order),
        notes=set_list.notes or '',
        last_performed_at=None,
        created_at=now,
        updated_at=now,
    )
    db.add(db_set)
    db.commit()
    db.refresh(db_set)
    return db_set


def get_set_list(db: Session, *, set_list_id: uuid.UUID, owner_user_id: uuid.UUID) -> Optional[models.SetList]:
    return (
        db.query(models.SetList)
        .filter(models.SetList.id == set_list_id, models.SetList.owner_user_id == owner_user_id)
        .first()
    )


def list_set_lists(db: Session, *, owner_user_id: uuid.UUID) -> List[models.SetList]:
    return (
        db.query(models.SetList)
        .filter(models.SetList.owner_user_id == owner_user_id)
        .order_by(models.SetList.created_at.desc())
        .all()
    )


def _save_order(db: Session, db_set: models.SetList, order: Sequence[uuid.UUID]) -> models.SetList:
    # Assign a fresh list so the JSON column is flagged dirty
    db_set.joke_order = _ids_to_json(order)
    db_set.updated_at = models.now_utc()
    db.commit()
    db.refresh(db_set)
    return db_set


def update_set_list(
    db: Session,
    *,
    set_list_id: uuid.UUID,
    owner_user_id: uuid.UUID,
    updates: schemas.SetListUpdate,
) -> Optional[models.SetList]:
    db_set = get_set_list(db, set_list_id=set_list_id, owner_user_id=owner_user_id)
    if not db_set:
        return None
    data = updates.model_dump(exclude_unset=True)
    if data.get("name") is not None:
        db_set.name = data["name"]
    if data.get("notes") is not None:
        db_set.notes = data["notes"]
    if data.get("joke_order") is not None:
        db_set.joke_order = _ids_to_json(data["joke_order"])
    db_set.updated_at = models.now_utc()
    db.commit()
    db.refresh(db_set)
    return db_set


def rename_set_list(db: Session, *, set_list_id: uuid.UUID, owner_user_id: uuid.UUID, name: str) -> Optional[models.SetList]:
    db_set = get_set_list(db, set_list_id=set_list_id, owner_user_id=owner_user_id)
    if not db_set:
        return None
    db_set.name = name
    db_set.updated_at = models.now_utc()
    db.commit()
    db.refresh(db_set)
    return db_set


def delete_set_list(db: Session, *, set_list_id: uuid.UUID, owner_user_id: uuid.UUID) -> bool:
    """Delete a set list; recordings made from it are kept."""
    try:
        db_set = get_set_list(db, set_list_id=set_list_id, owner_user_id=owner_user_id)
        if not db_set:
            return False
        db.delete(db_set)
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete set list {set_list_id}: {str(e)}")


def resolve_entries(db: Session, *, set_list: models.SetList) -> List[dict]:
    order = order_of(set_list)
    found = joke_repo.get_jokes_by_ids(db, owner_user_id=set_list.owner_user_id, joke_ids=list(set(order)))
    entries = []
    for position, joke_id in enumerate(order, start=1):
        joke = found.get(joke_id)
        entries.append({
            "position": position,
            "joke_id": joke_id,
            "title": joke.title if joke else None,
            "missing": joke is None,
        })
    return entries


def add_joke(db: Session, *, set_list: models.SetList, joke_id: uuid.UUID) -> models.SetList:
    order = order_of(set_list)
    if joke_id in order:
        return set_list
    order.append(joke_id)
    return _save_order(db, set_list, order)


def remove_joke(db: Session, *, set_list: models.SetList, joke_id: uuid.UUID) -> models.SetList:
    order = [i for i in order_of(set_list) if i != joke_id]
    return _save_order(db, set_list, order)


def reorder(db: Session, *, set_list: models.SetList, source_joke_id: uuid.UUID, target_joke_id: uuid.UUID) -> models.SetList:
    new_order = reorder_ids(order_of(set_list), source_joke_id, target_joke_id)
    if source_joke_id == target_joke_id:
        return set_list
    return _save_order(db, set_list, new_order)


def available_jokes(db: Session, *, set_list: models.SetList) -> List[models.Joke]:
    in_set = set(order_of(set_list))
    return [
        j for j in joke_repo.list_jokes(db, owner_user_id=set_list.owner_user_id)
        if j.id not in in_set
    ]


def mark_performed(db: Session, *, set_list: models.SetList) -> models.SetList:
    set_list.last_performed_at = models.now_utc()
    db.commit()
    db.refresh(set_list)
    return set_list
