"""
Set list endpoints.

Set lists are ordered selections of jokes. Deleting a joke leaves its id in
every set list that used it; the detail view reports such entries as
missing.
"""
from typing import List
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bitbinder.audit import AuditAction, log_delete
from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import jokes as joke_repo
from bitbinder.db.repositories import set_lists as set_list_repo

router = APIRouter(prefix="/set-lists", tags=["set-lists"])


def _get_owned(db: Session, set_list_id: uuid.UUID, user: models.User) -> models.SetList:
    db_set = set_list_repo.get_set_list(db, set_list_id=set_list_id, owner_user_id=user.id)
    if not db_set:
        raise HTTPException(status_code=404, detail="Set list not found")
    return db_set


def _ensure_jokes_exist(db: Session, joke_ids: List[uuid.UUID], user: models.User) -> None:
    found = joke_repo.get_jokes_by_ids(db, owner_user_id=user.id, joke_ids=list(set(joke_ids)))
    if any(j not in found for j in joke_ids):
        raise HTTPException(status_code=404, detail="Joke not found")


def _detail(db: Session, db_set: models.SetList) -> schemas.SetListDetail:
    detail = schemas.SetListDetail.model_validate(db_set)
    detail.entries = [schemas.SetListEntry(**e) for e in set_list_repo.resolve_entries(db, set_list=db_set)]
    return detail


@router.post("/", response_model=schemas.SetList, status_code=status.HTTP_201_CREATED)
def create_set_list_endpoint(
    set_list: schemas.SetListCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _ensure_jokes_exist(db, set_list.joke_order, current_user)
    return set_list_repo.create_set_list(db, owner_user_id=current_user.id, set_list=set_list)


@router.get("/", response_model=List[schemas.SetListSummary])
def list_set_lists_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return set_list_repo.list_set_lists(db, owner_user_id=current_user.id)


@router.get("/{set_list_id}", response_model=schemas.SetListDetail)
def get_set_list_endpoint(
    set_list_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return _detail(db, _get_owned(db, set_list_id, current_user))


@router.put("/{set_list_id}", response_model=schemas.SetList)
def update_set_list_endpoint(
    set_list_id: uuid.UUID,
    updates: schemas.SetListUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    db_set = _get_owned(db, set_list_id, current_user)
    if updates.joke_order is not None:
        # Ids already in the list may point at deleted jokes
        kept = set(set_list_repo.order_of(db_set))
        _ensure_jokes_exist(db, [j for j in updates.joke_order if j not in kept], current_user)
    return set_list_repo.update_set_list(db, set_list_id=set_list_id, owner_user_id=current_user.id, updates=updates)


@router.post("/{set_list_id}/rename", response_model=schemas.SetList)
def rename_set_list_endpoint(
    set_list_id: uuid.UUID,
    payload: schemas.SetListRename,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _get_owned(db, set_list_id, current_user)
    name = set_list_repo.clean_rename(payload.name)
    if name is None:
        raise HTTPException(status_code=422, detail="Name must be 1-50 characters")
    return set_list_repo.rename_set_list(db, set_list_id=set_list_id, owner_user_id=current_user.id, name=name)


@router.delete("/{set_list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_set_list_endpoint(
    set_list_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    name = _get_owned(db, set_list_id, current_user).name
    set_list_repo.delete_set_list(db, set_list_id=set_list_id, owner_user_id=current_user.id)
    log_delete(db, actor_user_id=current_user.id, action=AuditAction.SET_LIST_DELETE, target_type="set_list", target_id=set_list_id, name=name)
    return None


@router.post("/{set_list_id}/jokes", response_model=schemas.SetListDetail)
def add_joke_endpoint(
    set_list_id: uuid.UUID,
    payload: schemas.SetListJokeRef,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    db_set = _get_owned(db, set_list_id, current_user)
    _ensure_jokes_exist(db, [payload.joke_id], current_user)
    return _detail(db, set_list_repo.add_joke(db, set_list=db_set, joke_id=payload.joke_id))


@router.delete("/{set_list_id}/jokes/{joke_id}", response_model=schemas.SetListDetail)
def remove_joke_endpoint(
    set_list_id: uuid.UUID,
    joke_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    db_set = _get_owned(db, set_list_id, current_user)
    return _detail(db, set_list_repo.remove_joke(db, set_list=db_set, joke_id=joke_id))


@router.post("/{set_list_id}/reorder", response_model=schemas.SetListDetail)
def reorder_endpoint(
    set_list_id: uuid.UUID,
    payload: schemas.SetListReorder,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    db_set = _get_owned(db, set_list_id, current_user)
    try:
        db_set = set_list_repo.reorder(
            db,
            set_list=db_set,
            source_joke_id=payload.source_joke_id,
            target_joke_id=payload.target_joke_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _detail(db, db_set)


@router.get("/{set_list_id}/available-jokes", response_model=List[schemas.Joke])
def available_jokes_endpoint(
    set_list_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return set_list_repo.available_jokes(db, set_list=_get_owned(db, set_list_id, current_user))


@router.post("/{set_list_id}/performed", response_model=schemas.SetList)
def mark_performed_endpoint(
    set_list_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return set_list_repo.mark_performed(db, set_list=_get_owned(db, set_list_id, current_user))
