"""
Joke library endpoints.

Create, list (search/filter/sort), update and delete the current user's
jokes.
"""
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bitbinder.audit import AuditAction, log_delete
from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import jokes as joke_repo

router = APIRouter(prefix="/jokes", tags=["jokes"])


def _ensure_folder(db: Session, folder_id: Optional[uuid.UUID], owner_user_id: uuid.UUID) -> None:
    if folder_id is not None and not joke_repo.get_folder(db, folder_id=folder_id, owner_user_id=owner_user_id):
        raise HTTPException(status_code=404, detail="Folder not found")


@router.post("/", response_model=schemas.Joke, status_code=status.HTTP_201_CREATED)
def create_joke_endpoint(
    joke: schemas.JokeCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _ensure_folder(db, joke.folder_id, current_user.id)
    return joke_repo.create_joke(db, owner_user_id=current_user.id, joke=joke)


@router.get("/", response_model=List[schemas.Joke])
def list_jokes_endpoint(
    search: Optional[str] = None,
    folder_id: Optional[uuid.UUID] = None,
    sort: schemas.JokeSort = "newest",
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return joke_repo.list_jokes(db, owner_user_id=current_user.id, search=search, folder_id=folder_id, sort=sort)


@router.get("/{joke_id}", response_model=schemas.Joke)
def get_joke_endpoint(
    joke_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    joke = joke_repo.get_joke(db, joke_id=joke_id, owner_user_id=current_user.id)
    if not joke:
        raise HTTPException(status_code=404, detail="Joke not found")
    return joke


@router.put("/{joke_id}", response_model=schemas.Joke)
def update_joke_endpoint(
    joke_id: uuid.UUID,
    updates: schemas.JokeUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _ensure_folder(db, updates.folder_id, current_user.id)
    joke = joke_repo.update_joke(db, joke_id=joke_id, owner_user_id=current_user.id, updates=updates)
    if not joke:
        raise HTTPException(status_code=404, detail="Joke not found")
    return joke


@router.delete("/{joke_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_joke_endpoint(
    joke_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    joke = joke_repo.get_joke(db, joke_id=joke_id, owner_user_id=current_user.id)
    if not joke:
        raise HTTPException(status_code=404, detail="Joke not found")
    title = joke.title
    joke_repo.delete_joke(db, joke_id=joke_id, owner_user_id=current_user.id)
    log_delete(db, actor_user_id=current_user.id, action=AuditAction.JOKE_DELETE, target_type="joke", target_id=joke_id, name=title)
    return None
