"""
Joke folder endpoints.
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

router = APIRouter(prefix="/folders", tags=["folders"])

UNIQUE_NAME_MESSAGE = "Enter a unique folder name."


@router.post("/", response_model=schemas.Folder, status_code=status.HTTP_201_CREATED)
def create_folder_endpoint(
    folder: schemas.FolderCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    name = (folder.name or "").strip()
    if not name:
        raise HTTPException(status_code=422, detail=UNIQUE_NAME_MESSAGE)
    if joke_repo.get_folder_by_name(db, owner_user_id=current_user.id, name=name):
        raise HTTPException(status_code=409, detail=UNIQUE_NAME_MESSAGE)
    return joke_repo.create_folder(db, owner_user_id=current_user.id, name=name)


@router.get("/", response_model=List[schemas.FolderWithCount])
def list_folders_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return joke_repo.list_folders_with_counts(db, owner_user_id=current_user.id)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_folder_endpoint(
    folder_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    folder = joke_repo.get_folder(db, folder_id=folder_id, owner_user_id=current_user.id)
    if not folder:
        raise HTTPException(status_code=404, detail="Folder not found")
    name = folder.name
    joke_repo.delete_folder(db, folder_id=folder_id, owner_user_id=current_user.id)
    log_delete(db, actor_user_id=current_user.id, action=AuditAction.FOLDER_DELETE, target_type="folder", target_id=folder_id, name=name)
    return None
