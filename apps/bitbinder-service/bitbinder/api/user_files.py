"""
User file endpoints: plain text documents scoped to the current user.
"""
from typing import List
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bitbinder.audit import AuditAction, log_delete
from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import user_files as file_repo

router = APIRouter(prefix="/files", tags=["files"])

NOT_FOUND = "File not found."
NOT_FOUND_OR_DENIED = "File not found or access denied."


def _require_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise HTTPException(status_code=422, detail="File name is required.")
    return cleaned


@router.post("/", response_model=schemas.UserFile, status_code=status.HTTP_201_CREATED)
def save_file_endpoint(
    payload: schemas.UserFileCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    name = _require_name(payload.file_name)
    return file_repo.create_file(db, owner_user_id=current_user.id, file_name=name, file_content=payload.file_content)


@router.get("/", response_model=List[schemas.UserFile])
def list_files_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return file_repo.list_files(db, owner_user_id=current_user.id)


@router.get("/{file_id}", response_model=schemas.UserFile)
def get_file_endpoint(
    file_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    db_file = file_repo.get_file(db, file_id=file_id, owner_user_id=current_user.id)
    if not db_file:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return db_file


@router.put("/{file_id}", response_model=schemas.UserFile)
def update_file_endpoint(
    file_id: uuid.UUID,
    payload: schemas.UserFileContent,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    db_file = file_repo.update_content(db, file_id=file_id, owner_user_id=current_user.id, file_content=payload.file_content)
    if not db_file:
        raise HTTPException(status_code=404, detail=NOT_FOUND_OR_DENIED)
    return db_file


@router.post("/{file_id}/rename", response_model=schemas.UserFile)
def rename_file_endpoint(
    file_id: uuid.UUID,
    payload: schemas.UserFileRename,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    name = _require_name(payload.file_name)
    db_file = file_repo.rename_file(db, file_id=file_id, owner_user_id=current_user.id, file_name=name)
    if not db_file:
        raise HTTPException(status_code=404, detail=NOT_FOUND_OR_DENIED)
    return db_file


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file_endpoint(
    file_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    if not file_repo.delete_file(db, file_id=file_id, owner_user_id=current_user.id):
        raise HTTPException(status_code=404, detail=NOT_FOUND_OR_DENIED)
    log_delete(db, actor_user_id=current_user.id, action=AuditAction.USER_FILE_DELETE, target_type="user_file", target_id=file_id)
    return None
