"""
Notebook endpoints.
"""
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bitbinder.audit import AuditAction, log_delete
from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import notebook as notebook_repo

router = APIRouter(prefix="/notebook", tags=["notebook"])


@router.post("/", response_model=schemas.NotebookEntry, status_code=status.HTTP_201_CREATED)
def create_entry_endpoint(
    entry: schemas.NotebookEntryCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return notebook_repo.create_entry(db, owner_user_id=current_user.id, entry=entry)


@router.get("/", response_model=List[schemas.NotebookEntry])
def list_entries_endpoint(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return notebook_repo.list_entries(db, owner_user_id=current_user.id, search=search)


@router.get("/{entry_id}", response_model=schemas.NotebookEntry)
def get_entry_endpoint(
    entry_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    entry = notebook_repo.get_entry(db, entry_id=entry_id, owner_user_id=current_user.id)
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.put("/{entry_id}", response_model=schemas.NotebookEntry)
def update_entry_endpoint(
    entry_id: uuid.UUID,
    updates: schemas.NotebookEntryUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    entry = notebook_repo.update_entry(db, entry_id=entry_id, owner_user_id=current_user.id, updates=updates)
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry_endpoint(
    entry_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    if not notebook_repo.delete_entry(db, entry_id=entry_id, owner_user_id=current_user.id):
        raise HTTPException(status_code=404, detail="Entry not found")
    log_delete(db, actor_user_id=current_user.id, action=AuditAction.NOTEBOOK_ENTRY_DELETE, target_type="notebook_entry", target_id=entry_id)
    return None
