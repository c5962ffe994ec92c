"""
Jokebook endpoints.

A lightweight per-user jokebook organised by folder name, separate from the
main joke library. Also exposes the voice-style "add that to my jokebook"
command parser.
"""
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bitbinder.audit import AuditAction, log_delete
from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import jokebook as jokebook_repo
from bitbinder.utils.commands import normalize_folder_name, parse_jokebook_command

router = APIRouter(prefix="/jokebook", tags=["jokebook"])

EMPTY_JOKE = "Write a joke first!"
NOT_FOUND_OR_DENIED = "Joke not found or access denied."


def add_joke_to_folder(db: Session, *, owner_user_id: uuid.UUID, text: Optional[str], folder: Optional[str]) -> dict:
    """Save ``text`` to a jokebook folder and report the outcome as {success, message}."""
    if not (text or "").strip():
        return {"success": False, "message": EMPTY_JOKE, "folder": None}
    entry = jokebook_repo.add_entry(db, owner_user_id=owner_user_id, text=text.strip(), folder=folder)
    return {
        "success": True,
        "message": f'Joke saved to "{entry.folder}" folder!',
        "folder": entry.folder,
    }


@router.post("/", response_model=schemas.JokebookEntry, status_code=status.HTTP_201_CREATED)
def add_entry_endpoint(
    payload: schemas.JokebookEntryCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    text = (payload.text or "").strip()
    if not text:
        raise HTTPException(status_code=422, detail=EMPTY_JOKE)
    return jokebook_repo.add_entry(db, owner_user_id=current_user.id, text=text, folder=payload.folder)


@router.get("/", response_model=List[schemas.JokebookEntry])
def list_entries_endpoint(
    folder: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return jokebook_repo.get_by_folder(db, owner_user_id=current_user.id, folder=folder)


@router.get("/folders", response_model=List[str])
def list_folders_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return jokebook_repo.all_folders(db, owner_user_id=current_user.id)


@router.post("/parse-command", response_model=schemas.JokebookCommandParse)
def parse_command_endpoint(
    payload: schemas.VoiceCommandRequest,
    current_user: models.User = Depends(get_current_user),
):
    parsed = parse_jokebook_command(payload.utterance)
    if parsed is None:
        return schemas.JokebookCommandParse(matched=False)
    return schemas.JokebookCommandParse(matched=True, folder=parsed["folder"])


@router.post("/save-to-folder", response_model=schemas.JokebookCommandResult)
def save_to_folder_endpoint(
    payload: schemas.JokebookEntryCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return add_joke_to_folder(db, owner_user_id=current_user.id, text=payload.text, folder=normalize_folder_name(payload.folder))


@router.put("/{entry_id}", response_model=schemas.JokebookEntry)
def update_entry_endpoint(
    entry_id: uuid.UUID,
    payload: schemas.JokebookEntryUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    text = (payload.text or "").strip()
    if not text:
        raise HTTPException(status_code=422, detail=EMPTY_JOKE)
    entry = jokebook_repo.update_text(db, entry_id=entry_id, owner_user_id=current_user.id, text=text)
    if not entry:
        raise HTTPException(status_code=404, detail=NOT_FOUND_OR_DENIED)
    return entry


@router.post("/{entry_id}/move", response_model=schemas.JokebookEntry)
def move_entry_endpoint(
    entry_id: uuid.UUID,
    payload: schemas.JokebookMove,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    entry = jokebook_repo.move_entry(db, entry_id=entry_id, owner_user_id=current_user.id, folder=payload.folder)
    if not entry:
        raise HTTPException(status_code=404, detail=NOT_FOUND_OR_DENIED)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry_endpoint(
    entry_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    if not jokebook_repo.delete_entry(db, entry_id=entry_id, owner_user_id=current_user.id):
        raise HTTPException(status_code=404, detail=NOT_FOUND_OR_DENIED)
    log_delete(db, actor_user_id=current_user.id, action=AuditAction.JOKEBOOK_ENTRY_DELETE, target_type="jokebook_entry", target_id=entry_id)
    return None
