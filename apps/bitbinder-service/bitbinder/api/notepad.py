"""
Notepad endpoints: a single auto-saved scratch document per user that can
be turned into a joke.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import jokes as joke_repo
from bitbinder.db.repositories import notepad as notepad_repo

router = APIRouter(prefix="/notepad", tags=["notepad"])


@router.get("/", response_model=schemas.Notepad)
def get_notepad_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    pad = notepad_repo.get_notepad(db, owner_user_id=current_user.id)
    if pad is None:
        return schemas.Notepad(text="")
    return pad


@router.put("/", response_model=schemas.Notepad)
def save_notepad_endpoint(
    payload: schemas.NotepadUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return notepad_repo.save_notepad(db, owner_user_id=current_user.id, text=payload.text)


@router.delete("/", response_model=schemas.Notepad)
def clear_notepad_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return notepad_repo.save_notepad(db, owner_user_id=current_user.id, text="")


@router.post("/append", response_model=schemas.Notepad)
def append_transcript_endpoint(
    payload: schemas.NotepadAppend,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return notepad_repo.append_transcript(db, owner_user_id=current_user.id, text=payload.text)


@router.post("/export", response_model=schemas.JokeDraft)
def export_to_joke_endpoint(
    payload: schemas.NotepadExport,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    pad = notepad_repo.get_notepad(db, owner_user_id=current_user.id)
    text = (pad.text if pad else "").strip()
    if not text:
        raise HTTPException(status_code=422, detail="Write something first before exporting to a joke.")
    title = (payload.title or "").strip()
    if not title:
        return schemas.JokeDraft(title="", text=text)
    try:
        joke_in = schemas.JokeCreate(title=title, text=text)
    except ValueError:
        raise HTTPException(status_code=422, detail="Title must be 1-30 characters")
    joke = joke_repo.create_joke(db, owner_user_id=current_user.id, joke=joke_in)
    return schemas.JokeDraft(title=joke.title, text=joke.text, joke_id=joke.id)
