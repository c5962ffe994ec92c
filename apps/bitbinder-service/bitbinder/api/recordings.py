"""
Recording endpoints.

Audio is uploaded as the raw request body with its mime type in
``Content-Type``. Live recording sessions track elapsed time per user so an
upload can omit its duration.
"""
import logging
import math
from datetime import datetime
from itertools import groupby
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from bitbinder.audit import AuditAction, log_delete
from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import recordings as recording_repo
from bitbinder.db.repositories import set_lists as set_list_repo
from bitbinder.services.recording_sessions import (
    RecordingInProgressError,
    RecordingSessionRegistry,
    get_recording_sessions,
)
from bitbinder.services.recording_storage import (
    DEFAULT_MIME_TYPE,
    RecordingStorage,
    build_file_name,
    get_recording_storage,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recordings", tags=["recordings"])


def _get_set_list(db: Session, set_list_id: uuid.UUID, user: models.User) -> models.SetList:
    db_set = set_list_repo.get_set_list(db, set_list_id=set_list_id, owner_user_id=user.id)
    if not db_set:
        raise HTTPException(status_code=404, detail="Set list not found")
    return db_set


def _get_recording(db: Session, recording_id: uuid.UUID, user: models.User) -> models.Recording:
    rec = recording_repo.get_recording(db, recording_id=recording_id, owner_user_id=user.id)
    if not rec:
        raise HTTPException(status_code=404, detail="Recording not found")
    return rec


def group_by_date(recordings: List[models.Recording]) -> List[dict]:
    """Group already-sorted recordings by calendar date, keeping their order."""
    return [
        {"date": day, "recordings": list(items)}
        for day, items in groupby(recordings, key=lambda r: r.created_at.date().isoformat())
    ]


# Live sessions
@router.post("/sessions", response_model=schemas.RecordingSessionStatus, status_code=status.HTTP_201_CREATED)
def start_session_endpoint(
    payload: schemas.RecordingSessionStart,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    sessions: RecordingSessionRegistry = Depends(get_recording_sessions),
):
    db_set = _get_set_list(db, payload.set_list_id, current_user)
    try:
        session = sessions.start(current_user.id, db_set.id, db_set.name)
    except RecordingInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.status()


def _current_session(sessions: RecordingSessionRegistry, user: models.User):
    session = sessions.get(user.id)
    if not session:
        raise HTTPException(status_code=404, detail="No recording in progress")
    return session


@router.get("/sessions/current", response_model=schemas.RecordingSessionStatus)
def session_status_endpoint(
    current_user: models.User = Depends(get_current_user),
    sessions: RecordingSessionRegistry = Depends(get_recording_sessions),
):
    return _current_session(sessions, current_user).status()


@router.post("/sessions/current/pause", response_model=schemas.RecordingSessionStatus)
def pause_session_endpoint(
    current_user: models.User = Depends(get_current_user),
    sessions: RecordingSessionRegistry = Depends(get_recording_sessions),
):
    _current_session(sessions, current_user)
    return sessions.pause(current_user.id).status()


@router.post("/sessions/current/resume", response_model=schemas.RecordingSessionStatus)
def resume_session_endpoint(
    current_user: models.User = Depends(get_current_user),
    sessions: RecordingSessionRegistry = Depends(get_recording_sessions),
):
    _current_session(sessions, current_user)
    return sessions.resume(current_user.id).status()


@router.delete("/sessions/current", status_code=status.HTTP_204_NO_CONTENT)
def cancel_session_endpoint(
    current_user: models.User = Depends(get_current_user),
    sessions: RecordingSessionRegistry = Depends(get_recording_sessions),
):
    if not sessions.cancel(current_user.id):
        raise HTTPException(status_code=404, detail="No recording in progress")
    return None


# Saved recordings
@router.post("/", response_model=schemas.Recording, status_code=status.HTTP_201_CREATED)
async def save_recording_endpoint(
    request: Request,
    set_list_id: uuid.UUID,
    duration_sec: Optional[float] = Query(default=None, ge=0, allow_inf_nan=False),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    storage: RecordingStorage = Depends(get_recording_storage),
    sessions: RecordingSessionRegistry = Depends(get_recording_sessions),
):
    db_set = _get_set_list(db, set_list_id, current_user)
    audio = await request.body()
    if not audio:
        raise HTTPException(status_code=422, detail="Recording is empty.")
    mime_type = request.headers.get("content-type") or DEFAULT_MIME_TYPE

    # Live session closes only once the upload is known to be valid
    elapsed = sessions.finish(current_user.id, db_set.id)
    if duration_sec is None:
        duration_sec = elapsed or 0
    duration = max(int(math.floor(duration_sec)), 0)

    stored = storage.save(current_user.id, audio, mime_type)
    rec = recording_repo.create_recording(
        db,
        owner_user_id=current_user.id,
        set_list=db_set,
        duration_sec=duration,
        file_name=build_file_name(db_set.name, datetime.now(), mime_type),
        mime_type=mime_type,
        storage_path=stored.storage_path,
        size_bytes=stored.size_bytes,
    )
    set_list_repo.mark_performed(db, set_list=db_set)
    logger.info("Saved recording %s for set list %s (%ss)", rec.id, db_set.id, duration)
    return rec


@router.get("/", response_model=List[schemas.Recording])
def list_recordings_endpoint(
    set_list_id: Optional[uuid.UUID] = None,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return recording_repo.list_recordings(db, owner_user_id=current_user.id, set_list_id=set_list_id)


@router.get("/grouped", response_model=List[schemas.RecordingGroup])
def grouped_recordings_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return group_by_date(recording_repo.list_recordings(db, owner_user_id=current_user.id))


@router.get("/{recording_id}", response_model=schemas.Recording)
def get_recording_endpoint(
    recording_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return _get_recording(db, recording_id, current_user)


@router.get("/{recording_id}/audio")
def get_recording_audio_endpoint(
    recording_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    storage: RecordingStorage = Depends(get_recording_storage),
):
    rec = _get_recording(db, recording_id, current_user)
    path = storage.path_for(rec.storage_path)
    if path is None:
        logger.warning("Audio file missing for recording %s", rec.id)
        raise HTTPException(status_code=404, detail="Recording audio not found")
    return FileResponse(path, media_type=rec.mime_type, filename=rec.file_name)


@router.patch("/{recording_id}", response_model=schemas.Recording)
def update_recording_endpoint(
    recording_id: uuid.UUID,
    payload: schemas.RecordingUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    rec = _get_recording(db, recording_id, current_user)
    return recording_repo.update_notes(db, recording=rec, notes=payload.notes)


@router.delete("/{recording_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recording_endpoint(
    recording_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    storage: RecordingStorage = Depends(get_recording_storage),
):
    rec = _get_recording(db, recording_id, current_user)
    name = rec.file_name
    storage_path = recording_repo.delete_recording(db, recording_id=recording_id, owner_user_id=current_user.id)
    if storage_path:
        storage.delete(storage_path)
    log_delete(db, actor_user_id=current_user.id, action=AuditAction.RECORDING_DELETE, target_type="recording", target_id=recording_id, name=name)
    return None
