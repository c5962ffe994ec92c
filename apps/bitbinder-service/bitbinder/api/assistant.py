"""
Comedy assistant endpoints: API key settings, joke generation, folder
auto-organizing, BitBuddy chat and jokebook voice commands.

Every operation works without an OpenAI key by falling back to the
built-in engines.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bitbinder.api.deps import get_current_user
from bitbinder.api.jokebook import add_joke_to_folder
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import assistant as assistant_repo
from bitbinder.db.repositories import jokebook as jokebook_repo
from bitbinder.db.repositories import jokes as joke_repo
from bitbinder.db.schemas.jokes import TITLE_MAX_LENGTH
from bitbinder.services.assistant_service import (
    CHAT_HISTORY_KEEP,
    AssistantService,
    get_assistant_service,
    mask_api_key,
    needs_history_trim,
)
from bitbinder.utils.commands import DEFAULT_JOKEBOOK_FOLDER, parse_jokebook_command
from bitbinder.utils.feature_flags import chat_feature_enabled

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assistant", tags=["assistant"])

DEFAULT_JOKE_TITLE = "New Joke"


def _user_key(db: Session, user: models.User):
    settings = assistant_repo.get_settings(db, owner_user_id=user.id)
    return settings.openai_api_key if settings else None


def _key_status(key, service: AssistantService) -> schemas.ApiKeyStatus:
    return schemas.ApiKeyStatus(
        configured=bool(key),
        masked=mask_api_key(key),
        engine=service.engine_for(key),
    )


def _library_title(title: str) -> str:
    return (title or "").strip()[:TITLE_MAX_LENGTH].strip() or DEFAULT_JOKE_TITLE


@router.get("/api-key", response_model=schemas.ApiKeyStatus)
def api_key_status_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    return _key_status(_user_key(db, current_user), service)


@router.put("/api-key", response_model=schemas.ApiKeyStatus)
def save_api_key_endpoint(
    payload: schemas.ApiKeyUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    settings = assistant_repo.save_api_key(db, owner_user_id=current_user.id, api_key=payload.api_key)
    return _key_status(settings.openai_api_key, service)


@router.post("/generate", response_model=schemas.GenerateResponse)
def generate_jokes_endpoint(
    payload: schemas.GenerateRequest,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    try:
        engine, jokes = service.generate_jokes(payload.topic, payload.style, _user_key(db, current_user))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if jokes:
        assistant_repo.set_last_generated_joke(db, owner_user_id=current_user.id, text=jokes[-1]["text"])
    if payload.auto_add:
        for joke in jokes:
            joke_repo.create_joke(
                db,
                owner_user_id=current_user.id,
                joke=schemas.JokeCreate(title=_library_title(joke["title"]), text=joke["text"]),
            )
            jokebook_repo.add_entry(db, owner_user_id=current_user.id, text=joke["text"], folder=DEFAULT_JOKEBOOK_FOLDER)
    return schemas.GenerateResponse(engine=engine, jokes=jokes, added_to_library=payload.auto_add)


@router.post("/organize", response_model=schemas.OrganizeResponse)
def auto_organize_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    jokes = joke_repo.list_jokes(db, owner_user_id=current_user.id, sort="oldest")
    try:
        engine, assignments = service.organize(jokes, _user_key(db, current_user))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    applied = joke_repo.apply_folder_assignments(db, owner_user_id=current_user.id, assignments=assignments)
    logger.info("Organized %d jokes for %s with %s engine", len(applied), current_user.id, engine)
    return schemas.OrganizeResponse(engine=engine, assignments=applied)


@router.get("/chat", response_model=List[schemas.ChatMessage])
def chat_history_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return assistant_repo.list_chat_messages(db, owner_user_id=current_user.id)


@router.post("/chat", response_model=schemas.ChatResponse)
def chat_endpoint(
    payload: schemas.ChatRequest,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    if not chat_feature_enabled():
        raise HTTPException(status_code=404, detail="Chat is disabled")
    message = (payload.message or "").strip()
    if not message:
        raise HTTPException(status_code=422, detail="Message cannot be empty.")
    history = [
        {"role": m.role, "content": m.content}
        for m in assistant_repo.list_chat_messages(db, owner_user_id=current_user.id)
    ]
    engine, reply = service.chat_reply(history, message, _user_key(db, current_user))
    assistant_repo.add_chat_message(db, owner_user_id=current_user.id, role="user", content=message)
    assistant_repo.add_chat_message(db, owner_user_id=current_user.id, role="assistant", content=reply)
    if needs_history_trim(len(history) + 2):
        assistant_repo.trim_chat_history(db, owner_user_id=current_user.id, keep=CHAT_HISTORY_KEEP)
    return schemas.ChatResponse(reply=reply, engine=engine)


@router.delete("/chat", status_code=204)
def clear_chat_endpoint(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    assistant_repo.clear_chat_history(db, owner_user_id=current_user.id)
    return None


@router.post("/voice-command", response_model=schemas.VoiceCommandResult)
def voice_command_endpoint(
    payload: schemas.VoiceCommandRequest,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    parsed = parse_jokebook_command(payload.utterance)
    if parsed is None:
        return schemas.VoiceCommandResult(success=False, message="That didn't sound like a jokebook command.")
    settings = assistant_repo.get_settings(db, owner_user_id=current_user.id)
    last_joke = settings.last_generated_joke if settings else None
    if not last_joke:
        return schemas.VoiceCommandResult(success=False, message="Generate a joke first.", folder=parsed["folder"])
    result = add_joke_to_folder(db, owner_user_id=current_user.id, text=last_joke, folder=parsed["folder"])
    return schemas.VoiceCommandResult(**result)
