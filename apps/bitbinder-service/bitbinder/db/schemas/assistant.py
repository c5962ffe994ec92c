import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class ApiKeyUpdate(BaseModel):
    api_key: str = ''


class ApiKeyStatus(BaseModel):
    configured: bool
    masked: str = ''
    engine: str  # openai|built-in


class GenerateRequest(BaseModel):
    topic: str = ''
    style: str = 'observational'
    auto_add: bool = False


class GeneratedJoke(BaseModel):
    title: str
    text: str


class GenerateResponse(BaseModel):
    engine: str
    jokes: List[GeneratedJoke]
    added_to_library: bool = False


class FolderAssignment(BaseModel):
    joke_id: uuid.UUID
    folder: str


class OrganizeResponse(BaseModel):
    engine: str
    assignments: List[FolderAssignment]


class ChatRequest(BaseModel):
    message: str = ''


class ChatMessage(BaseModel):
    id: uuid.UUID
    role: str
    content: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ChatResponse(BaseModel):
    reply: str
    engine: str


class VoiceCommandRequest(BaseModel):
    utterance: str = ''


class VoiceCommandResult(BaseModel):
    success: bool
    message: str
    folder: Optional[str] = None
