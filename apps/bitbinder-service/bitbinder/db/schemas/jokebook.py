import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class JokebookEntryCreate(BaseModel):
    text: str = ''
    folder: Optional[str] = None


class JokebookEntryUpdate(BaseModel):
    text: str


class JokebookMove(BaseModel):
    folder: str = ''


class JokebookEntry(BaseModel):
    id: uuid.UUID
    folder: str
    text: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class JokebookCommandResult(BaseModel):
    success: bool
    message: str
    folder: Optional[str] = None


class JokebookCommandParse(BaseModel):
    matched: bool
    folder: Optional[str] = None
