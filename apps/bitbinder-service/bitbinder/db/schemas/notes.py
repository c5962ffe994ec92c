import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


def _clean_entry_title(value: str) -> str:
    cleaned = (value or '').strip()
    if not cleaned:
        raise ValueError("Please enter a title.")
    return cleaned


class NotebookEntryCreate(BaseModel):
    title: str
    content: str = ''

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: str):
        return _clean_entry_title(v)


class NotebookEntryUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: Optional[str]):
        return v if v is None else _clean_entry_title(v)


class NotebookEntry(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class Notepad(BaseModel):
    text: str = ''
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class NotepadUpdate(BaseModel):
    text: str = ''


class NotepadAppend(BaseModel):
    text: str


class NotepadExport(BaseModel):
    title: Optional[str] = None


class JokeDraft(BaseModel):
    title: str = ''
    text: str
    joke_id: Optional[uuid.UUID] = None


class UserFileCreate(BaseModel):
    file_name: str = ''
    file_content: str = ''


class UserFileContent(BaseModel):
    file_content: str = ''


class UserFileRename(BaseModel):
    file_name: str


class UserFile(BaseModel):
    id: uuid.UUID
    file_name: str
    file_content: str
    last_updated: datetime
    model_config = ConfigDict(from_attributes=True)
