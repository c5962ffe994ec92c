import uuid
from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, field_validator

TITLE_MAX_LENGTH = 30


def _clean_title(value: str) -> str:
    cleaned = (value or '').strip()
    if not cleaned or len(cleaned) > TITLE_MAX_LENGTH:
        raise ValueError("Title must be 1-30 characters")
    return cleaned


class JokeBase(BaseModel):
    title: str
    text: str = ''
    folder_id: Optional[uuid.UUID] = None


class JokeCreate(JokeBase):
    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: str):
        return _clean_title(v)


class JokeUpdate(BaseModel):
    title: Optional[str] = None
    text: Optional[str] = None
    folder_id: Optional[uuid.UUID] = None

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: Optional[str]):
        if v is None:
            return v
        return _clean_title(v)


class Joke(JokeBase):
    id: uuid.UUID
    owner_user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


JokeSort = Literal["newest", "oldest", "title"]


class FolderCreate(BaseModel):
    name: str


class Folder(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class FolderWithCount(Folder):
    joke_count: int = 0
