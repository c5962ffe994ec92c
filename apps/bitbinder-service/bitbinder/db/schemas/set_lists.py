import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

NAME_MAX_LENGTH = 50


def _clean_name(value: str) -> str:
    cleaned = (value or '').strip()
    if not cleaned or len(cleaned) > NAME_MAX_LENGTH:
        raise ValueError("Name must be 1-50 characters")
    return cleaned


def _clean_order(value: List[uuid.UUID]) -> List[uuid.UUID]:
    if not value:
        raise ValueError("Select at least one joke")
    return list(value)


class SetListCreate(BaseModel):
    name: str
    joke_order: List[uuid.UUID] = []
    notes: str = ''

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        return _clean_name(v)

    @field_validator("joke_order")
    @classmethod
    def _validate_order(cls, v: List[uuid.UUID]):
        return _clean_order(v)


class SetListUpdate(BaseModel):
    name: Optional[str] = None
    joke_order: Optional[List[uuid.UUID]] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: Optional[str]):
        return v if v is None else _clean_name(v)

    @field_validator("joke_order")
    @classmethod
    def _validate_order(cls, v: Optional[List[uuid.UUID]]):
        return v if v is None else _clean_order(v)


class SetListRename(BaseModel):
    name: str


class SetListJokeRef(BaseModel):
    joke_id: uuid.UUID


class SetListReorder(BaseModel):
    source_joke_id: uuid.UUID
    target_joke_id: uuid.UUID


class SetList(BaseModel):
    id: uuid.UUID
    name: str
    joke_order: List[uuid.UUID]
    notes: str
    last_performed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class SetListSummary(SetList):
    joke_count: int = 0


class SetListEntry(BaseModel):
    position: int
    joke_id: uuid.UUID
    title: Optional[str] = None
    missing: bool = False


class SetListDetail(SetList):
    entries: List[SetListEntry] = []
