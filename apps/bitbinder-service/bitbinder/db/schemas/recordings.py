import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class Recording(BaseModel):
    id: uuid.UUID
    set_list_id: Optional[uuid.UUID] = None
    set_list_name: str
    duration_sec: int
    duration_display: str = '0:00'
    file_name: str
    mime_type: str
    size_bytes: int
    notes: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class RecordingUpdate(BaseModel):
    notes: Optional[str] = None


class RecordingGroup(BaseModel):
    date: str
    recordings: List[Recording]


class RecordingSessionStart(BaseModel):
    set_list_id: uuid.UUID


class RecordingSessionStatus(BaseModel):
    set_list_id: uuid.UUID
    set_list_name: str
    is_recording: bool
    is_paused: bool
    elapsed_seconds: int
    elapsed_display: str
