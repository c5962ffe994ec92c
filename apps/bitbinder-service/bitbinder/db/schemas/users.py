import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class RegisterRequest(BaseModel):
    username: str = ''
    password: str = ''
    confirm_password: Optional[str] = None


class LoginRequest(BaseModel):
    username: str = ''
    password: str = ''


class User(BaseModel):
    id: uuid.UUID
    username: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    id: uuid.UUID
    username: str
    message: str = 'Account created! You can now log in.'


class LoginResponse(BaseModel):
    token: str  # one-time secret string
    user_id: uuid.UUID
    username: str
    expires_at: Optional[datetime] = None
