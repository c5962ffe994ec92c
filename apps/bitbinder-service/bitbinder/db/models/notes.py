import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc


class NotebookEntry(Base):
    __tablename__ = 'notebook_entries'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default='')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_notebook_entries_owner_user_id', 'owner_user_id'),
    )


class Notepad(Base):
    __tablename__ = 'notepads'
    # One scratch document per user
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    text = Column(Text, nullable=False, default='')
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class UserFile(Base):
    __tablename__ = 'user_files'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_content = Column(Text, nullable=False, default='')
    last_updated = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_user_files_owner_user_id', 'owner_user_id'),
    )
