import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc
from bitbinder.utils.commands import DEFAULT_JOKEBOOK_FOLDER



class JokebookEntry(Base):
    __tablename__ = 'jokebook_entries'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    folder = Column(String(100), nullable=False, default=DEFAULT_JOKEBOOK_FOLDER)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_jokebook_entries_owner_folder', 'owner_user_id', 'folder'),
    )
