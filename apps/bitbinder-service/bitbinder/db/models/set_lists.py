import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, Integer, JSON
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc
from bitbinder.utils.formatting import format_duration


class SetList(Base):
    __tablename__ = 'set_lists'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(50), nullable=False)
    # Ordered joke ids as strings; entries may point at deleted jokes
    joke_order = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=False, default='')
    last_performed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    @property
    def joke_count(self) -> int:
        return len(self.joke_order or [])

    __table_args__ = (
        Index('idx_set_lists_owner_user_id', 'owner_user_id'),
    )


class Recording(Base):
    __tablename__ = 'recordings'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    # Plain reference: recordings outlive the set list they were made from
    set_list_id = Column(UUID(as_uuid=True), nullable=True)
    set_list_name = Column(String(50), nullable=False, default='')
    duration_sec = Column(Integer, nullable=False, default=0)
    file_name = Column(String(255), nullable=False)
    mime_type = Column(String(100), nullable=False, default='audio/webm')
    storage_path = Column(Text, nullable=False)
    size_bytes = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=False, default='')
    created_at = Column(DateTime(timezone=True), default=now_utc)

    @property
    def duration_display(self) -> str:
        return format_duration(self.duration_sec)

    __table_args__ = (
        Index('idx_recordings_owner_user_id', 'owner_user_id'),
        Index('idx_recordings_set_list_id', 'set_list_id'),
        Index('idx_recordings_created_at', 'created_at'),
    )
