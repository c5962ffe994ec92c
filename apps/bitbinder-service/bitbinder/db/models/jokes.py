import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Folder(Base):
    __tablename__ = 'folders'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    jokes = relationship("Joke", back_populates="folder")

    __table_args__ = (
        Index('idx_folders_owner_user_id', 'owner_user_id'),
    )


class Joke(Base):
    __tablename__ = 'jokes'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(30), nullable=False)
    text = Column(Text, nullable=False, default='')
    folder_id = Column(UUID(as_uuid=True), ForeignKey('folders.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    folder = relationship("Folder", back_populates="jokes")

    __table_args__ = (
        Index('idx_jokes_owner_user_id', 'owner_user_id'),
        Index('idx_jokes_folder_id', 'folder_id'),
        Index('idx_jokes_created_at', 'created_at'),
    )
