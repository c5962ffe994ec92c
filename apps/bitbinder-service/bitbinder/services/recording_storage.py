"""Filesystem storage for recorded set audio."""
from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from bitbinder.utils.formatting import extension_for_mime

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "audio/webm"


def build_file_name(set_list_name: str, when: datetime, mime_type: Optional[str]) -> str:
    """Download name: ``<set list> - <YYYY-MM-DD> <HH-MM>.<ext>``."""
    return f"{set_list_name} - {when:%Y-%m-%d} {when:%H-%M}.{extension_for_mime(mime_type)}"


@dataclass(frozen=True)
class StoredAudio:
    storage_path: str
    size_bytes: int


class RecordingStorage:
    """Writes audio under ``root/<owner id>/<random id>.<ext>``; paths stored relative to root."""

    def __init__(self, root: str | os.PathLike) -> None:
        self.root = Path(root)

    @classmethod
    def from_env(cls) -> "RecordingStorage":
        return cls(os.getenv("RECORDINGS_DIR") or "./data/recordings")

    def _resolve(self, storage_path: str) -> Path:
        return self.root / storage_path

    def save(self, owner_user_id: uuid.UUID, data: bytes, mime_type: Optional[str]) -> StoredAudio:
        if not data:
            raise ValueError("Recording is empty.")
        relative = Path(str(owner_user_id)) / f"{uuid.uuid4().hex}.{extension_for_mime(mime_type)}"
        target = self._resolve(relative.as_posix())
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("Stored recording audio %s (%d bytes)", relative.as_posix(), len(data))
        return StoredAudio(storage_path=relative.as_posix(), size_bytes=len(data))

    def path_for(self, storage_path: str) -> Optional[Path]:
        path = self._resolve(storage_path)
        return path if path.is_file() else None

    def delete(self, storage_path: str) -> bool:
        path = self._resolve(storage_path)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            logger.warning("Recording audio already missing: %s", storage_path)
            return False


_recording_storage: Optional[RecordingStorage] = None


def get_recording_storage() -> RecordingStorage:
    global _recording_storage
    if _recording_storage is None:
        _recording_storage = RecordingStorage.from_env()
    return _recording_storage


def reset_recording_storage_for_tests() -> None:
    global _recording_storage
    _recording_storage = None
