"""Display helpers shared by recordings and the recording clock."""

from __future__ import annotations

from typing import Optional

_MIME_EXTENSIONS = (
    ("ogg", "ogg"),
    ("mp4", "mp4"),
)


def format_duration(seconds: Optional[float]) -> str:
    """Return ``m:ss`` for a duration in seconds; ``None`` renders as 0:00."""
    if seconds is None:
        return "0:00"
    total = max(int(seconds), 0)
    mins, secs = divmod(total, 60)
    return f"{mins}:{secs:02d}"


def format_timer(seconds: Optional[float]) -> str:
    """Return the zero-padded ``mm:ss`` used by the live recording timer."""
    total = max(int(seconds or 0), 0)
    mins, secs = divmod(total, 60)
    return f"{mins:02d}:{secs:02d}"


def extension_for_mime(mime_type: Optional[str]) -> str:
    mime = (mime_type or "").lower()
    for needle, ext in _MIME_EXTENSIONS:
        if needle in mime:
            return ext
    return "webm"
