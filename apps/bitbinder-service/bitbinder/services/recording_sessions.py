"""
Live recording state.

``RecordingClock`` tracks elapsed time across pause/resume. Sessions are kept
in process memory, one per user, until the audio is uploaded or cancelled.
"""
from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from bitbinder.utils.formatting import format_timer


class RecordingClock:
    """Start / pause / resume / stop stopwatch; paused intervals are excluded."""

    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self.is_recording = False
        self.is_paused = False
        self._accumulated = 0.0
        self._started_at: Optional[float] = None

    def start(self) -> None:
        self._accumulated = 0.0
        self._started_at = self._now()
        self.is_recording = True
        self.is_paused = False

    def pause(self) -> None:
        if not self.is_recording or self.is_paused:
            return
        self._accumulated += self._now() - self._started_at
        self._started_at = None
        self.is_paused = True

    def resume(self) -> None:
        if not self.is_recording or not self.is_paused:
            return
        self._started_at = self._now()
        self.is_paused = False

    def stop(self) -> float:
        """Stop the clock and return the final elapsed seconds."""
        elapsed = self.elapsed_seconds
        self._accumulated = elapsed
        self._started_at = None
        self.is_recording = False
        self.is_paused = False
        return elapsed

    @property
    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + (self._now() - self._started_at)


class RecordingInProgressError(RuntimeError):
    pass


@dataclass
class RecordingSession:
    set_list_id: uuid.UUID
    set_list_name: str
    clock: RecordingClock = field(default_factory=RecordingClock)

    def status(self) -> dict:
        elapsed = int(self.clock.elapsed_seconds)
        return {
            "set_list_id": self.set_list_id,
            "set_list_name": self.set_list_name,
            "is_recording": self.clock.is_recording,
            "is_paused": self.clock.is_paused,
            "elapsed_seconds": elapsed,
            "elapsed_display": format_timer(elapsed),
        }


class RecordingSessionRegistry:
    def __init__(self, clock_factory: Callable[[], RecordingClock] = RecordingClock) -> None:
        self._clock_factory = clock_factory
        self._sessions: Dict[uuid.UUID, RecordingSession] = {}
        self._lock = threading.Lock()

    def start(self, user_id: uuid.UUID, set_list_id: uuid.UUID, set_list_name: str) -> RecordingSession:
        with self._lock:
            if user_id in self._sessions:
                raise RecordingInProgressError("A recording is already in progress.")
            session = RecordingSession(set_list_id=set_list_id, set_list_name=set_list_name, clock=self._clock_factory())
            session.clock.start()
            self._sessions[user_id] = session
            return session

    def get(self, user_id: uuid.UUID) -> Optional[RecordingSession]:
        with self._lock:
            return self._sessions.get(user_id)

    def pause(self, user_id: uuid.UUID) -> Optional[RecordingSession]:
        session = self.get(user_id)
        if session:
            session.clock.pause()
        return session

    def resume(self, user_id: uuid.UUID) -> Optional[RecordingSession]:
        session = self.get(user_id)
        if session:
            session.clock.resume()
        return session

    def cancel(self, user_id: uuid.UUID) -> Optional[RecordingSession]:
        with self._lock:
            session = self._sessions.pop(user_id, None)
        if session:
            session.clock.stop()
        return session

    def finish(self, user_id: uuid.UUID, set_list_id: uuid.UUID) -> Optional[float]:
        """Close the session for ``set_list_id`` and return its elapsed seconds."""
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None or session.set_list_id != set_list_id:
                return None
            del self._sessions[user_id]
        return session.clock.stop()

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


_registry: Optional[RecordingSessionRegistry] = None


def get_recording_sessions() -> RecordingSessionRegistry:
    global _registry
    if _registry is None:
        _registry = RecordingSessionRegistry()
    return _registry


def reset_recording_sessions_for_tests() -> None:
    global _registry
    _registry = None
