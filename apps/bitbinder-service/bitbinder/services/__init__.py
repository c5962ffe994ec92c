"""Business logic services package with public service helpers."""

from .assistant_service import (
    AssistantConfig,
    AssistantError,
    AssistantService,
    get_assistant_service,
    reset_assistant_service_for_tests,
)
from .recording_storage import (
    RecordingStorage,
    build_file_name,
    get_recording_storage,
    reset_recording_storage_for_tests,
)
from .recording_sessions import (
    RecordingClock,
    RecordingInProgressError,
    RecordingSessionRegistry,
    get_recording_sessions,
    reset_recording_sessions_for_tests,
)

__all__ = [
    "AssistantConfig",
    "AssistantError",
    "AssistantService",
    "get_assistant_service",
    "reset_assistant_service_for_tests",
    "RecordingStorage",
    "build_file_name",
    "get_recording_storage",
    "reset_recording_storage_for_tests",
    "RecordingClock",
    "RecordingInProgressError",
    "RecordingSessionRegistry",
    "get_recording_sessions",
    "reset_recording_sessions_for_tests",
]
