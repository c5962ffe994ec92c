"""
Domain-split Pydantic schemas.

Re-exports every request/response model so callers can use
`from bitbinder.db import schemas` and `schemas.Joke`.
"""

from .users import User, RegisterRequest, RegisterResponse, LoginRequest, LoginResponse
from .jokes import (
    JokeBase,
    JokeCreate,
    JokeUpdate,
    Joke,
    JokeSort,
    FolderCreate,
    Folder,
    FolderWithCount,
)
from .set_lists import (
    SetListCreate,
    SetListUpdate,
    SetListRename,
    SetListJokeRef,
    SetListReorder,
    SetList,
    SetListSummary,
    SetListEntry,
    SetListDetail,
)
from .recordings import (
    Recording,
    RecordingUpdate,
    RecordingGroup,
    RecordingSessionStart,
    RecordingSessionStatus,
)
from .notes import (
    NotebookEntryCreate,
    NotebookEntryUpdate,
    NotebookEntry,
    Notepad,
    NotepadUpdate,
    NotepadAppend,
    NotepadExport,
    JokeDraft,
    UserFileCreate,
    UserFileContent,
    UserFileRename,
    UserFile,
)
from .jokebook import (
    JokebookEntryCreate,
    JokebookEntryUpdate,
    JokebookMove,
    JokebookEntry,
    JokebookCommandResult,
    JokebookCommandParse,
)
from .assistant import (
    ApiKeyUpdate,
    ApiKeyStatus,
    GenerateRequest,
    GeneratedJoke,
    GenerateResponse,
    FolderAssignment,
    OrganizeResponse,
    ChatRequest,
    ChatMessage,
    ChatResponse,
    VoiceCommandRequest,
    VoiceCommandResult,
)
from .audits import AuditLogBase, AuditLogCreate, AuditLog
