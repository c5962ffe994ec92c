"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes from one import point.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User, UserSession
from .jokes import Folder, Joke
from .set_lists import SetList, Recording
from .notes import NotebookEntry, Notepad, UserFile
from .jokebook import JokebookEntry, DEFAULT_JOKEBOOK_FOLDER
from .assistant import AssistantSettings, ChatMessage
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # accounts
    "User",
    "UserSession",
    # jokes
    "Folder",
    "Joke",
    # sets/recordings
    "SetList",
    "Recording",
    # notes
    "NotebookEntry",
    "Notepad",
    "UserFile",
    # jokebook
    "JokebookEntry",
    "DEFAULT_JOKEBOOK_FOLDER",
    # assistant
    "AssistantSettings",
    "ChatMessage",
    # audit
    "AuditLog",
]
