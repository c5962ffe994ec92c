"""
Audit logging helpers and enums.

Persists normalized audit records for account events and deletions.
"""
from __future__ import annotations
import logging
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from bitbinder.db import schemas
from bitbinder.db.repositories import audits as audit_repo

logger = logging.getLogger(__name__)


class AuditAction(str, Enum):
    # Accounts
    USER_REGISTER = "user_register"
    USER_LOGIN = "user_login"
    USER_LOGOUT = "user_logout"
    # Deletions
    JOKE_DELETE = "joke_delete"
    FOLDER_DELETE = "folder_delete"
    SET_LIST_DELETE = "set_list_delete"
    RECORDING_DELETE = "recording_delete"
    USER_FILE_DELETE = "user_file_delete"
    NOTEBOOK_ENTRY_DELETE = "notebook_entry_delete"
    JOKEBOOK_ENTRY_DELETE = "jokebook_entry_delete"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor_user_id: uuid.UUID,
    metadata: Optional[Dict[str, Any]] = None,
) -> schemas.AuditLog:
    """Central audit logging helper."""
    # Persist plain string values, not Enum reprs
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    logger.debug("audit %s %s %s=%s", action_value, status_value, target_type, target_id)
    return audit_repo.create_audit_log(db, audit_log=audit_log, actor_user_id=actor_user_id)


def log_delete(
    db: Session,
    *,
    actor_user_id: uuid.UUID,
    action: AuditAction,
    target_type: str,
    target_id: uuid.UUID,
    name: Optional[str] = None,
):
    return log(
        db,
        action=action,
        target_type=target_type,
        target_id=target_id,
        actor_user_id=actor_user_id,
        metadata={"name": name} if name else None,
    )


__all__ = ["AuditAction", "AuditStatus", "log", "log_delete"]
