"""
Audit log API endpoints.

Lists the current user's own audit trail, newest first.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bitbinder.api.deps import get_current_user
from bitbinder.db import models, schemas
from bitbinder.db.database import get_db
from bitbinder.db.repositories import audits as audit_repo

router = APIRouter(prefix="/audits", tags=["audits"])


@router.get("/", response_model=List[schemas.AuditLog])
def list_audit_logs(
    action_type: Optional[str] = None,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return audit_repo.get_audit_logs(
        db,
        user_id=current_user.id,
        action_type=action_type,
        status=status,
        skip=skip,
        limit=limit,
    )
