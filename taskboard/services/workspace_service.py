from __future__ import annotations

import logging
import secrets
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from taskboard.core.config import get_settings
from taskboard.core.errors import NotFoundError, ShareAccessError
from taskboard.core.timeutil import utcnow
from taskboard.models.subtask import Subtask
from taskboard.models.task import Task
from taskboard.models.workspace import Workspace
from taskboard.schemas.workspace import WorkspaceCreate, WorkspaceUpdate
from taskboard.services.common import touch

log = logging.getLogger(__name__)

DEFAULT_WORKSPACE_NAME = "My Tasks"
DEFAULT_WORKSPACE_DESCRIPTION = "Default workspace for my tasks"


def new_share_token() -> str:
    # share tokens are the only credential on the public read path
    return secrets.token_urlsafe(get_settings().share_token_bytes)


def create_workspace(db: Session, owner_id: str, data: WorkspaceCreate) -> Workspace:
    now = utcnow()
    workspace = Workspace(
        name=data.name,
        description=data.description,
        owner_id=owner_id,
        is_public=False,
        share_token=new_share_token(),
        created_at=now,
        updated_at=now,
    )
    db.add(workspace)
    db.commit()
    db.refresh(workspace)
    log.info("workspace created id=%s owner=%s", workspace.id, owner_id)
    return workspace


def list_workspaces(db: Session, owner_id: str) -> list[Workspace]:
    stmt = (
        select(Workspace)
        .where(Workspace.owner_id == owner_id)
        .order_by(Workspace.created_at.asc(), Workspace.id)
    )
    return list(db.exec(stmt).all())


def find_workspace(db: Session, owner_id: str, workspace_id: str) -> Optional[Workspace]:
    stmt = select(Workspace).where(
        Workspace.id == workspace_id,
        Workspace.owner_id == owner_id,
    )
    return db.exec(stmt).first()


def get_workspace(db: Session, owner_id: str, workspace_id: str) -> Workspace:
    workspace = find_workspace(db, owner_id, workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace not found")
    return workspace


def get_or_create_default_workspace(db: Session, owner_id: str) -> Workspace:
    existing = list_workspaces(db, owner_id)
    if existing:
        return existing[0]
    return create_workspace(
        db,
        owner_id,
        WorkspaceCreate(name=DEFAULT_WORKSPACE_NAME, description=DEFAULT_WORKSPACE_DESCRIPTION),
    )


def update_workspace(db: Session, owner_id: str, workspace_id: str, data: WorkspaceUpdate) -> Workspace:
    workspace = get_workspace(db, owner_id, workspace_id)
    changes = data.changes()
    for field, value in changes.items():
        setattr(workspace, field, value)
    touch(workspace)

    db.add(workspace)
    db.commit()
    db.refresh(workspace)
    log.info("workspace updated id=%s fields=%s", workspace.id, sorted(changes))
    return workspace


def generate_share_token(db: Session, owner_id: str, workspace_id: str) -> str:
    """Replace the share token; links built on the old token stop resolving at once."""
    workspace = get_workspace(db, owner_id, workspace_id)
    workspace.share_token = new_share_token()
    touch(workspace)
    db.add(workspace)
    db.commit()
    db.refresh(workspace)
    log.info("workspace share token regenerated id=%s", workspace.id)
    return workspace.share_token


def toggle_public(db: Session, owner_id: str, workspace_id: str) -> bool:
    workspace = get_workspace(db, owner_id, workspace_id)
    workspace.is_public = not workspace.is_public
    touch(workspace)
    db.add(workspace)
    db.commit()
    db.refresh(workspace)
    log.info("workspace visibility id=%s public=%s", workspace.id, workspace.is_public)
    return workspace.is_public


def delete_workspace(db: Session, owner_id: str, workspace_id: str) -> bool:
    workspace = find_workspace(db, owner_id, workspace_id)
    if workspace is None:
        return False

    task_ids = select(Task.id).where(Task.workspace_id == workspace_id)
    try:
        db.exec(
            delete(Subtask)
            .where(Subtask.task_id.in_(task_ids))
            .execution_options(synchronize_session="fetch")
        )
        db.exec(
            delete(Task)
            .where(Task.workspace_id == workspace_id)
            .execution_options(synchronize_session="fetch")
        )
        db.exec(
            delete(Workspace)
            .where(Workspace.id == workspace_id)
            .execution_options(synchronize_session="fetch")
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    log.info("workspace deleted id=%s owner=%s", workspace_id, owner_id)
    return True


def get_public_workspace_view(db: Session, share_token: str) -> tuple[Workspace, list[Task]]:
    """
    The only unauthenticated read. Resolves when the token matches AND the
    workspace is currently public; returns every task in the workspace
    regardless of task owner.
    """
    if not share_token:
        raise ShareAccessError()

    workspace = db.exec(
        select(Workspace).where(Workspace.share_token == share_token)
    ).first()
    if workspace is None or not workspace.is_public:
        raise ShareAccessError()

    tasks = db.exec(
        select(Task)
        .where(Task.workspace_id == workspace.id)
        .order_by(Task.created_at.desc(), Task.id)
    ).all()
    return workspace, list(tasks)
