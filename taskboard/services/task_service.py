from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import case, delete, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from taskboard.core.errors import NotFoundError
from taskboard.core.timeutil import utcnow
from taskboard.models.subtask import Subtask
from taskboard.models.task import PRIORITY_RANK, Task
from taskboard.models.workspace import Workspace
from taskboard.schemas.task import TaskCreate, TaskFilters, TaskUpdate
from taskboard.services.common import touch

log = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "dueDate": Task.due_date,
}


def _order_by(sort_by: Optional[str], sort_order: Optional[str]):
    field = sort_by or "createdAt"
    descending = (sort_order or "desc") == "desc"

    if field == "priority":
        expr = case(PRIORITY_RANK, value=Task.priority, else_=len(PRIORITY_RANK))
    else:
        expr = _SORT_COLUMNS[field]

    ordered = expr.desc() if descending else expr.asc()
    if field == "dueDate":
        ordered = ordered.nulls_last()
    return ordered


def _ensure_workspace(db: Session, owner_id: str, workspace_id: Optional[str]) -> None:
    if workspace_id is None:
        return
    stmt = select(Workspace.id).where(
        Workspace.id == workspace_id,
        Workspace.owner_id == owner_id,
    )
    if db.exec(stmt).first() is None:
        raise NotFoundError("Workspace not found")


def create_task(db: Session, owner_id: str, data: TaskCreate) -> Task:
    _ensure_workspace(db, owner_id, data.workspace_id)

    now = utcnow()
    task = Task(
        user_id=owner_id,
        workspace_id=data.workspace_id,
        title=data.title,
        description=data.description,
        status=data.status or "todo",
        priority=data.priority or "medium",
        due_date=data.due_date,
        created_at=now,
        updated_at=now,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    log.info("task created id=%s owner=%s", task.id, owner_id)
    return task


def list_tasks(db: Session, owner_id: str, filters: Optional[TaskFilters] = None) -> list[Task]:
    """
    Owner-scoped listing. Filters are ANDed; search is a case-insensitive
    substring match on title OR description. Newest first unless sorted.
    """
    filters = filters or TaskFilters()
    stmt = select(Task).where(Task.user_id == owner_id)

    if filters.status:
        stmt = stmt.where(Task.status == filters.status)
    if filters.priority:
        stmt = stmt.where(Task.priority == filters.priority)
    if filters.workspace_id:
        stmt = stmt.where(Task.workspace_id == filters.workspace_id)
    if filters.search:
        stmt = stmt.where(
            or_(
                Task.title.icontains(filters.search, autoescape=True),
                Task.description.icontains(filters.search, autoescape=True),
            )
        )

    stmt = stmt.order_by(_order_by(filters.sort_by, filters.sort_order), Task.id)
    return list(db.exec(stmt).all())


def find_task(db: Session, owner_id: str, task_id: str) -> Optional[Task]:
    stmt = select(Task).where(Task.id == task_id, Task.user_id == owner_id)
    return db.exec(stmt).first()


def get_task(db: Session, owner_id: str, task_id: str) -> Task:
    # missing and foreign tasks look the same to the caller
    task = find_task(db, owner_id, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def update_task(db: Session, owner_id: str, task_id: str, data: TaskUpdate) -> Task:
    task = get_task(db, owner_id, task_id)
    changes = data.changes()
    if "workspace_id" in changes:
        _ensure_workspace(db, owner_id, changes["workspace_id"])

    for field, value in changes.items():
        setattr(task, field, value)
    touch(task)

    db.add(task)
    db.commit()
    db.refresh(task)
    log.info("task updated id=%s fields=%s", task.id, sorted(changes))
    return task


def delete_task(db: Session, owner_id: str, task_id: str) -> bool:
    task = find_task(db, owner_id, task_id)
    if task is None:
        return False

    try:
        db.exec(
            delete(Subtask)
            .where(Subtask.task_id == task_id)
            .execution_options(synchronize_session="fetch")
        )
        db.exec(
            delete(Task)
            .where(Task.id == task_id, Task.user_id == owner_id)
            .execution_options(synchronize_session="fetch")
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    log.info("task deleted id=%s owner=%s", task_id, owner_id)
    return True
