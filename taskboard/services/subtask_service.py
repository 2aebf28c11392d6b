from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import Session, select

from taskboard.core.errors import NotFoundError
from taskboard.core.timeutil import utcnow
from taskboard.models.subtask import Subtask
from taskboard.models.task import Task
from taskboard.schemas.subtask import SubtaskInput, SubtaskUpdate
from taskboard.services import task_service
from taskboard.services.common import touch

log = logging.getLogger(__name__)


def _owned(stmt, owner_id: str):
    # every subtask query goes through the parent task's owner
    return stmt.join(Task, Task.id == Subtask.task_id).where(Task.user_id == owner_id)


def create_subtask(db: Session, owner_id: str, task_id: str, data: SubtaskInput) -> Subtask:
    task_service.get_task(db, owner_id, task_id)

    now = utcnow()
    subtask = Subtask(
        task_id=task_id,
        title=data.title,
        completed=bool(data.completed),
        created_at=now,
        updated_at=now,
    )
    db.add(subtask)
    db.commit()
    db.refresh(subtask)
    log.info("subtask created id=%s task=%s", subtask.id, task_id)
    return subtask


def list_subtasks_for_task(db: Session, owner_id: str, task_id: str) -> list[Subtask]:
    """Oldest first. Empty for a task that is gone or not the caller's."""
    stmt = _owned(select(Subtask), owner_id).where(Subtask.task_id == task_id)
    stmt = stmt.order_by(Subtask.created_at.asc(), Subtask.id)
    return list(db.exec(stmt).all())


def find_subtask(db: Session, owner_id: str, subtask_id: str) -> Optional[Subtask]:
    stmt = _owned(select(Subtask), owner_id).where(Subtask.id == subtask_id)
    return db.exec(stmt).first()


def get_subtask(db: Session, owner_id: str, subtask_id: str) -> Subtask:
    subtask = find_subtask(db, owner_id, subtask_id)
    if subtask is None:
        raise NotFoundError("Subtask not found")
    return subtask


def update_subtask(db: Session, owner_id: str, subtask_id: str, data: SubtaskUpdate) -> Subtask:
    subtask = get_subtask(db, owner_id, subtask_id)
    changes = data.changes()
    for field, value in changes.items():
        setattr(subtask, field, value)
    touch(subtask)

    db.add(subtask)
    db.commit()
    db.refresh(subtask)
    log.info("subtask updated id=%s fields=%s", subtask.id, sorted(changes))
    return subtask


def toggle_subtask(db: Session, owner_id: str, subtask_id: str) -> Subtask:
    subtask = get_subtask(db, owner_id, subtask_id)
    subtask.completed = not subtask.completed
    touch(subtask)

    db.add(subtask)
    db.commit()
    db.refresh(subtask)
    log.info("subtask toggled id=%s completed=%s", subtask.id, subtask.completed)
    return subtask


def delete_subtask(db: Session, owner_id: str, subtask_id: str) -> bool:
    subtask = find_subtask(db, owner_id, subtask_id)
    if subtask is None:
        return False
    db.delete(subtask)
    db.commit()
    log.info("subtask deleted id=%s", subtask_id)
    return True
