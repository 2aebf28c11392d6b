# taskboard/schemas/task.py
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from taskboard.core.timeutil import as_utc
from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.schemas.common import CamelModel, UtcDatetime, reject_null, require_iso_string
from taskboard.schemas.subtask import SubtaskRead

TaskSortField = Literal["createdAt", "updatedAt", "dueDate", "priority"]
SortOrder = Literal["asc", "desc"]


class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: Optional[datetime] = None
    workspace_id: Optional[str] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date_type(cls, v):
        return require_iso_string(v)

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, v):
        return as_utc(v)


class TaskUpdate(CamelModel):
    """
    Partial update. A key left out of the payload is left unchanged;
    an explicit null clears description, dueDate or workspaceId.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    workspace_id: Optional[str] = None

    @field_validator("title", "status", "priority", mode="before")
    @classmethod
    def check_not_null(cls, v):
        return reject_null(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date_type(cls, v):
        return require_iso_string(v)

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, v):
        return as_utc(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskFilters(CamelModel):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    search: Optional[str] = None
    sort_by: Optional[TaskSortField] = None
    sort_order: Optional[SortOrder] = None
    workspace_id: Optional[str] = None


class TaskRead(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[UtcDatetime] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    subtasks: List[SubtaskRead] = Field(default_factory=list)
