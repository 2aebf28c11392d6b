from datetime import datetime
from typing import List, Literal, Optional, TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlmodel import SQLModel, Field, Relationship

from taskboard.core.timeutil import utcnow

if TYPE_CHECKING:
    from taskboard.models.subtask import Subtask

TaskStatus = Literal["todo", "in_progress", "done"]
TaskPriority = Literal["low", "medium", "high"]

# sort rank for ORDER BY priority
PRIORITY_RANK = {"low": 0, "medium": 1, "high": 2}


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(
        sa_column=Column(
            String,
            ForeignKey("user.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    workspace_id: Optional[str] = Field(
        default=None,
        sa_column=Column(
            String,
            ForeignKey("workspaces.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: str = Field(default="todo", max_length=20)
    priority: str = Field(default="medium", max_length=20)
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    subtasks: List["Subtask"] = Relationship(
        back_populates="task",
        sa_relationship_kwargs={
            "order_by": "Subtask.created_at",
            "cascade": "all, delete-orphan",
            "passive_deletes": True,
        },
    )
