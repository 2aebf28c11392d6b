# taskboard/schemas/subtask.py
from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from taskboard.schemas.common import CamelModel, UtcDatetime, reject_null


class SubtaskInput(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    completed: bool = False


class SubtaskCreate(SubtaskInput):
    task_id: str = Field(min_length=1)


class SubtaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    completed: Optional[bool] = None

    @field_validator("title", "completed", mode="before")
    @classmethod
    def check_not_null(cls, v):
        return reject_null(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class SubtaskRead(CamelModel):
    id: str
    task_id: str
    title: str
    completed: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime
