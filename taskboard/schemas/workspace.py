# taskboard/schemas/workspace.py
from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from taskboard.schemas.common import CamelModel, UtcDatetime, reject_null
from taskboard.schemas.task import TaskRead


class WorkspaceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class WorkspaceUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    is_public: Optional[bool] = None

    @field_validator("name", "is_public", mode="before")
    @classmethod
    def check_not_null(cls, v):
        return reject_null(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class WorkspaceRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    is_public: bool
    share_token: Optional[str] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class PublicWorkspaceView(CamelModel):
    workspace: WorkspaceRead
    tasks: List[TaskRead]


class ShareTokenRead(CamelModel):
    token: str


class PublicToggleRead(CamelModel):
    is_public: bool
