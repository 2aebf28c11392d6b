from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.db.session import get_session
from taskboard.dependencies.auth import get_current_user_id
from taskboard.schemas.common import DataResponse, MessageResponse
from taskboard.schemas.subtask import SubtaskCreate, SubtaskRead, SubtaskUpdate
from taskboard.services import subtask_service

router = APIRouter(prefix="/api/subtasks", tags=["Subtasks"])


def _read_all(subtasks) -> list[SubtaskRead]:
    return [SubtaskRead.model_validate(s) for s in subtasks]


@router.get("", response_model=DataResponse[list[SubtaskRead]])
def list_subtasks(
    task_id: Optional[str] = Query(None, alias="taskId"),
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    if not task_id:
        raise ValidationError(
            details=[{"path": "taskId", "message": "Required"}],
        )
    return DataResponse(data=_read_all(subtask_service.list_subtasks_for_task(db, user_id, task_id)))


@router.get("/task/{task_id}", response_model=DataResponse[list[SubtaskRead]])
def list_subtasks_for_task(
    task_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    return DataResponse(data=_read_all(subtask_service.list_subtasks_for_task(db, user_id, task_id)))


@router.post("", response_model=DataResponse[SubtaskRead], status_code=status.HTTP_201_CREATED)
def create_subtask(
    body: SubtaskCreate,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    subtask = subtask_service.create_subtask(db, user_id, body.task_id, body)
    return DataResponse(data=SubtaskRead.model_validate(subtask))


@router.get("/{subtask_id}", response_model=DataResponse[SubtaskRead])
def get_subtask(
    subtask_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    subtask = subtask_service.get_subtask(db, user_id, subtask_id)
    return DataResponse(data=SubtaskRead.model_validate(subtask))


@router.patch("/{subtask_id}", response_model=DataResponse[SubtaskRead])
def update_subtask(
    subtask_id: str,
    body: SubtaskUpdate,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    subtask = subtask_service.update_subtask(db, user_id, subtask_id, body)
    return DataResponse(data=SubtaskRead.model_validate(subtask))


@router.post("/{subtask_id}/toggle", response_model=DataResponse[SubtaskRead])
def toggle_subtask(
    subtask_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    subtask = subtask_service.toggle_subtask(db, user_id, subtask_id)
    return DataResponse(data=SubtaskRead.model_validate(subtask))


@router.delete("/{subtask_id}", response_model=MessageResponse)
def delete_subtask(
    subtask_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    if not subtask_service.delete_subtask(db, user_id, subtask_id):
        raise NotFoundError("Subtask not found")
    return MessageResponse(message="Subtask deleted successfully")
