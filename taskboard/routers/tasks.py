from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from taskboard.core.errors import NotFoundError
from taskboard.db.session import get_session
from taskboard.dependencies.auth import get_current_user_id
from taskboard.schemas.common import DataResponse, MessageResponse
from taskboard.schemas.task import TaskCreate, TaskFilters, TaskRead, TaskUpdate
from taskboard.schemas.validation import validate
from taskboard.services import task_service

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=DataResponse[list[TaskRead]])
def list_tasks(
    request: Request,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    # camelCase query keys (sortBy, workspaceId) go through the same schema
    filters = validate(TaskFilters, dict(request.query_params))
    tasks = task_service.list_tasks(db, user_id, filters)
    return DataResponse(data=[TaskRead.model_validate(t) for t in tasks])


@router.get("/{task_id}", response_model=DataResponse[TaskRead])
def get_task(
    task_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    task = task_service.get_task(db, user_id, task_id)
    return DataResponse(data=TaskRead.model_validate(task))


@router.post("", response_model=DataResponse[TaskRead], status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreate,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    task = task_service.create_task(db, user_id, body)
    return DataResponse(data=TaskRead.model_validate(task))


@router.patch("/{task_id}", response_model=DataResponse[TaskRead])
def update_task(
    task_id: str,
    body: TaskUpdate,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    task = task_service.update_task(db, user_id, task_id, body)
    return DataResponse(data=TaskRead.model_validate(task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    if not task_service.delete_task(db, user_id, task_id):
        raise NotFoundError("Task not found")
    return MessageResponse(message="Task deleted successfully")
