from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from taskboard.core.errors import NotFoundError
from taskboard.db.session import get_session
from taskboard.dependencies.auth import get_current_user_id
from taskboard.schemas.common import DataResponse, MessageResponse
from taskboard.schemas.task import TaskRead
from taskboard.schemas.workspace import (
    PublicToggleRead,
    PublicWorkspaceView,
    ShareTokenRead,
    WorkspaceCreate,
    WorkspaceRead,
    WorkspaceUpdate,
)
from taskboard.services import workspace_service

router = APIRouter(prefix="/api/workspaces", tags=["Workspaces"])


# ===== public (no auth) =====
@router.get("/public/{token}", response_model=DataResponse[PublicWorkspaceView])
def get_public_workspace(token: str, db: Session = Depends(get_session)):
    workspace, tasks = workspace_service.get_public_workspace_view(db, token)
    view = PublicWorkspaceView(
        workspace=WorkspaceRead.model_validate(workspace),
        tasks=[TaskRead.model_validate(t) for t in tasks],
    )
    return DataResponse(data=view)


# ===== owner =====
@router.get("", response_model=DataResponse[list[WorkspaceRead]])
def list_workspaces(
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    workspaces = workspace_service.list_workspaces(db, user_id)
    return DataResponse(data=[WorkspaceRead.model_validate(w) for w in workspaces])


@router.get("/default", response_model=DataResponse[WorkspaceRead])
def get_default_workspace(
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    workspace = workspace_service.get_or_create_default_workspace(db, user_id)
    return DataResponse(data=WorkspaceRead.model_validate(workspace))


@router.post("", response_model=DataResponse[WorkspaceRead], status_code=status.HTTP_201_CREATED)
def create_workspace(
    body: WorkspaceCreate,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    workspace = workspace_service.create_workspace(db, user_id, body)
    return DataResponse(data=WorkspaceRead.model_validate(workspace))


@router.get("/{workspace_id}", response_model=DataResponse[WorkspaceRead])
def get_workspace(
    workspace_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    workspace = workspace_service.get_workspace(db, user_id, workspace_id)
    return DataResponse(data=WorkspaceRead.model_validate(workspace))


@router.patch("/{workspace_id}", response_model=DataResponse[WorkspaceRead])
def update_workspace(
    workspace_id: str,
    body: WorkspaceUpdate,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    workspace = workspace_service.update_workspace(db, user_id, workspace_id, body)
    return DataResponse(data=WorkspaceRead.model_validate(workspace))


@router.post("/{workspace_id}/share-token", response_model=DataResponse[ShareTokenRead])
def regenerate_share_token(
    workspace_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    token = workspace_service.generate_share_token(db, user_id, workspace_id)
    return DataResponse(data=ShareTokenRead(token=token))


@router.post("/{workspace_id}/toggle-public", response_model=DataResponse[PublicToggleRead])
def toggle_public(
    workspace_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    is_public = workspace_service.toggle_public(db, user_id, workspace_id)
    return DataResponse(data=PublicToggleRead(is_public=is_public))


@router.delete("/{workspace_id}", response_model=MessageResponse)
def delete_workspace(
    workspace_id: str,
    db: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    if not workspace_service.delete_workspace(db, user_id, workspace_id):
        raise NotFoundError("Workspace not found")
    return MessageResponse(message="Workspace deleted successfully")
