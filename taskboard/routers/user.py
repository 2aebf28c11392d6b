from fastapi import APIRouter, Depends

from taskboard.dependencies.auth import get_current_user
from taskboard.models.user import User
from taskboard.schemas.common import DataResponse
from taskboard.schemas.user import UserRead

user_router = APIRouter(prefix="/api", tags=["User"])


@user_router.get("/me", response_model=DataResponse[UserRead])
def read_me(user: User = Depends(get_current_user)):
    return DataResponse(data=UserRead.model_validate(user))
