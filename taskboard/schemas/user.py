# taskboard/schemas/user.py
from typing import Optional

from taskboard.schemas.common import CamelModel, UtcDatetime


class UserRead(CamelModel):
    id: str
    name: str
    email: str
    email_verified: bool
    image: Optional[str] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
