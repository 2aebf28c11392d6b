"""Centralized SQLModel imports to ensure metadata is populated."""

from taskboard.models import user as _user  # noqa: F401
from taskboard.models import auth as _auth  # noqa: F401
from taskboard.models import workspace as _workspace  # noqa: F401
from taskboard.models import task as _task  # noqa: F401
from taskboard.models import subtask as _subtask  # noqa: F401
