# taskboard/core/errors.py
from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base for errors the HTTP layer maps to a status code."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, details: Optional[list[dict]] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> dict:
        payload: dict = {"success": False, "error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    message = "Validation error"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class UnauthorizedError(AppError):
    status_code = 401
    message = "Unauthorized"


class ShareAccessError(NotFoundError):
    # same wording as a missing workspace so callers can't probe tokens
    message = "Workspace not found or is not public"


class StorageError(AppError):
    status_code = 500
    message = "Storage error"
