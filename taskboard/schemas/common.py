# taskboard/schemas/common.py
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from taskboard.core.timeutil import as_utc

T = TypeVar("T")


def _iso_utc(value: datetime) -> str:
    return as_utc(value).isoformat(timespec="microseconds").replace("+00:00", "Z")


# Always emitted as UTC with a Z suffix, whatever zone the driver hands back.
UtcDatetime = Annotated[datetime, PlainSerializer(_iso_utc, return_type=str)]


def require_iso_string(value: Any) -> Any:
    """
    Before-guard for datetime fields: pydantic parses the ISO-8601 text, but
    would also take unix numbers, so anything that is not a string is refused.
    """
    if value is None or isinstance(value, (str, datetime)):
        return value
    raise ValueError("Invalid date, expected an ISO-8601 string")


def reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("Field cannot be null")
    return value


class CamelModel(BaseModel):
    """Wire models: camelCase JSON, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(CamelModel, Generic[T]):
    success: bool = True
    data: T


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorDetail(BaseModel):
    path: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[list[ErrorDetail]] = None
