# taskboard/schemas/validation.py
from __future__ import annotations

from typing import Any, Iterable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from taskboard.core.errors import ValidationError

M = TypeVar("M", bound=BaseModel)

_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def error_details(errors: Iterable[dict]) -> list[dict]:
    """Flatten pydantic/FastAPI error dicts into ``[{path, message}]``."""
    details = []
    for err in errors:
        loc = list(err.get("loc") or ())
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        details.append({
            "path": ".".join(str(p) for p in loc),
            "message": err.get("msg") or "Invalid value",
        })
    return details


def validate(schema: type[M], data: Any) -> M:
    """Validate ``data`` against ``schema``; raise ValidationError with per-field details."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(details=error_details(exc.errors())) from exc
