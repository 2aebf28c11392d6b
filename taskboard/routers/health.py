from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import text

from taskboard.core.errors import StorageError
from taskboard.db import session as db_session

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_app():
    return {"status": "ok"}


@router.get("/db")
def health_db():
    # Migration is a deployment concern. Runtime only verifies DB connectivity.
    try:
        with db_session.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise StorageError("Database connection failed") from exc
    return {"status": "ok"}
