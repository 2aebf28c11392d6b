# taskboard/main.py
import logging
import traceback

from dotenv import load_dotenv

# .env must be loaded before settings and the engine are built
load_dotenv()

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from taskboard.core.config import get_settings  # noqa: E402
from taskboard.core.errors import AppError, StorageError  # noqa: E402
from taskboard.core.logging_config import setup_logging  # noqa: E402
from taskboard.db import base as _models  # noqa: E402,F401  (table registration)
from taskboard.routers import health, subtasks, tasks, user, workspaces  # noqa: E402
from taskboard.schemas.validation import error_details  # noqa: E402

setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="Taskboard API",
    version=settings.app_version,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# routers
app.include_router(health.router)
app.include_router(user.user_router)
app.include_router(tasks.router)
app.include_router(workspaces.router)
app.include_router(subtasks.router)


# ===== error envelope =====
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Validation error",
            "details": error_details(exc.errors()),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("storage failure %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=StorageError().to_payload())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error %s %s", request.method, request.url.path)
    content = {"success": False, "error": "Internal server error"}
    if get_settings().is_dev:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)
