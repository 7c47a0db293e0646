import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, List, Optional

from fastapi import Body, Depends, FastAPI, Path, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import schemas, services
from .config import settings
from .database import get_db, init_db
from .exceptions import (
    BODY_NOT_OBJECT,
    INVALID_JSON_BODY,
    ROUTE_NOT_FOUND,
    TASK_NOT_FOUND,
    InternalError,
    TaskError,
)
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

# ids outside a signed 64-bit INTEGER can never be stored
MAX_TASK_ID = 2**63 - 1
TaskId = Annotated[int, Path(ge=-MAX_TASK_ID - 1, le=MAX_TASK_ID)]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    init_db()
    logger.info("%s started", settings.APP_TITLE)
    yield
    logger.info("%s shutting down", settings.APP_TITLE)


app = FastAPI(title=settings.APP_TITLE, version="1.0.0", lifespan=lifespan)


# --- error mapping ---

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=schemas.ErrorOut(error=message).model_dump())


@app.exception_handler(TaskError)
async def task_error_handler(request: Request, exc: TaskError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = exc.errors()[0]
    source = error["loc"][0] if error["loc"] else None

    # a non-integer id can never name a task
    if source == "path":
        return error_response(status.HTTP_404_NOT_FOUND, TASK_NOT_FOUND)
    if error["type"] == "json_invalid":
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_JSON_BODY)
    if source == "body":
        return error_response(status.HTTP_400_BAD_REQUEST, BODY_NOT_OBJECT)
    return error_response(status.HTTP_400_BAD_REQUEST, error["msg"])


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND or (
        exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and request.url.path.startswith("/api")
    ):
        return error_response(status.HTTP_404_NOT_FOUND, ROUTE_NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    internal = InternalError()
    return error_response(internal.status_code, internal.message)


# registered on the server error middleware, which re-raises after responding
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    internal = InternalError()
    return error_response(internal.status_code, internal.message)


# --- routes ---

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/api/tasks", response_model=List[schemas.TaskOut])
def list_tasks(
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    return services.list_tasks(db, status_filter)


@app.post("/api/tasks", response_model=schemas.TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(payload: Any = Body(None), db: Session = Depends(get_db)):
    return services.create_task(db, payload)


@app.get("/api/tasks/{task_id}", response_model=schemas.TaskOut)
def get_task(task_id: TaskId, db: Session = Depends(get_db)):
    return services.get_task(db, task_id)


@app.put("/api/tasks/{task_id}", response_model=schemas.TaskOut)
def replace_task(task_id: TaskId, payload: Any = Body(None), db: Session = Depends(get_db)):
    return services.replace_task(db, task_id, payload)


@app.patch("/api/tasks/{task_id}", response_model=schemas.TaskOut)
def update_task(task_id: TaskId, payload: Any = Body(None), db: Session = Depends(get_db)):
    return services.update_task(db, task_id, payload)


@app.delete("/api/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: TaskId, db: Session = Depends(get_db)):
    services.delete_task(db, task_id)
    return
