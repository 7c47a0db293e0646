"""
Task service: validate a request, then hand it to the store.

Every function raises ``ValidationError`` or ``NotFoundError`` from
``taskboard.exceptions``; storage errors propagate untouched.
"""
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Type, TypeVar

import pydantic
from pydantic_core import PydanticCustomError
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .exceptions import BODY_NOT_OBJECT, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def error_message(exc: pydantic.ValidationError) -> str:
    """Pick the one message reported to the client for a failed body."""
    errors = exc.errors()
    # unknown fields are reported before any per-field rule
    extra = [e for e in errors if e["type"] == "extra_forbidden"]
    error = (extra or errors)[0]
    field = ".".join(str(part) for part in error["loc"])

    if error["type"] == "extra_forbidden":
        return f"invalid field: {field}"
    if error["type"] == "missing":
        return f"{field} is required"
    if error["type"] in schemas.RULE_ERRORS:
        return error["msg"]
    return f"{field}: {error['msg']}"


def _validate(model: Type[ModelT], payload: Any) -> ModelT:
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationError(BODY_NOT_OBJECT)
    try:
        return model.model_validate(dict(payload))
    except pydantic.ValidationError as exc:
        raise ValidationError(error_message(exc)) from exc


def _status_filter(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    try:
        return schemas.check_status(status)
    except PydanticCustomError as exc:
        raise ValidationError(exc.message()) from exc


def _require(db: Session, task_id: int) -> models.Task:
    task = crud.get_task(db, task_id)
    if task is None:
        raise NotFoundError()
    return task


def create_task(db: Session, payload: Any) -> models.Task:
    task_in = _validate(schemas.TaskCreate, payload)
    task = crud.insert_task(db, task_in.title, task_in.description, schemas.TaskStatus.todo.value)
    logger.info("Created task id=%s", task.id)
    return task


def list_tasks(db: Session, status: Optional[str] = None) -> List[models.Task]:
    status = _status_filter(status)
    if status is None:
        return crud.list_tasks(db)
    return crud.list_tasks_by_status(db, status)


def get_task(db: Session, task_id: int) -> models.Task:
    return _require(db, task_id)


def replace_task(db: Session, task_id: int, payload: Any) -> models.Task:
    task_in = _validate(schemas.TaskReplace, payload)
    if not crud.replace_task(db, task_id, task_in.title, task_in.description, task_in.status.value):
        raise NotFoundError()
    logger.info("Replaced task id=%s", task_id)
    return _require(db, task_id)


def update_task(db: Session, task_id: int, payload: Any) -> models.Task:
    if payload is None or (isinstance(payload, Mapping) and not payload):
        raise ValidationError("at least one field is required")
    task_in = _validate(schemas.TaskPatch, payload)
    changes = task_in.changes()
    if not crud.update_task_fields(db, task_id, changes):
        raise NotFoundError()
    logger.info("Updated task id=%s fields=%s", task_id, sorted(changes))
    return _require(db, task_id)


def delete_task(db: Session, task_id: int) -> None:
    if not crud.delete_task(db, task_id):
        raise NotFoundError()
    logger.info("Deleted task id=%s", task_id)
