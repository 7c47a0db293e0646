from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from . import models


def _now() -> str:
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def get_task(db: Session, task_id: int) -> Optional[models.Task]:
    return db.query(models.Task).filter(models.Task.id == task_id).first()


def list_tasks(db: Session) -> List[models.Task]:
    return db.query(models.Task).order_by(models.Task.id.desc()).all()


def list_tasks_by_status(db: Session, status: str) -> List[models.Task]:
    return (
        db.query(models.Task)
        .filter(models.Task.status == status)
        .order_by(models.Task.id.desc())
        .all()
    )


def insert_task(db: Session, title: str, description: str = "", status: str = "todo") -> models.Task:
    task = models.Task(title=title, description=description, status=status, created_at=_now())
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def replace_task(db: Session, task_id: int, title: str, description: str, status: str) -> bool:
    return update_task_fields(
        db, task_id, {"title": title, "description": description, "status": status}
    )


def update_task_fields(db: Session, task_id: int, fields: Dict[str, Any]) -> bool:
    """
    Overwrite only ``fields`` on the task in one conditional UPDATE.

    Returns False when no row has ``task_id``. With no fields to write this is
    an existence check.
    """
    query = db.query(models.Task).filter(models.Task.id == task_id)
    if not fields:
        return db.query(query.exists()).scalar()
    changed = query.update(fields, synchronize_session=False)
    db.commit()
    return changed > 0


def delete_task(db: Session, task_id: int) -> bool:
    deleted = db.query(models.Task).filter(models.Task.id == task_id).delete(synchronize_session=False)
    db.commit()
    return deleted > 0
