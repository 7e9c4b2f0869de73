"""Task service"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence, Union

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StoreError, ValidationError, format_errors
from app.core.timeutils import local_day_bounds, utcnow
from app.models.task import Task
from app.schemas.task import TaskCreate, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(db: Session):
    """Transforme toute erreur SQLAlchemy en StoreError (après rollback)"""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Store failure: {e.__class__.__name__}")
        raise StoreError("Store operation failed") from e


def _parse(schema, data):
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(format_errors(e.errors()))


def _owned_task(db: Session, owner: str, task_id: str) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.owner == owner).first()
    if not task:
        raise NotFoundError("Task not found")
    return task


def list_tasks(
    db: Session,
    owner: str,
    category: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    due_date: Optional[date] = None,
) -> List[Task]:
    """Tâches de l'owner, filtrées (égalité stricte) et triées par order"""
    query = db.query(Task).filter(Task.owner == owner)

    if category:
        query = query.filter(Task.category == category)
    if status:
        query = query.filter(Task.status == status)
    if priority:
        query = query.filter(Task.priority == priority)
    if due_date:
        day_start, day_end = local_day_bounds(due_date)
        query = query.filter(Task.due_date >= day_start, Task.due_date <= day_end)

    with store_errors(db):
        return query.order_by(Task.order.asc(), Task.created_at.asc()).all()


def get_tasks_by_category(db: Session, owner: str, category: str) -> List[Task]:
    return list_tasks(db, owner, category=category)


def get_tasks_by_due_date(db: Session, owner: str, day: date) -> List[Task]:
    return list_tasks(db, owner, due_date=day)


def get_task(db: Session, owner: str, task_id: str) -> Task:
    with store_errors(db):
        return _owned_task(db, owner, task_id)


def create_task(db: Session, owner: str, data: Union[TaskCreate, Mapping[str, Any]]) -> Task:
    task_data = _parse(TaskCreate, data)

    new_task = Task(
        owner=owner,
        title=task_data.title,
        description=task_data.description,
        category=task_data.category,
        priority=task_data.priority,
        status=task_data.status,
        due_date=task_data.due_date,
        reminder=task_data.reminder,
        order=task_data.order,
        created_at=utcnow(),
    )
    with store_errors(db):
        db.add(new_task)
        db.commit()
        db.refresh(new_task)

    logger.info(f"Task {new_task.id} created for owner {owner}")
    return new_task


def update_task(
    db: Session, owner: str, task_id: str, data: Union[TaskUpdate, Mapping[str, Any]]
) -> Task:
    """Applique les champs envoyés sur la tâche existante.

    Passer à Completed depuis un autre statut renseigne completed_at.
    Quitter Completed ne l'efface pas.
    """
    task_data = _parse(TaskUpdate, data)

    with store_errors(db):
        task = _owned_task(db, owner, task_id)
        previous_status = task.status

        update_data = task_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(task, field, value)

        if (
            update_data.get("status") == TaskStatus.COMPLETED.value
            and previous_status != TaskStatus.COMPLETED.value
        ):
            task.completed_at = utcnow()

        db.commit()
        db.refresh(task)
    return task


def delete_task(db: Session, owner: str, task_id: str) -> None:
    with store_errors(db):
        task = _owned_task(db, owner, task_id)
        db.delete(task)
        db.commit()
    logger.info(f"Task {task_id} deleted for owner {owner}")


def reorder_tasks(db: Session, owner: str, task_ids: Sequence[str]) -> int:
    """Donne à chaque tâche son index dans task_ids comme order.

    Les ids qui n'appartiennent pas à l'owner sont ignorés sans erreur.
    Un id répété reçoit sa dernière position.
    Retourne le nombre de tâches distinctes mises à jour.
    """
    if not isinstance(task_ids, (list, tuple)):
        raise ValidationError([{"field": "tasks", "message": "Invalid request format"}])

    matched = set()
    with store_errors(db):
        for index, task_id in enumerate(task_ids):
            rows = db.query(Task).filter(
                Task.id == str(task_id),
                Task.owner == owner
            ).update({Task.order: index}, synchronize_session=False)
            if rows:
                matched.add(str(task_id))
        db.commit()

    logger.info(f"Reordered {len(matched)}/{len(task_ids)} tasks for owner {owner}")
    return len(matched)
