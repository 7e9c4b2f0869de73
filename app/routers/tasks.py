import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthError
from app.core.security import decode_token
from app.schemas.task import (
    ReorderRequest,
    ReorderResponse,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from app.services import task_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_current_owner(
    authorization: Optional[str] = Header(None),
    x_auth_token: Optional[str] = Header(None),
) -> str:
    """Identifiant du principal authentifié, depuis le JWT"""
    token = None
    if authorization:
        token = authorization.replace("Bearer ", "").strip()
    elif x_auth_token:
        # ancien header des clients web
        token = x_auth_token.strip()

    try:
        return decode_token(token)
    except AuthError as e:
        logger.warning(f"Rejected credential: {e.code}")
        raise


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner),
    category: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = Query(None),
    due_date: Optional[date] = Query(None, alias="dueDate"),
):
    return task_service.list_tasks(
        db, owner,
        category=category,
        status=status_filter,
        priority=priority,
        due_date=due_date,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner)
):
    return task_service.create_task(db, owner, task_data)


# déclarée avant /{task_id} pour ne pas être capturée par le path param
@router.put("/reorder", response_model=ReorderResponse)
def reorder_tasks(
    request: ReorderRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner)
):
    updated = task_service.reorder_tasks(db, owner, [item.id for item in request.tasks])
    return {"message": "Tasks reordered successfully", "updated": updated}


@router.get("/category/{category}", response_model=List[TaskResponse])
def tasks_by_category(
    category: str,
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner)
):
    return task_service.get_tasks_by_category(db, owner, category)


@router.get("/due/{day}", response_model=List[TaskResponse])
def tasks_due_on(
    day: date,
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner)
):
    return task_service.get_tasks_by_due_date(db, owner, day)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner)
):
    return task_service.get_task(db, owner, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner)
):
    return task_service.update_task(db, owner, task_id, task_data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    owner: str = Depends(get_current_owner)
):
    task_service.delete_task(db, owner, task_id)
