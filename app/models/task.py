"""Task model"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Integer, String, DateTime, Index
from app.core.database import Base
from app.core.timeutils import utcnow


def new_task_id() -> str:
    return uuid.uuid4().hex


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, default=new_task_id)
    owner = Column(String, nullable=False, index=True)

    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    category = Column(String, nullable=False, default="Personal")
    priority = Column(String, nullable=False, default="Medium")
    status = Column(String, nullable=False, default="Pending")
    due_date = Column(DateTime, nullable=True)
    reminder = Column(DateTime, nullable=True)
    order = Column(Integer, nullable=False, default=0)  # rang d'affichage choisi par l'user

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    completed_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("ix_tasks_owner_status", "owner", "status"),
        Index("ix_tasks_owner_due_date", "owner", "due_date"),
        Index("ix_tasks_owner_category", "owner", "category"),
        Index("ix_tasks_owner_priority", "owner", "priority"),
    )

    @property
    def age(self) -> int:
        """Age de la tâche en jours entiers (non persisté)"""
        if self.created_at is None:
            return 0
        return (utcnow() - self.created_at).days

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        if self.due_date is None:
            return False
        now = now or utcnow()
        return self.due_date < now and self.status != "Completed"

    @property
    def overdue(self) -> bool:
        return self.is_overdue()

    def __repr__(self):
        return f"<Task {self.id} owner={self.owner} order={self.order} status={self.status!r}>"


# liste des tâches récentes d'un user
Index("ix_tasks_owner_created_at", Task.owner, Task.created_at.desc())
