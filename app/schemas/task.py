"""Pydantic schemas for task request/response validation."""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.timeutils import to_utc, utcnow

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class TaskCategory(str, Enum):
    PERSONAL = "Personal"
    WORK = "Work"
    STUDY = "Study"
    HEALTH = "Health"
    OTHER = "Other"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


def _check_choice(value: Any, choices, message: str) -> str:
    if isinstance(value, choices):
        return value.value
    if isinstance(value, str) and value in {c.value for c in choices}:
        return value
    raise PydanticCustomError("invalid_choice", message)


def _check_title(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise PydanticCustomError("title_required", "Title is required")
    value = value.strip()
    if len(value) > TITLE_MAX_LENGTH:
        raise PydanticCustomError(
            "title_too_long", f"Title cannot be more than {TITLE_MAX_LENGTH} characters"
        )
    return value


def _check_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise PydanticCustomError("invalid_description", "Description must be a string")
    value = value.strip()
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise PydanticCustomError(
            "description_too_long",
            f"Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters",
        )
    return value


def _check_future(value: Any, label: str, format_message: str) -> Optional[datetime]:
    """Parse une date ISO 8601 et vérifie qu'elle est strictement dans le futur"""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise PydanticCustomError("invalid_date", format_message)
    if not isinstance(value, datetime):
        raise PydanticCustomError("invalid_date", format_message)
    value = to_utc(value)
    if value <= utcnow():
        raise PydanticCustomError("date_in_past", f"{label} must be in the future")
    return value


class TaskFields(BaseModel):
    """Règles de validation communes à la création et à la modification"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("title", mode="before", check_fields=False)
    @classmethod
    def validate_title(cls, value):
        return _check_title(value)

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def validate_description(cls, value):
        return _check_description(value)

    @field_validator("category", mode="before", check_fields=False)
    @classmethod
    def validate_category(cls, value):
        return _check_choice(value, TaskCategory, "Invalid category")

    @field_validator("priority", mode="before", check_fields=False)
    @classmethod
    def validate_priority(cls, value):
        return _check_choice(value, TaskPriority, "Invalid priority level")

    @field_validator("status", mode="before", check_fields=False)
    @classmethod
    def validate_status(cls, value):
        return _check_choice(value, TaskStatus, "Invalid status")

    @field_validator("due_date", mode="before", check_fields=False)
    @classmethod
    def validate_due_date(cls, value):
        return _check_future(value, "Due date", "Invalid due date format")

    @field_validator("reminder", mode="before", check_fields=False)
    @classmethod
    def validate_reminder(cls, value):
        return _check_future(value, "Reminder", "Invalid reminder date format")

    @field_validator("order", mode="before", check_fields=False)
    @classmethod
    def validate_order(cls, value):
        # bool est un int en Python, on le refuse
        if isinstance(value, bool) or not isinstance(value, int):
            raise PydanticCustomError("invalid_order", "Order must be an integer")
        return value


class TaskCreate(TaskFields):
    # validate_default: un champ absent passe par son validateur
    # ("Title is required", "Invalid category", "Invalid priority level")
    title: str = Field(None, validate_default=True)
    description: Optional[str] = None
    category: str = Field(None, validate_default=True)
    priority: str = Field(None, validate_default=True)
    status: str = TaskStatus.PENDING.value
    due_date: Optional[datetime] = None
    reminder: Optional[datetime] = None
    order: int = 0


class TaskUpdate(TaskFields):
    """Seuls les champs envoyés sont validés puis appliqués."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[datetime] = None
    reminder: Optional[datetime] = None
    order: Optional[int] = None


class ReorderItem(BaseModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))


class ReorderRequest(BaseModel):
    tasks: List[ReorderItem]


class ReorderResponse(BaseModel):
    message: str
    updated: int


class TaskResponse(BaseModel):
    """Schema for task responses from API."""

    id: str
    owner: str
    title: str
    description: Optional[str]
    category: str
    priority: str
    status: str
    due_date: Optional[datetime]
    reminder: Optional[datetime]
    order: int
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]
    age: int
    overdue: bool = Field(serialization_alias="isOverdue")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )
