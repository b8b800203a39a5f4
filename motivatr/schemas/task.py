from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from motivatr.models.task import ReminderStatus, TaskPriority, TaskStatus


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Re-attach the UTC offset that storage drops."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _dedupe(values: list[str]) -> list[str]:
    """Set-like list: drop repeats, keep first-seen order."""
    return list(dict.fromkeys(values))


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    title: str = Field(..., max_length=200)
    description: str = ""
    priority: TaskPriority = TaskPriority.low
    status: TaskStatus
    due_date: Optional[datetime] = None
    tags: list[str] = Field(default_factory=list)
    shared_with: list[str] = Field(default_factory=list)
    owner: EmailStr

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)

    @field_validator("tags", "shared_with")
    @classmethod
    def dedupe(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class TaskUpdate(_CamelModel):
    """Partial update: only fields present in the payload are merged."""

    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
    tags: Optional[list[str]] = None
    shared_with: Optional[list[str]] = None
    owner: Optional[EmailStr] = None
    reminded: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)

    @field_validator("tags", "shared_with")
    @classmethod
    def dedupe(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return None if v is None else _dedupe(v)


class TaskResponse(_CamelModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: str
    title: str
    description: str
    priority: TaskPriority
    status: TaskStatus
    due_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]
    tags: list[str]
    shared_with: list[str]
    reminded: bool
    reminder_status: ReminderStatus
    owner: str

    @field_serializer("due_date", "created_at", "updated_at", "completed_at")
    def serialize_utc(self, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)
