import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from motivatr.models.base import Base, TimestampMixin


class TaskStatus(str, enum.Enum):
    ideas = "ideas"
    todo = "todo"
    inprogress = "inprogress"
    completed = "completed"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ReminderStatus(str, enum.Enum):
    pending = "pending"
    sent = "sent"
    failed = "failed"  # retryable until the grace window closes


def _new_task_id() -> str:
    return str(uuid.uuid4())


class Task(Base, TimestampMixin):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_owner_status", "owner", "status"),
        Index("ix_tasks_reminder", "reminder_status", "due_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_task_id)
    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority), nullable=False, default=TaskPriority.low
    )
    status: Mapped[TaskStatus] = mapped_column(Enum(TaskStatus), nullable=False)
    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    # Sticky: not cleared when the task leaves the completed column
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    shared_with: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    reminded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reminder_status: Mapped[ReminderStatus] = mapped_column(
        Enum(ReminderStatus), nullable=False, default=ReminderStatus.pending
    )
    reminder_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
