from motivatr.models.base import Base, TimestampMixin, utcnow
from motivatr.models.user import User
from motivatr.models.task import Task, TaskStatus, TaskPriority, ReminderStatus
from motivatr.models.notification import (
    Notification,
    NotificationChannel,
    NotificationType,
    NotificationStatus,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "utcnow",
    "User",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "ReminderStatus",
    "Notification",
    "NotificationChannel",
    "NotificationType",
    "NotificationStatus",
]
