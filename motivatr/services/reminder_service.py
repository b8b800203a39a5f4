"""Due-date reminders.

Per task the reminder moves pending -> sent, or pending -> failed -> ... -> sent.
A failed reminder is retried on later sweeps until its due time is older than
the retry grace window.
"""
import logging
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.config import get_settings
from motivatr.crud.tasks import crud_task
from motivatr.models.notification import NotificationStatus, NotificationType
from motivatr.models.task import ReminderStatus, Task
from motivatr.services import notification_service
from motivatr.services.clock import utcnow

logger = logging.getLogger(__name__)


class SweepResult(NamedTuple):
    selected: int
    sent: int
    failed: int


def reminder_text(task: Task) -> tuple[str, str]:
    return "Task Reminder", f'Reminder: Your task "{task.title}" is due now!'


def sweep_window(
    now: datetime,
    interval_seconds: Optional[int] = None,
    grace_seconds: Optional[int] = None,
) -> tuple[datetime, datetime]:
    """[not_before, before) for due dates that should be reminded at ``now``."""
    settings = get_settings()
    if interval_seconds is None:
        interval_seconds = settings.REMINDER_INTERVAL_SECONDS
    if grace_seconds is None:
        grace_seconds = settings.REMINDER_RETRY_GRACE_SECONDS
    return now - timedelta(seconds=grace_seconds), now + timedelta(seconds=interval_seconds)


async def remind_task(db: AsyncSession, task: Task) -> bool:
    """Send one reminder for ``task`` and record the outcome on it."""
    subject, text = reminder_text(task)
    notification = await notification_service.send_and_log(
        db,
        recipient_email=task.owner,
        subject=subject,
        message_text=text,
        notification_type=NotificationType.task_reminder,
        task_id=task.id,
    )
    task.reminder_attempts += 1
    if notification.status == NotificationStatus.sent:
        task.reminder_status = ReminderStatus.sent
        task.reminded = True
    else:
        task.reminder_status = ReminderStatus.failed
    db.add(task)
    await db.flush()
    return task.reminded


async def _record_failed_attempt(db: AsyncSession, task: Task, task_id: str) -> None:
    """Mark the attempt failed after its savepoint was rolled back."""
    try:
        await db.refresh(task)
        task.reminder_attempts += 1
        task.reminder_status = ReminderStatus.failed
        await db.flush()
    except SQLAlchemyError as exc:
        logger.error("Could not record failed reminder for task %s: %s", task_id, exc)


async def run_sweep(
    db: AsyncSession,
    now: Optional[datetime] = None,
    *,
    interval_seconds: Optional[int] = None,
    grace_seconds: Optional[int] = None,
) -> SweepResult:
    """Remind every task whose due date falls in the current window."""
    now = now or utcnow()
    not_before, before = sweep_window(now, interval_seconds, grace_seconds)
    tasks = await crud_task.get_due_for_reminder(db, not_before, before)

    sent = failed = 0
    for task in tasks:
        task_id = task.id
        try:
            async with db.begin_nested():
                ok = await remind_task(db, task)
        except Exception as exc:
            # One bad task must not stop the rest of the sweep
            logger.error("Reminder for task %s failed: %s", task_id, exc)
            ok = False
            await _record_failed_attempt(db, task, task_id)
        if ok:
            sent += 1
        else:
            failed += 1
            logger.warning("Reminder for task %s not delivered", task_id)

    if tasks:
        logger.info("Reminder sweep: %d due, %d sent, %d failed", len(tasks), sent, failed)
    return SweepResult(selected=len(tasks), sent=sent, failed=failed)
