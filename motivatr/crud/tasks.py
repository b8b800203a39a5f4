from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.crud.base import CRUDBase
from motivatr.models.task import ReminderStatus, Task, TaskStatus
from motivatr.schemas.task import TaskCreate, TaskUpdate


class CRUDTask(CRUDBase[Task, TaskCreate, TaskUpdate]):
    async def get_by_owner(
        self, db: AsyncSession, owner: Optional[str] = None
    ) -> Sequence[Task]:
        """All tasks, or only one owner's, in insertion order."""
        query = select(Task).order_by(Task.created_at, Task.id)
        if owner:
            query = query.where(Task.owner == owner)
        result = await db.execute(query)
        return result.scalars().all()

    async def has_completion_since(
        self,
        db: AsyncSession,
        owner: str,
        since: datetime,
        exclude_task_id: Optional[str] = None,
    ) -> bool:
        """True if another of the owner's tasks is completed with completed_at >= since."""
        query = select(Task.id).where(
            Task.owner == owner,
            Task.status == TaskStatus.completed,
            Task.completed_at.is_not(None),
            Task.completed_at >= since,
        )
        if exclude_task_id is not None:
            query = query.where(Task.id != exclude_task_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def get_due_for_reminder(
        self, db: AsyncSession, not_before: datetime, before: datetime
    ) -> Sequence[Task]:
        """Unsent reminders (pending or failed) with due_date in [not_before, before)."""
        result = await db.execute(
            select(Task)
            .where(
                Task.due_date.is_not(None),
                Task.due_date >= not_before,
                Task.due_date < before,
                Task.reminder_status.in_([ReminderStatus.pending, ReminderStatus.failed]),
            )
            .order_by(Task.due_date, Task.id)
        )
        return result.scalars().all()


crud_task = CRUDTask(Task)
