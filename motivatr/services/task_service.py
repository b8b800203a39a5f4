"""Task lifecycle: CRUD scoped by owner plus the completion transition."""
import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.crud.tasks import crud_task
from motivatr.errors import NotFoundError, ValidationError
from motivatr.models.task import ReminderStatus, Task, TaskStatus
from motivatr.schemas.task import TaskCreate, TaskUpdate
from motivatr.services import streak_service
from motivatr.services.clock import day_start_utc, local_today, utcnow

logger = logging.getLogger(__name__)


def _validated(schema, data: Any):
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValidationError(problems) from exc


async def list_tasks(db: AsyncSession, owner: Optional[str] = None) -> Sequence[Task]:
    return await crud_task.get_by_owner(db, owner)


async def get_task(db: AsyncSession, task_id: str) -> Task:
    task = await crud_task.get(db, task_id)
    if task is None:
        raise NotFoundError(f"Task {task_id} not found")
    return task


async def create_task(
    db: AsyncSession, data: TaskCreate | dict, *, now: Optional[datetime] = None
) -> Task:
    body = _validated(TaskCreate, data)
    now = now or utcnow()

    task = Task(
        **body.model_dump(),
        created_at=now,
        updated_at=now,
        reminded=False,
        reminder_status=ReminderStatus.pending,
        reminder_attempts=0,
    )
    if task.status == TaskStatus.completed:
        await _on_completed(db, task, now)
    db.add(task)
    await db.flush()
    logger.info("Created task %s for %s (%s)", task.id, task.owner, task.status.value)
    return task


async def update_task(
    db: AsyncSession,
    task_id: str,
    fields: TaskUpdate | dict,
    *,
    now: Optional[datetime] = None,
) -> Task:
    """Merge ``fields`` into the stored task.

    Moving into completed stamps completed_at and may advance the owner's streak.
    """
    body = _validated(TaskUpdate, fields)
    task = await get_task(db, task_id)
    now = now or utcnow()

    changes = body.model_dump(exclude_unset=True)
    for key in ("title", "status", "priority", "owner", "description", "tags", "shared_with", "reminded"):
        # Explicit nulls are meaningless for non-nullable columns
        if key in changes and changes[key] is None:
            raise ValidationError(f"{key}: may not be null")
    if "owner" in changes:
        changes["owner"] = str(changes["owner"])

    entering_completed = (
        changes.get("status") == TaskStatus.completed and task.status != TaskStatus.completed
    )

    if "due_date" in changes and changes["due_date"] != task.due_date and "reminded" not in changes:
        changes["reminded"] = False
        changes["reminder_status"] = ReminderStatus.pending
        changes["reminder_attempts"] = 0
    elif "reminded" in changes:
        changes["reminder_status"] = (
            ReminderStatus.sent if changes["reminded"] else ReminderStatus.pending
        )

    for field, value in changes.items():
        setattr(task, field, value)

    if entering_completed:
        await _on_completed(db, task, now)

    task.updated_at = now
    db.add(task)
    await db.flush()
    return task


async def delete_task(db: AsyncSession, task_id: str) -> None:
    removed = await crud_task.remove(db, id=task_id)
    if removed is None:
        raise NotFoundError(f"Task {task_id} not found")
    logger.info("Deleted task %s", task_id)


async def _on_completed(db: AsyncSession, task: Task, now: datetime) -> None:
    """Stamp completed_at; advance the streak on the owner's first completion today."""
    today = local_today(now)
    already = await crud_task.has_completion_since(
        db, task.owner, day_start_utc(today), exclude_task_id=task.id
    )
    task.completed_at = now
    if already:
        logger.debug("Owner %s already completed a task today; streak untouched", task.owner)
        return
    await streak_service.record_completion(db, task.owner, today)
