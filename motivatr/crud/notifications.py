from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.models.notification import Notification


async def get_for_task(db: AsyncSession, task_id: str) -> Sequence[Notification]:
    result = await db.execute(
        select(Notification)
        .where(Notification.task_id == task_id)
        .order_by(Notification.id)
    )
    return result.scalars().all()
