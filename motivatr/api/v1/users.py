"""Per-user streak and profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.api.v1.deps import get_user_or_404
from motivatr.crud import crud_task
from motivatr.database import get_db
from motivatr.models.user import User
from motivatr.schemas.profile import AchievementStatus, ProfileResponse, TaskStats
from motivatr.schemas.streak import StreakDataSchema, StreakSyncResponse
from motivatr.services import profile_service, streak_service
from motivatr.services.streak_service import StreakData

router = APIRouter(prefix="/users/{email}", tags=["users"])


def _to_schema(streak: StreakData) -> StreakDataSchema:
    return StreakDataSchema(
        current=streak.current,
        longest=streak.longest,
        last_active_date=streak.last_active_date,
        weekly_progress=list(streak.weekly_progress),
    )


@router.get("/streak", response_model=StreakDataSchema)
async def get_streak(user: Annotated[User, Depends(get_user_or_404)]):
    return _to_schema(StreakData.from_user(user))


@router.post("/streak", response_model=StreakSyncResponse)
async def sync_streak(
    body: StreakDataSchema,
    user: Annotated[User, Depends(get_user_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Accept a client snapshot; the stored result is echoed back as the source of truth."""
    stored = await streak_service.overwrite_streak(
        db,
        user,
        StreakData(
            current=body.current,
            longest=body.longest,
            last_active_date=body.last_active_date,
            weekly_progress=tuple(body.weekly_progress),
        ),
    )
    return StreakSyncResponse(success=True, streak=_to_schema(stored))


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: Annotated[User, Depends(get_user_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    tasks = await crud_task.get_by_owner(db, user.email)
    stats = profile_service.task_stats(tasks)
    streak = StreakData.from_user(user)
    badges = profile_service.achievements(stats, streak)
    return ProfileResponse(
        email=user.email,
        name=user.name,
        stats=TaskStats(**stats._asdict()),
        streak=_to_schema(streak),
        achievements=[AchievementStatus(**b._asdict()) for b in badges],
    )
