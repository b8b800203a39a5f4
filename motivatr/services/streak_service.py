"""Streak logic: pure next-day computation plus the compare-and-swap write."""

import logging
from datetime import date
from typing import NamedTuple, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.models.user import User
from motivatr.services.clock import sunday_index

logger = logging.getLogger(__name__)

# Concurrent completions for one owner converge after a re-read
MAX_CAS_ATTEMPTS = 3


class StreakData(NamedTuple):
    current: int
    longest: int
    last_active_date: Optional[date]
    weekly_progress: tuple[bool, ...]

    @classmethod
    def from_user(cls, user: User) -> "StreakData":
        return cls(
            current=user.current_streak,
            longest=user.longest_streak,
            last_active_date=user.last_active_date,
            weekly_progress=_normalize_week(user.weekly_progress),
        )


def _normalize_week(weekly_progress: Optional[Sequence[bool]]) -> tuple[bool, ...]:
    """Coerce stored progress to exactly seven slots."""
    slots = [bool(x) for x in (weekly_progress or [])][:7]
    return tuple(slots + [False] * (7 - len(slots)))


def compute_next_streak(
    current: int,
    longest: int,
    last_active_date: Optional[date],
    weekly_progress: Sequence[bool],
    today: date,
) -> StreakData:
    """
    Derive the streak after activity on ``today``.

    Day granularity: yesterday -> +1, same day -> unchanged, any gap -> 1.
    A ``today`` earlier than ``last_active_date`` (clock skew) is also a no-op.
    ``weekly_progress`` slots are indexed Sunday=0 and are never cleared here.
    """
    week = _normalize_week(weekly_progress)

    if last_active_date is None:
        new_current = 1
    else:
        days_diff = (today - last_active_date).days
        if days_diff <= 0:
            return StreakData(current, longest, last_active_date, week)
        if days_diff == 1:
            new_current = current + 1
        else:
            # Streak broken
            new_current = 1

    slots = list(week)
    slots[sunday_index(today)] = True

    return StreakData(
        current=new_current,
        longest=max(longest, new_current),
        last_active_date=today,
        weekly_progress=tuple(slots),
    )


def advance(streak: StreakData, today: date) -> StreakData:
    return compute_next_streak(
        streak.current, streak.longest, streak.last_active_date, streak.weekly_progress, today
    )


async def record_completion(
    db: AsyncSession, email: str, today: date
) -> Optional[StreakData]:
    """
    Apply one day of activity to the owner's stored streak.

    The write is guarded on the last_active_date we read, so two completions
    racing on the same stale row increment the streak at most once. Returns the
    stored streak afterwards, or None if the owner is unknown or the write
    failed (logged, never raised).
    """
    from motivatr.crud.users import crud_user

    try:
        async with db.begin_nested():
            for attempt in range(1, MAX_CAS_ATTEMPTS + 1):
                user = await crud_user.get_by_email(db, email, fresh=True)
                if user is None:
                    logger.warning("Streak update skipped: no user for owner %s", email)
                    return None

                before = StreakData.from_user(user)
                after = advance(before, today)
                if after == before:
                    return before

                won = await crud_user.compare_and_set_streak(
                    db,
                    email,
                    expected_last_active=before.last_active_date,
                    current=after.current,
                    longest=after.longest,
                    last_active_date=after.last_active_date,
                    weekly_progress=list(after.weekly_progress),
                )
                if won:
                    await db.refresh(user)
                    logger.info(
                        "Streak for %s: %d -> %d (longest %d)",
                        email, before.current, after.current, after.longest,
                    )
                    return after
                logger.debug("Streak CAS lost for %s (attempt %d), re-reading", email, attempt)

            logger.warning("Streak update for %s gave up after %d attempts", email, MAX_CAS_ATTEMPTS)
            return None
    except SQLAlchemyError as exc:
        logger.error("Streak persistence failed for %s: %s", email, exc)
        return None


async def overwrite_streak(db: AsyncSession, user: User, incoming: StreakData) -> StreakData:
    """
    Store a client-supplied streak snapshot.

    ``longest`` never decreases and always covers ``current``.
    """
    week = _normalize_week(incoming.weekly_progress)
    user.current_streak = incoming.current
    user.longest_streak = max(user.longest_streak, incoming.longest, incoming.current)
    user.last_active_date = incoming.last_active_date
    user.weekly_progress = list(week)
    db.add(user)
    await db.flush()
    return StreakData.from_user(user)
