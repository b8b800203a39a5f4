from datetime import date
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.crud.base import CRUDBase
from motivatr.models.user import User, empty_week
from motivatr.schemas.user import SignupRequest


class CRUDUser(CRUDBase[User, SignupRequest, SignupRequest]):
    async def get_by_email(
        self, db: AsyncSession, email: str, *, fresh: bool = False
    ) -> Optional[User]:
        """Look a user up by email. ``fresh`` re-reads columns already in the session."""
        query = select(User).where(User.email == email)
        if fresh:
            query = query.execution_options(populate_existing=True)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create(
        self, db: AsyncSession, *, obj_in: SignupRequest, password_hash: str
    ) -> User:
        db_obj = User(
            name=obj_in.name,
            email=str(obj_in.email),
            password_hash=password_hash,
            avatar=obj_in.avatar,
            current_streak=0,
            longest_streak=0,
            last_active_date=None,
            weekly_progress=empty_week(),
        )
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def compare_and_set_streak(
        self,
        db: AsyncSession,
        email: str,
        *,
        expected_last_active: Optional[date],
        current: int,
        longest: int,
        last_active_date: Optional[date],
        weekly_progress: list[bool],
    ) -> bool:
        """Atomically write streak fields if last_active_date is still the value we read.

        Returns True if this call won, False if a concurrent writer got there first.
        Loaded User objects are not synchronized; re-read or refresh them.
        """
        if expected_last_active is None:
            guard = User.last_active_date.is_(None)
        else:
            guard = User.last_active_date == expected_last_active
        result = await db.execute(
            update(User)
            .where(User.email == email, guard)
            .values(
                current_streak=current,
                longest_streak=longest,
                last_active_date=last_active_date,
                weekly_progress=list(weekly_progress),
            )
            .execution_options(synchronize_session=False)
        )
        await db.flush()
        return result.rowcount == 1


crud_user = CRUDUser(User)
