"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.crud import crud_user
from motivatr.database import get_db
from motivatr.models.user import User


async def get_user_or_404(
    email: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    user = await crud_user.get_by_email(db, email)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
