from datetime import date
from typing import Optional

from sqlalchemy import JSON, Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from motivatr.models.base import Base, TimestampMixin


def empty_week() -> list[bool]:
    return [False] * 7


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # NULL until the first completed task; only the streak engine writes it
    last_active_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    weekly_progress: Mapped[list[bool]] = mapped_column(
        JSON, nullable=False, default=empty_week
    )  # 0=Sun, 6=Sat
