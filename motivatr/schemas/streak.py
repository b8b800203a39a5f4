from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class StreakDataSchema(BaseModel):
    """Wire form of a user's streak: {current, longest, lastActiveDate, weeklyProgress}."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current: int = Field(0, ge=0)
    longest: int = Field(0, ge=0)
    last_active_date: Optional[date] = None
    weekly_progress: list[bool] = Field(
        default_factory=lambda: [False] * 7, min_length=7, max_length=7
    )

    @field_validator("last_active_date", mode="before")
    @classmethod
    def accept_timestamps(cls, v: Any) -> Any:
        # Browsers send full ISO timestamps; only the calendar day matters
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class StreakSyncResponse(BaseModel):
    success: bool
    streak: StreakDataSchema
