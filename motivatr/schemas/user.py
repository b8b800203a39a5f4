from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer
from pydantic.alias_generators import to_camel

from motivatr.schemas.task import as_utc


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    avatar: Optional[str] = Field(None, max_length=500)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    email: str
    name: str
    avatar: Optional[str]
    current_streak: int
    longest_streak: int
    last_active_date: Optional[date]
    weekly_progress: list[bool]
    created_at: datetime

    @field_serializer("created_at")
    def serialize_utc(self, v: datetime) -> datetime:
        return as_utc(v)


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
