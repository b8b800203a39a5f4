from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from motivatr.schemas.streak import StreakDataSchema


class TaskStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    todo_tasks: int
    idea_tasks: int
    completion_rate: int  # percent, rounded


class AchievementStatus(BaseModel):
    key: str
    name: str
    description: str
    icon: str
    earned: bool


class ProfileResponse(BaseModel):
    email: str
    name: str
    stats: TaskStats
    streak: StreakDataSchema
    achievements: list[AchievementStatus]
