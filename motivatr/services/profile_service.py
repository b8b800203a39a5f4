"""Profile statistics and achievement badges."""

import math
from typing import NamedTuple, Sequence

from motivatr.models.task import Task, TaskStatus
from motivatr.services.streak_service import StreakData


# key -> (name, description, icon)
BADGE_CATALOGUE = {
    "first_task": ("First Task", "Completed your first task", "🌟"),
    "streak_master": ("Streak Master", "Maintained a 7-day streak", "🔥"),
    "task_warrior": ("Task Warrior", "Completed 50 tasks", "⚔️"),
    "consistency_king": ("Consistency King", "Maintained a 30-day streak", "👑"),
    "productivity_pro": ("Productivity Pro", "90% completion rate", "🏆"),
}


class TaskStatsResult(NamedTuple):
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    todo_tasks: int
    idea_tasks: int
    completion_rate: int


class Badge(NamedTuple):
    key: str
    name: str
    description: str
    icon: str
    earned: bool


def task_stats(tasks: Sequence[Task]) -> TaskStatsResult:
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1
    total = len(tasks)
    completed = counts[TaskStatus.completed]
    # Half-up, as the board displays it
    rate = math.floor(completed * 100 / total + 0.5) if total else 0
    return TaskStatsResult(
        total_tasks=total,
        completed_tasks=completed,
        in_progress_tasks=counts[TaskStatus.inprogress],
        todo_tasks=counts[TaskStatus.todo],
        idea_tasks=counts[TaskStatus.ideas],
        completion_rate=rate,
    )


def achievements(stats: TaskStatsResult, streak: StreakData) -> list[Badge]:
    """Badges are derived on every read; nothing is persisted."""
    earned = {
        "first_task": stats.completed_tasks >= 1,
        "streak_master": streak.longest >= 7,
        "task_warrior": stats.completed_tasks >= 50,
        "consistency_king": streak.longest >= 30,
        "productivity_pro": stats.completion_rate >= 90,
    }
    return [
        Badge(key, name, description, icon, earned[key])
        for key, (name, description, icon) in BADGE_CATALOGUE.items()
    ]
