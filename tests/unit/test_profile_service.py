"""Unit tests for profile stats and derived achievements."""
from datetime import date
from types import SimpleNamespace

import pytest

from motivatr.models.task import TaskStatus
from motivatr.services.profile_service import achievements, task_stats
from motivatr.services.streak_service import StreakData


def _tasks(**counts):
    return [
        SimpleNamespace(status=TaskStatus(status))
        for status, n in counts.items()
        for _ in range(n)
    ]


def _streak(longest):
    return StreakData(current=1, longest=longest, last_active_date=date(2024, 6, 12), weekly_progress=(False,) * 7)


def test_stats_for_empty_board():
    stats = task_stats([])
    assert stats.total_tasks == 0
    assert stats.completion_rate == 0


def test_stats_counts_each_column():
    stats = task_stats(_tasks(ideas=1, todo=2, inprogress=3, completed=2))
    assert stats.total_tasks == 8
    assert (stats.idea_tasks, stats.todo_tasks, stats.in_progress_tasks, stats.completed_tasks) == (1, 2, 3, 2)
    assert stats.completion_rate == 25


def test_completion_rate_rounds_half_up():
    stats = task_stats(_tasks(completed=1, todo=7))  # 12.5%
    assert stats.completion_rate == 13


@pytest.mark.parametrize("counts,longest,expected", [
    ({"todo": 1}, 0, set()),
    ({"completed": 1, "todo": 1}, 1, {"first_task"}),
    ({"completed": 1, "todo": 1}, 7, {"first_task", "streak_master"}),
    ({"completed": 50}, 30, {"first_task", "streak_master", "task_warrior", "consistency_king", "productivity_pro"}),
    ({"completed": 9, "todo": 1}, 2, {"first_task", "productivity_pro"}),
])
def test_badges(counts, longest, expected):
    badges = achievements(task_stats(_tasks(**counts)), _streak(longest))
    assert {b.key for b in badges if b.earned} == expected
    assert len(badges) == 5
