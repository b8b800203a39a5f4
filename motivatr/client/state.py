"""Client-side application state.

``AppState`` is an immutable value; every action returns a new state. The view
layer owns the current value and replaces it after each action.
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Any, Optional


class TaskFilter(str, Enum):
    all = "all"
    today = "today"
    week = "week"
    month = "month"


class DateMarker(str, Enum):
    high_priority = "high-priority-date"
    completed = "completed-date"
    has_tasks = "has-tasks-date"


class View(str, Enum):
    dashboard = "dashboard"
    calendar = "calendar"
    profile = "profile"


@dataclass(frozen=True)
class Streak:
    current: int = 0
    longest: int = 0
    last_active_date: Optional[str] = None
    weekly_progress: tuple[bool, ...] = (False,) * 7

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Streak":
        week = list(payload.get("weeklyProgress") or [])[:7]
        return cls(
            current=payload.get("current", 0),
            longest=payload.get("longest", 0),
            last_active_date=payload.get("lastActiveDate"),
            weekly_progress=tuple(bool(x) for x in week + [False] * (7 - len(week))),
        )


@dataclass(frozen=True)
class AppState:
    user: Optional[dict[str, Any]] = None
    tasks: tuple[dict[str, Any], ...] = ()
    search_query: str = ""
    selected_filter: TaskFilter = TaskFilter.all
    streak: Streak = field(default_factory=Streak)
    active_view: View = View.dashboard
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def set_user(state: AppState, user: Optional[dict[str, Any]]) -> AppState:
    if user is None:
        return replace(state, user=None, tasks=(), streak=Streak(), active_view=View.dashboard)
    return replace(state, user=user)


def set_tasks(state: AppState, tasks: list[dict[str, Any]]) -> AppState:
    return replace(state, tasks=tuple(tasks), error=None)


def set_streak(state: AppState, streak: Streak) -> AppState:
    return replace(state, streak=streak)


def set_search_query(state: AppState, query: str) -> AppState:
    return replace(state, search_query=query)


def set_selected_filter(state: AppState, selected: TaskFilter | str) -> AppState:
    return replace(state, selected_filter=TaskFilter(selected))


def set_active_view(state: AppState, view: View | str) -> AppState:
    return replace(state, active_view=View(view))


def set_error(state: AppState, message: Optional[str]) -> AppState:
    return replace(state, error=message)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


def _parse_due(task: dict[str, Any], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """dueDate as a naive wall-clock time in ``tz`` (system local when None).

    The server sends UTC with an offset; naive values are taken as already local.
    """
    raw = task.get("dueDate")
    if not raw:
        return None
    if isinstance(raw, datetime):
        due = raw
    else:
        due = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    if due.tzinfo is not None:
        due = due.astimezone(tz)
    return due.replace(tzinfo=None)


def _matches(task: dict[str, Any], needle: str) -> bool:
    return (
        needle in (task.get("title") or "").lower()
        or needle in (task.get("description") or "").lower()
        or any(needle in tag.lower() for tag in task.get("tags") or [])
    )


def filtered_tasks(state: AppState, now: Optional[datetime] = None) -> list[dict[str, Any]]:
    """Apply the search box and the date filter to the fetched task list.

    Date filters compare against dueDate; tasks without one only show under "all".
    Weeks start on Sunday. An aware ``now`` sets the zone the day boundaries are
    drawn in.
    """
    now = now or datetime.now()
    tz = now.tzinfo
    now = now.replace(tzinfo=None)
    tasks = list(state.tasks)

    if state.search_query:
        needle = state.search_query.lower()
        tasks = [t for t in tasks if _matches(t, needle)]

    if state.selected_filter == TaskFilter.all:
        return tasks

    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if state.selected_filter == TaskFilter.today:
        start, end = today, today + timedelta(days=1)
    elif state.selected_filter == TaskFilter.week:
        start, end = today - timedelta(days=(today.weekday() + 1) % 7), None
    else:
        start, end = today.replace(day=1), None

    result = []
    for task in tasks:
        due = _parse_due(task, tz)
        if due is None or due < start:
            continue
        if end is not None and due >= end:
            continue
        result.append(task)
    return result


def tasks_by_status(state: AppState) -> dict[str, list[dict[str, Any]]]:
    """Board columns in display order."""
    columns: dict[str, list[dict[str, Any]]] = {
        "ideas": [], "todo": [], "inprogress": [], "completed": [],
    }
    for task in state.tasks:
        columns.setdefault(task.get("status", "todo"), []).append(task)
    return columns


def tasks_for_date(
    state: AppState, day: date, tz: Optional[tzinfo] = None
) -> list[dict[str, Any]]:
    """Calendar cell contents: tasks due on ``day``."""
    result = []
    for task in state.tasks:
        due = _parse_due(task, tz)
        if due is not None and due.date() == day:
            result.append(task)
    return result


def date_marker(
    state: AppState, day: date, tz: Optional[tzinfo] = None
) -> Optional[DateMarker]:
    """Highlight for a calendar cell; high priority wins over completed."""
    tasks = tasks_for_date(state, day, tz)
    if not tasks:
        return None
    if any(t.get("priority") == "high" for t in tasks):
        return DateMarker.high_priority
    if any(t.get("status") == "completed" for t in tasks):
        return DateMarker.completed
    return DateMarker.has_tasks
