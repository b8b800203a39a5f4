"""Client state actions and board filters."""
from datetime import date, datetime, timedelta, timezone

import pytest

from motivatr.client import state as actions
from motivatr.client.state import (
    AppState,
    DateMarker,
    Streak,
    TaskFilter,
    View,
    date_marker,
    filtered_tasks,
    tasks_by_status,
    tasks_for_date,
)

# Wednesday; the week (Sunday start) began on 2024-06-09
NOW = datetime(2024, 6, 12, 10, 30)


def _task(title, due=None, **extra):
    return {"id": title, "title": title, "description": "", "tags": [], "status": "todo", "dueDate": due, **extra}


TASKS = [
    _task("Morning run", "2024-06-12T07:00:00"),
    _task("Tax return", "2024-06-20T09:00:00Z", tags=["Finance"]),
    _task("Dentist", "2024-06-10T15:00:00"),
    _task("Call mom", "2024-06-03T12:00:00", description="about the trip"),
    _task("Read book"),
    _task("Old thing", "2024-05-30T12:00:00"),
]


def _state(**kwargs):
    return AppState(tasks=tuple(TASKS), **kwargs)


def test_actions_return_new_state():
    before = AppState()
    after = actions.set_search_query(before, "run")
    assert before.search_query == ""
    assert after.search_query == "run"
    assert after is not before


def test_logout_clears_user_data():
    state = AppState(user={"email": "a@b.com"}, tasks=tuple(TASKS), streak=Streak(current=3), active_view=View.profile)
    out = actions.set_user(state, None)
    assert out.is_authenticated is False
    assert out.tasks == ()
    assert out.streak == Streak()
    assert out.active_view == View.dashboard


def test_set_filter_accepts_strings():
    assert actions.set_selected_filter(AppState(), "week").selected_filter == TaskFilter.week
    with pytest.raises(ValueError):
        actions.set_selected_filter(AppState(), "year")


@pytest.mark.parametrize("query,expected", [
    ("RUN", ["Morning run"]),
    ("finance", ["Tax return"]),
    ("trip", ["Call mom"]),
    ("zzz", []),
])
def test_search_matches_title_description_tags(query, expected):
    state = _state(search_query=query)
    assert [t["title"] for t in filtered_tasks(state, NOW)] == expected


@pytest.mark.parametrize("selected,expected", [
    (TaskFilter.all, ["Morning run", "Tax return", "Dentist", "Call mom", "Read book", "Old thing"]),
    (TaskFilter.today, ["Morning run"]),
    (TaskFilter.week, ["Morning run", "Tax return", "Dentist"]),
    (TaskFilter.month, ["Morning run", "Tax return", "Dentist", "Call mom"]),
])
def test_date_filters(selected, expected):
    state = _state(selected_filter=selected)
    assert [t["title"] for t in filtered_tasks(state, NOW)] == expected


def test_streak_from_payload_pads_week():
    streak = Streak.from_payload({"current": 2, "longest": 4, "weeklyProgress": [True, False]})
    assert streak.current == 2
    assert streak.weekly_progress == (True,) + (False,) * 6


def test_tasks_by_status_columns():
    state = AppState(tasks=(_task("a"), _task("b", status="completed")))
    columns = tasks_by_status(state)
    assert list(columns) == ["ideas", "todo", "inprogress", "completed"]
    assert [t["title"] for t in columns["completed"]] == ["b"]


EDT = timezone(timedelta(hours=-4))


@pytest.mark.parametrize("selected", [TaskFilter.today, TaskFilter.week, TaskFilter.month])
def test_utc_due_date_lands_on_local_day(selected):
    # 23:30 on the 12th in New York, as the API sends it
    state = AppState(tasks=(_task("Late call", "2024-06-13T03:30:00Z"),), selected_filter=selected)
    evening = datetime(2024, 6, 12, 20, 0, tzinfo=EDT)
    assert [t["title"] for t in filtered_tasks(state, evening)] == ["Late call"]


def test_utc_due_date_after_local_midnight_is_tomorrow():
    state = AppState(tasks=(_task("Early call", "2024-06-13T04:30:00Z"),), selected_filter=TaskFilter.today)
    evening = datetime(2024, 6, 12, 20, 0, tzinfo=EDT)
    assert filtered_tasks(state, evening) == []


CALENDAR = (
    _task("Gym", "2024-06-12T07:00:00", priority="low"),
    _task("Launch", "2024-06-12T16:00:00", priority="high", status="completed"),
    _task("Invoice", "2024-06-14T09:00:00", status="completed"),
    _task("Groceries", "2024-06-15T18:00:00"),
    _task("Someday"),
)


def test_tasks_for_date_matches_calendar_day():
    state = AppState(tasks=CALENDAR)
    assert [t["title"] for t in tasks_for_date(state, date(2024, 6, 12))] == ["Gym", "Launch"]
    assert tasks_for_date(state, date(2024, 6, 13)) == []


def test_tasks_for_date_uses_given_zone():
    state = AppState(tasks=(_task("Late call", "2024-06-13T03:30:00Z"),))
    assert [t["title"] for t in tasks_for_date(state, date(2024, 6, 12), EDT)] == ["Late call"]
    assert tasks_for_date(state, date(2024, 6, 13), EDT) == []


@pytest.mark.parametrize("day,expected", [
    (date(2024, 6, 12), DateMarker.high_priority),
    (date(2024, 6, 14), DateMarker.completed),
    (date(2024, 6, 15), DateMarker.has_tasks),
    (date(2024, 6, 16), None),
])
def test_date_marker_precedence(day, expected):
    assert date_marker(AppState(tasks=CALENDAR), day) == expected
