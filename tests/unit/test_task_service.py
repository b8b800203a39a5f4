"""Task lifecycle rules: validation, completion transition, streak trigger."""
from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from motivatr.config import get_settings
from motivatr.crud.users import crud_user
from motivatr.errors import NotFoundError, ValidationError
from motivatr.models.task import ReminderStatus, TaskStatus
from motivatr.services import task_service

NOON = datetime(2024, 6, 12, 12, 0)


def _task(**overrides):
    data = {"title": "Write report", "status": "todo", "owner": "a@b.com"}
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_create_assigns_id_and_defaults(db):
    task = await task_service.create_task(db, _task(), now=NOON)

    assert task.id
    assert task.created_at == NOON
    assert task.priority.value == "low"
    assert task.completed_at is None
    assert task.reminded is False
    assert task.reminder_status == ReminderStatus.pending


@pytest.mark.asyncio
@pytest.mark.parametrize("bad", [
    {"status": "done"},
    {"priority": "urgent"},
    {"title": ""},
    {"title": "   "},
])
async def test_create_rejects_invalid_fields(db, bad):
    with pytest.raises(ValidationError):
        await task_service.create_task(db, _task(**bad))


@pytest.mark.asyncio
async def test_create_requires_owner(db):
    data = _task()
    del data["owner"]
    with pytest.raises(ValidationError):
        await task_service.create_task(db, data)


@pytest.mark.asyncio
async def test_tags_are_deduplicated(db):
    task = await task_service.create_task(db, _task(tags=["work", "q2", "work"]))
    assert task.tags == ["work", "q2"]


@pytest.mark.asyncio
async def test_update_merges_partial_fields(db):
    task = await task_service.create_task(db, _task(description="draft"), now=NOON)

    updated = await task_service.update_task(db, task.id, {"priority": "high"})

    assert updated.priority.value == "high"
    assert updated.description == "draft"
    assert updated.title == "Write report"


@pytest.mark.asyncio
async def test_update_unknown_id_raises(db):
    with pytest.raises(NotFoundError):
        await task_service.update_task(db, "missing", {"status": "todo"})


@pytest.mark.asyncio
async def test_update_rejects_null_status(db):
    task = await task_service.create_task(db, _task())
    with pytest.raises(ValidationError):
        await task_service.update_task(db, task.id, {"status": None})


@pytest.mark.asyncio
async def test_completion_sets_completed_at_and_advances_streak(db, user):
    task = await task_service.create_task(db, _task(), now=NOON)

    done = await task_service.update_task(
        db, task.id, {"status": "completed"}, now=NOON + timedelta(minutes=5)
    )

    assert done.status == TaskStatus.completed
    assert done.completed_at == NOON + timedelta(minutes=5)
    assert done.completed_at >= done.created_at
    stored = await crud_user.get_by_email(db, user.email, fresh=True)
    assert stored.current_streak == 1
    assert stored.last_active_date == NOON.date()


@pytest.mark.asyncio
async def test_streak_engine_runs_once_per_owner_per_day(db, user):
    first = await task_service.create_task(db, _task(), now=NOON)
    second = await task_service.create_task(db, _task(title="Email boss"), now=NOON)

    with patch(
        "motivatr.services.task_service.streak_service.record_completion",
        new_callable=AsyncMock,
    ) as record:
        await task_service.update_task(db, first.id, {"status": "completed"}, now=NOON)
        await task_service.update_task(
            db, second.id, {"status": "completed"}, now=NOON + timedelta(hours=1)
        )

    record.assert_awaited_once_with(db, "a@b.com", NOON.date())


@pytest.mark.asyncio
async def test_yesterdays_completion_does_not_block_today(db, user):
    old = await task_service.create_task(db, _task(), now=NOON - timedelta(days=1))
    await task_service.update_task(
        db, old.id, {"status": "completed"}, now=NOON - timedelta(days=1)
    )
    task = await task_service.create_task(db, _task(title="Next"), now=NOON)

    await task_service.update_task(db, task.id, {"status": "completed"}, now=NOON)

    stored = await crud_user.get_by_email(db, user.email, fresh=True)
    assert stored.current_streak == 2


@pytest.mark.asyncio
async def test_completed_at_is_sticky(db, user):
    task = await task_service.create_task(db, _task(), now=NOON)
    await task_service.update_task(db, task.id, {"status": "completed"}, now=NOON)

    reopened = await task_service.update_task(db, task.id, {"status": "inprogress"}, now=NOON)

    assert reopened.status == TaskStatus.inprogress
    assert reopened.completed_at == NOON


@pytest.mark.asyncio
async def test_other_owners_completions_are_ignored(db, user):
    other = await task_service.create_task(db, _task(owner="z@b.com"), now=NOON)
    await task_service.update_task(db, other.id, {"status": "completed"}, now=NOON)
    mine = await task_service.create_task(db, _task(), now=NOON)

    await task_service.update_task(db, mine.id, {"status": "completed"}, now=NOON)

    stored = await crud_user.get_by_email(db, user.email, fresh=True)
    assert stored.current_streak == 1


@pytest.mark.asyncio
async def test_completion_for_unknown_owner_still_succeeds(db):
    task = await task_service.create_task(db, _task(owner="ghost@b.com"), now=NOON)
    done = await task_service.update_task(db, task.id, {"status": "completed"}, now=NOON)
    assert done.completed_at == NOON


@pytest.mark.asyncio
async def test_create_as_completed_counts_as_completion(db, user):
    task = await task_service.create_task(db, _task(status="completed"), now=NOON)

    assert task.completed_at == NOON
    stored = await crud_user.get_by_email(db, user.email, fresh=True)
    assert stored.current_streak == 1


@pytest.mark.asyncio
async def test_changing_due_date_rearms_reminder(db):
    task = await task_service.create_task(db, _task(dueDate="2024-06-12T15:00:00Z"), now=NOON)
    await task_service.update_task(db, task.id, {"reminded": True})
    assert task.reminder_status == ReminderStatus.sent

    moved = await task_service.update_task(db, task.id, {"dueDate": "2024-06-13T15:00:00Z"})

    assert moved.due_date == datetime(2024, 6, 13, 15, 0)
    assert moved.reminded is False
    assert moved.reminder_status == ReminderStatus.pending


@pytest.mark.asyncio
async def test_delete_then_delete_again(db):
    task = await task_service.create_task(db, _task())

    await task_service.delete_task(db, task.id)

    assert await task_service.list_tasks(db, "a@b.com") == []
    with pytest.raises(NotFoundError):
        await task_service.delete_task(db, task.id)


@pytest.mark.asyncio
async def test_list_filters_by_owner(db):
    await task_service.create_task(db, _task(), now=NOON)
    await task_service.create_task(db, _task(owner="z@b.com"), now=NOON + timedelta(seconds=1))

    assert [t.owner for t in await task_service.list_tasks(db, "a@b.com")] == ["a@b.com"]
    assert len(await task_service.list_tasks(db)) == 2


@pytest.mark.asyncio
async def test_completions_either_side_of_local_midnight(db, user, monkeypatch):
    monkeypatch.setattr(get_settings(), "APP_TIMEZONE", "America/New_York")
    late = await task_service.create_task(db, _task(title="Late"), now=NOON - timedelta(days=1))
    early = await task_service.create_task(db, _task(title="Early"), now=NOON - timedelta(days=1))

    # 23:00 on the 11th and 01:00 on the 12th in New York
    await task_service.update_task(
        db, late.id, {"status": "completed"}, now=datetime(2024, 6, 12, 3, 0)
    )
    await task_service.update_task(
        db, early.id, {"status": "completed"}, now=datetime(2024, 6, 12, 5, 0)
    )

    stored = await crud_user.get_by_email(db, user.email, fresh=True)
    assert stored.current_streak == 2
    assert stored.last_active_date == date(2024, 6, 12)


@pytest.mark.asyncio
async def test_same_local_day_across_utc_midnight_counts_once(db, user, monkeypatch):
    monkeypatch.setattr(get_settings(), "APP_TIMEZONE", "America/New_York")
    first = await task_service.create_task(db, _task(title="First"), now=NOON)
    second = await task_service.create_task(db, _task(title="Second"), now=NOON)

    # 19:00 and 22:00 on the 12th in New York; the second is already the 13th in UTC
    await task_service.update_task(
        db, first.id, {"status": "completed"}, now=datetime(2024, 6, 12, 23, 0)
    )
    await task_service.update_task(
        db, second.id, {"status": "completed"}, now=datetime(2024, 6, 13, 2, 0)
    )

    stored = await crud_user.get_by_email(db, user.email, fresh=True)
    assert stored.current_streak == 1
    assert stored.last_active_date == date(2024, 6, 12)
