"""Board operations: call the API, then re-fetch and adopt the server's view.

Every function takes the current ``AppState`` and returns the next one. A
failed call leaves the previous tasks in place and records a generic error.
"""
import logging
from typing import Any

from motivatr.client import state as actions
from motivatr.client.api_client import ClientError, MotivatrClient
from motivatr.client.state import AppState, Streak

logger = logging.getLogger(__name__)


def _owner(state: AppState) -> str | None:
    return state.user.get("email") if state.user else None


async def refresh(api: MotivatrClient, state: AppState) -> AppState:
    """Re-list tasks and re-fetch the streak for the signed-in user."""
    owner = _owner(state)
    try:
        tasks = await api.list_tasks(owner)
        state = actions.set_tasks(state, tasks)
        if owner:
            state = actions.set_streak(state, Streak.from_payload(await api.get_streak(owner)))
    except ClientError as exc:
        return actions.set_error(state, str(exc))
    return state


async def load_user(api: MotivatrClient, state: AppState, email: str, password: str) -> AppState:
    try:
        user = await api.login(email, password)
    except ClientError as exc:
        return actions.set_error(state, str(exc))
    return await refresh(api, actions.set_user(state, user))


def logout(state: AppState) -> AppState:
    return actions.set_user(state, None)


async def _mutate(api: MotivatrClient, state: AppState, call) -> AppState:
    try:
        await call
    except ClientError as exc:
        return actions.set_error(state, str(exc))
    return await refresh(api, state)


async def add_task(api: MotivatrClient, state: AppState, task: dict[str, Any]) -> AppState:
    payload = {"owner": _owner(state), **task}
    return await _mutate(api, state, api.create_task(payload))


async def edit_task(
    api: MotivatrClient, state: AppState, task_id: str, updates: dict[str, Any]
) -> AppState:
    return await _mutate(api, state, api.update_task(task_id, updates))


async def move_task(api: MotivatrClient, state: AppState, task_id: str, status: str) -> AppState:
    """Drag-and-drop: a status change; the server decides completedAt and the streak."""
    return await _mutate(api, state, api.update_task(task_id, {"status": status}))


async def remove_task(api: MotivatrClient, state: AppState, task_id: str) -> AppState:
    return await _mutate(api, state, api.delete_task(task_id))
