"""Task board endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.database import get_db
from motivatr.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from motivatr.services import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    db: Annotated[AsyncSession, Depends(get_db)],
    owner: Annotated[Optional[str], Query(description="Only this user's tasks")] = None,
):
    return await task_service.list_tasks(db, owner)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await task_service.create_task(db, body)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await task_service.update_task(db, task_id, body)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await task_service.delete_task(db, task_id)
    return {"success": True}
