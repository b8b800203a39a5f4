"""Aggregates all v1 routers."""
from fastapi import APIRouter
from motivatr.api.v1.tasks import router as tasks_router
from motivatr.api.v1.users import router as users_router

router = APIRouter()
router.include_router(tasks_router)
router.include_router(users_router)
